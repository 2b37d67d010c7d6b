# budget_analyzer/core/metrics.py
"""Budget metrics computed from a categorized ledger.

Amounts follow the ledger's sign convention: positive values are income,
negative values are expenses. Every total reported here for expenses is
an absolute value.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Sequence

from budget_analyzer.core.categorizer import UNCATEGORIZED
from budget_analyzer.core.models import (
    BudgetMetrics,
    CategorizedTransaction,
    CategoryBucket,
    CategoryTrend,
    EmergencyFund,
    IrregularExpense,
    MonthlyAverages,
    MonthSummary,
    Recommendation,
    SpendingPatterns,
    Summary,
)

EARLY_MONTH = "Early Month"
MID_MONTH = "Mid Month"
LATE_MONTH = "Late Month"

DEBT_KEYWORDS = ("loan", "credit", "mortgage")


def _category(tx) -> str:
    return tx.category or UNCATEGORIZED


def total_income(transactions: Sequence[CategorizedTransaction]) -> float:
    return sum(tx.amount for tx in transactions if tx.amount > 0)


def total_expenses(transactions: Sequence[CategorizedTransaction]) -> float:
    return sum(abs(tx.amount) for tx in transactions if tx.amount < 0)


def savings_rate(income: float, expenses: float) -> float:
    return (income - expenses) / income * 100 if income > 0 else 0.0


def summarize(transactions: Sequence[CategorizedTransaction]) -> Summary:
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return Summary(
        total_income=income,
        total_expenses=expenses,
        net_savings=income - expenses,
        savings_rate=savings_rate(income, expenses),
        transaction_count=len(transactions),
    )


def category_breakdown(transactions: Sequence[CategorizedTransaction]) -> Dict[str, CategoryBucket]:
    buckets: Dict[str, CategoryBucket] = {}
    for tx in transactions:
        bucket = buckets.setdefault(_category(tx), CategoryBucket())
        bucket.total += abs(tx.amount)
        bucket.count += 1
        if tx.amount < 0:
            bucket.expenses += abs(tx.amount)
        else:
            bucket.income += tx.amount
    return buckets


def monthly_averages(transactions: Sequence[CategorizedTransaction]) -> Optional[MonthlyAverages]:
    """Average income, expenses and savings over the calendar months present."""
    monthly: Dict[str, Dict[str, float]] = {}
    for tx in transactions:
        key = tx.date[:7]
        month = monthly.setdefault(key, {"income": 0.0, "expenses": 0.0, "count": 0})
        month["income"] += max(tx.amount, 0)
        month["expenses"] += abs(min(tx.amount, 0))
        month["count"] += 1

    if not monthly:
        return None

    months = [
        MonthSummary(month=key, income=m["income"], expenses=m["expenses"], count=int(m["count"]))
        for key, m in sorted(monthly.items())
    ]
    avg_income = sum(m.income for m in months) / len(months)
    avg_expenses = sum(m.expenses for m in months) / len(months)
    return MonthlyAverages(
        average_monthly_income=avg_income,
        average_monthly_expenses=avg_expenses,
        average_monthly_savings=avg_income - avg_expenses,
        months=months,
    )


def _time_of_month(day: int) -> str:
    if day <= 10:
        return EARLY_MONTH
    if day <= 20:
        return MID_MONTH
    return LATE_MONTH


def category_trends(transactions: Sequence[CategorizedTransaction]) -> Dict[str, CategoryTrend]:
    totals: Dict[str, List[float]] = {}
    for tx in transactions:
        if tx.amount >= 0:
            continue
        totals.setdefault(_category(tx), []).append(abs(tx.amount))
    return {
        cat: CategoryTrend(total=sum(amounts), count=len(amounts), average=sum(amounts) / len(amounts))
        for cat, amounts in totals.items()
    }


def spending_patterns(transactions: Sequence[CategorizedTransaction]) -> SpendingPatterns:
    day_of_week: Dict[str, float] = {}
    time_of_month: Dict[str, float] = {}
    for tx in transactions:
        if tx.amount >= 0:
            continue
        d = date.fromisoformat(tx.date)
        amount = abs(tx.amount)
        weekday = d.strftime("%A")
        day_of_week[weekday] = day_of_week.get(weekday, 0.0) + amount
        bucket = _time_of_month(d.day)
        time_of_month[bucket] = time_of_month.get(bucket, 0.0) + amount

    trends = category_trends(transactions)
    irregular = []
    for cat, trend in trends.items():
        for tx in transactions:
            if tx.amount >= 0 or _category(tx) != cat:
                continue
            amount = abs(tx.amount)
            if amount > trend.average * 2:
                irregular.append(IrregularExpense(
                    category=cat,
                    amount=amount,
                    date=tx.date,
                    description=tx.description,
                    average_for_category=trend.average,
                ))

    return SpendingPatterns(
        day_of_week=day_of_week,
        time_of_month=time_of_month,
        category_trends=trends,
        irregular_expenses=irregular,
    )


def budget_health_score(income: float, expenses: float, rate: float) -> int:
    """Score the budget from 0 (alarming) to 100 (healthy)."""
    score = 100

    if expenses > income:
        score -= 30
    elif expenses > income * 0.9:
        score -= 15
    elif expenses > income * 0.8:
        score -= 5

    if rate >= 20:
        score += 20
    elif rate >= 15:
        score += 15
    elif rate >= 10:
        score += 10
    elif rate >= 5:
        score += 5

    if rate < 0:
        score -= 20
    elif rate < 5:
        score -= 10

    return max(0, min(100, score))


def budget_recommendations(income: float, expenses: float, rate: float) -> List[Recommendation]:
    recommendations = []

    if expenses > income:
        recommendations.append(Recommendation(
            priority="high",
            type="critical",
            title="Emergency: Spending Exceeds Income",
            description="Your expenses are higher than your income. Immediate action is required.",
            actions=[
                "Review and cut non-essential expenses",
                "Consider additional income sources",
                "Create a strict budget plan",
            ],
        ))

    if rate < 10:
        recommendations.append(Recommendation(
            priority="medium",
            type="warning",
            title="Low Savings Rate",
            description=f"Your savings rate is {rate:.1f}%, below the recommended 10-20%.",
            actions=[
                "Aim to save at least 10% of income",
                "Set up automatic savings transfers",
                "Review recurring expenses",
            ],
        ))

    if expenses > income * 0.8:
        recommendations.append(Recommendation(
            priority="medium",
            type="info",
            title="High Expense Ratio",
            description="Your expenses represent a high percentage of income, limiting savings potential.",
            actions=[
                "Review the 50/30/20 budget rule",
                "Identify areas for cost reduction",
                "Consider lifestyle adjustments",
            ],
        ))

    if rate >= 20:
        recommendations.append(Recommendation(
            priority="low",
            type="success",
            title="Excellent Savings Rate",
            description=f"Great job! Your {rate:.1f}% savings rate is above the recommended 20%.",
            actions=[
                "Consider investment opportunities",
                "Build emergency fund",
                "Plan for long-term goals",
            ],
        ))

    return recommendations


def calculate_budget_metrics(transactions: Sequence[CategorizedTransaction]) -> Optional[BudgetMetrics]:
    """Compute every budget metric for a ledger; ``None`` when the ledger is empty."""
    if not transactions:
        return None

    transactions = list(transactions)
    summary = summarize(transactions)
    return BudgetMetrics(
        summary=summary,
        category_breakdown=category_breakdown(transactions),
        monthly_averages=monthly_averages(transactions),
        spending_patterns=spending_patterns(transactions),
        budget_health_score=budget_health_score(
            summary.total_income, summary.total_expenses, summary.savings_rate
        ),
        recommendations=budget_recommendations(
            summary.total_income, summary.total_expenses, summary.savings_rate
        ),
    )


def calculate_debt_to_income_ratio(transactions: Sequence[CategorizedTransaction]) -> float:
    """Estimated debt payments as a percentage of income.

    Without account data, debt is approximated by expenses whose
    description mentions a loan, credit or mortgage.
    """
    income = total_income(transactions)
    debt = sum(
        abs(tx.amount)
        for tx in transactions
        if tx.amount < 0 and any(kw in tx.description.lower() for kw in DEBT_KEYWORDS)
    )
    return debt / income * 100 if income > 0 else 0.0


def calculate_emergency_fund_adequacy(transactions: Sequence[CategorizedTransaction]) -> EmergencyFund:
    expenses = total_expenses(transactions)
    savings = total_income(transactions) - expenses
    months_covered = savings / expenses if expenses > 0 else 0.0

    if months_covered >= 6:
        adequacy = "excellent"
    elif months_covered >= 3:
        adequacy = "good"
    elif months_covered >= 1:
        adequacy = "fair"
    else:
        adequacy = "poor"

    return EmergencyFund(
        monthly_expenses=expenses,
        total_savings=savings,
        months_covered=months_covered,
        adequacy=adequacy,
    )
