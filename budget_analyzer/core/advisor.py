# budget_analyzer/core/advisor.py
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

import anyio

from budget_analyzer.core.categorizer import UNCATEGORIZED
from budget_analyzer.core.metrics import savings_rate, total_expenses, total_income
from budget_analyzer.core.models import (
    AdvisorReport,
    BudgetMetrics,
    BudgetRuleEntry,
    CategorizedTransaction,
    CategorySpend,
    Insight,
    Opportunity,
    RiskArea,
    SavingsAnalysis,
    Suggestion,
    Summary,
)

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEYWORDS = ('netflix', 'spotify', 'hulu', 'amazon prime', 'youtube', 'subscription', 'monthly')
DINING_OUT_KEYWORDS = ('restaurant', 'cafe', 'dining')
GROCERY_KEYWORDS = ('grocery', 'supermarket', 'market')

FOOD = 'Food & Dining'
TRANSPORTATION = 'Transportation'
ENTERTAINMENT = 'Entertainment'


def _spend_in(transactions, category: str) -> float:
    return sum(abs(t.amount) for t in transactions if t.category == category and t.amount < 0)


def _spend_matching(transactions, keywords, category: Optional[str] = None) -> float:
    total = 0.0
    for t in transactions:
        if t.amount >= 0 or (category is not None and t.category != category):
            continue
        desc = (t.description or '').lower()
        if any(kw in desc for kw in keywords):
            total += abs(t.amount)
    return total


def budget_rule(income: float, expenses: float) -> List[BudgetRuleEntry]:
    """Compare spending with the 50/30/20 split of income."""
    return [
        BudgetRuleEntry(
            name='Needs (50%)',
            target=income * 0.5,
            actual=min(expenses, income * 0.5),
            percentage=50,
            status='good' if expenses <= income * 0.5 else 'danger',
        ),
        BudgetRuleEntry(
            name='Wants (30%)',
            target=income * 0.3,
            actual=max(0.0, expenses - income * 0.5),
            percentage=30,
            status='good' if expenses <= income * 0.8 else 'warning',
        ),
        BudgetRuleEntry(
            name='Savings (20%)',
            target=income * 0.2,
            actual=max(0.0, income - expenses),
            percentage=20,
            status='good' if income - expenses >= income * 0.2 else 'warning',
        ),
    ]


def smart_suggestions(transactions, income: float, expenses: float) -> List[Suggestion]:
    suggestions = []

    food = _spend_in(transactions, FOOD)
    if food > income * 0.15:
        suggestions.append(Suggestion(
            title='Optimize Food Spending',
            description='Your food spending is above the recommended 15% of income. '
                        'Consider meal planning and reducing dining out.',
            potential_savings=food * 0.2,
        ))

    transport = _spend_in(transactions, TRANSPORTATION)
    if transport > income * 0.1:
        suggestions.append(Suggestion(
            title='Review Transportation Costs',
            description='Transportation costs are high. Consider carpooling, public transit, '
                        'or reviewing insurance rates.',
            potential_savings=transport * 0.15,
        ))

    entertainment = _spend_in(transactions, ENTERTAINMENT)
    if entertainment > income * 0.1:
        suggestions.append(Suggestion(
            title='Balance Entertainment Budget',
            description='Entertainment spending could be optimized. Look for free activities '
                        'and bundle subscriptions.',
            potential_savings=entertainment * 0.25,
        ))

    if expenses > income * 0.8:
        suggestions.append(Suggestion(
            title='Emergency Fund Priority',
            description='Focus on building an emergency fund. Aim to save 3-6 months of expenses.',
            potential_savings=income * 0.1,
        ))

    if not suggestions:
        suggestions.append(Suggestion(
            title='Maintain Good Habits',
            description='Your spending is well-balanced! Keep up the good work and consider '
                        'increasing your savings rate.',
            potential_savings=income * 0.05,
        ))

    return suggestions


def risk_areas(transactions, income: float) -> List[RiskArea]:
    risks = []

    by_category: Dict[str, float] = {}
    for t in transactions:
        if t.amount < 0:
            cat = t.category or UNCATEGORIZED
            by_category[cat] = by_category.get(cat, 0.0) + abs(t.amount)

    for cat, amount in by_category.items():
        if amount > income * 0.2:
            if income > 0:
                share = f'This category represents {amount / income * 100:.1f}% of your income'
            else:
                share = 'This category has spending but no recorded income to cover it'
            risks.append(RiskArea(
                title=f'High {cat} Spending',
                description=f'{share}, which is above recommended levels.',
                current_amount=amount,
                recommended_amount=income * 0.15,
            ))

    if sum(1 for t in transactions if t.amount > 0) < 2:
        risks.append(RiskArea(
            title='Irregular Income',
            description='You have limited income transactions. Consider diversifying income '
                        'sources for financial stability.',
            current_amount=0.0,
            recommended_amount=0.0,
        ))

    return risks


def savings_opportunities(transactions, expenses: float) -> List[Opportunity]:
    opportunities = []

    subscriptions = _spend_matching(transactions, SUBSCRIPTION_KEYWORDS)
    if subscriptions > 50:
        opportunities.append(Opportunity(
            title='Review Subscriptions',
            description='Multiple subscriptions detected. Consider bundling services or '
                        'canceling unused ones.',
            estimated_savings=subscriptions * 0.3,
        ))

    dining_out = _spend_matching(transactions, DINING_OUT_KEYWORDS, FOOD)
    groceries = _spend_matching(transactions, GROCERY_KEYWORDS, FOOD)
    if dining_out > groceries * 0.8:
        opportunities.append(Opportunity(
            title='Optimize Food Budget',
            description='Dining out costs are high relative to groceries. Meal planning could '
                        'save significantly.',
            estimated_savings=dining_out * 0.4,
        ))

    if expenses > 2000:
        opportunities.append(Opportunity(
            title='Bulk Purchasing',
            description='Consider bulk purchases for frequently used items to reduce per-unit costs.',
            estimated_savings=expenses * 0.05,
        ))

    return opportunities


def generate_recommendations(
    transactions: Sequence[CategorizedTransaction],
    metrics: Optional[BudgetMetrics] = None,
) -> AdvisorReport:
    """Build the 50/30/20 breakdown, suggestions, risks and opportunities.

    Totals come from ``metrics`` when given, otherwise from the ledger.
    """
    transactions = list(transactions)
    if metrics is not None:
        income = metrics.summary.total_income
        expenses = metrics.summary.total_expenses
    else:
        income = total_income(transactions)
        expenses = total_expenses(transactions)

    report = AdvisorReport(
        budget_rule=budget_rule(income, expenses),
        suggestions=smart_suggestions(transactions, income, expenses),
        risk_areas=risk_areas(transactions, income),
        opportunities=savings_opportunities(transactions, expenses),
        summary=Summary(
            total_income=income,
            total_expenses=expenses,
            net_savings=income - expenses,
            savings_rate=savings_rate(income, expenses),
            transaction_count=len(transactions),
        ),
    )
    logger.debug(
        "Generated %d suggestion(s), %d risk area(s), %d opportunit(ies)",
        len(report.suggestions), len(report.risk_areas), len(report.opportunities),
    )
    return report


async def generate_recommendations_async(
    transactions: Sequence[CategorizedTransaction],
    metrics: Optional[BudgetMetrics] = None,
    delay: float = 0,
) -> AdvisorReport:
    if delay:
        await anyio.sleep(delay)
    return generate_recommendations(transactions, metrics)


def generate_spending_insights(transactions: Sequence[CategorizedTransaction]) -> List[Insight]:
    """Spot the most expensive weekday and the latest month-over-month trend."""
    insights = []

    by_weekday: Dict[str, float] = {}
    by_month: Dict[str, float] = {}
    for t in transactions:
        if t.amount >= 0:
            continue
        d = date.fromisoformat(t.date)
        weekday = d.strftime('%A')
        by_weekday[weekday] = by_weekday.get(weekday, 0.0) + abs(t.amount)
        month = t.date[:7]
        by_month[month] = by_month.get(month, 0.0) + abs(t.amount)

    if by_weekday:
        day, amount = max(by_weekday.items(), key=lambda kv: kv[1])
        insights.append(Insight(
            type='pattern',
            title='Most Expensive Day',
            description=f'You tend to spend the most on {day}s (${amount:.2f} total)',
            recommendation='Consider planning activities on other days to balance spending',
        ))

    months = sorted(by_month)
    if len(months) > 1:
        previous, recent = months[-2], months[-1]
        prev_name = date.fromisoformat(previous + '-01').strftime('%B %Y')
        recent_name = date.fromisoformat(recent + '-01').strftime('%B %Y')
        change = by_month[recent] - by_month[previous]
        if change > 0:
            insights.append(Insight(
                type='trend',
                title='Spending Increase',
                description=f'Your spending increased by ${change:.2f} from {prev_name} to {recent_name}',
                recommendation='Review recent purchases to identify areas for cost reduction',
            ))
        else:
            insights.append(Insight(
                type='trend',
                title='Spending Decrease',
                description=f'Great job! Your spending decreased by ${abs(change):.2f} '
                            f'from {prev_name} to {recent_name}',
                recommendation='Keep up the good work and consider increasing your savings',
            ))

    return insights


def analyze_savings(transactions: Sequence[CategorizedTransaction]) -> Optional[SavingsAnalysis]:
    """Rank expense categories by size and by average ticket."""
    if not transactions:
        return None

    spend: Dict[str, List[float]] = {}
    for t in transactions:
        if t.amount < 0:
            spend.setdefault(t.category or UNCATEGORIZED, []).append(abs(t.amount))

    categories = [
        CategorySpend(
            category=cat,
            total=sum(amounts),
            count=len(amounts),
            average_per_transaction=sum(amounts) / len(amounts),
        )
        for cat, amounts in spend.items()
    ]

    high = sorted((c for c in categories if c.total > 100), key=lambda c: c.total, reverse=True)[:5]
    recurring = sorted(
        (c for c in categories if c.count > 2),
        key=lambda c: c.average_per_transaction,
        reverse=True,
    )[:3]

    return SavingsAnalysis(
        high_spending_categories=high,
        recurring_expenses=recurring,
        potential_savings=sum(c.total * 0.2 for c in high),
        total_expenses=sum(c.total for c in categories),
    )
