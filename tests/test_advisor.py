import anyio
import pytest

from budget_analyzer.core.advisor import (
    analyze_savings,
    generate_recommendations,
    generate_recommendations_async,
    generate_spending_insights,
    savings_opportunities,
)
from budget_analyzer.core.categorizer import categorize_transactions
from budget_analyzer.core.metrics import calculate_budget_metrics
from budget_analyzer.core.models import CategorizedTransaction
from budget_analyzer.core.normalizer import normalize_rows


def make_tx(date, description, amount, category):
    return CategorizedTransaction(date=date, description=description, amount=amount, category=category)


@pytest.fixture
def sample_ledger(five_rows):
    return categorize_transactions(normalize_rows(five_rows))


def test_budget_rule_for_sample(sample_ledger):
    report = generate_recommendations(sample_ledger, calculate_budget_metrics(sample_ledger))
    needs, wants, savings = report.budget_rule
    assert (needs.name, needs.target, needs.status) == ("Needs (50%)", pytest.approx(1250.0), "good")
    assert needs.actual == pytest.approx(162.05)
    assert (wants.target, wants.actual, wants.status) == (pytest.approx(750.0), 0.0, "good")
    assert savings.target == pytest.approx(500.0)
    assert savings.actual == pytest.approx(2337.95)
    assert savings.status == "good"
    assert report.rule("Savings") is savings


def test_sample_gets_generic_suggestion_and_food_opportunity(sample_ledger):
    report = generate_recommendations(sample_ledger)
    assert [s.title for s in report.suggestions] == ["Maintain Good Habits"]
    assert report.suggestions[0].potential_savings == pytest.approx(125.0)
    # a single salary deposit
    assert [r.title for r in report.risk_areas] == ["Irregular Income"]
    assert report.risk_areas[0].current_amount == 0
    assert report.risk_areas[0].recommended_amount == 0
    assert [o.title for o in report.opportunities] == ["Optimize Food Budget"]
    assert report.opportunities[0].estimated_savings == pytest.approx(67.89 * 0.4)


def test_overspending_statuses():
    ledger = [
        make_tx("2024-01-01", "Pay", 1000.0, "Income"),
        make_tx("2024-01-02", "Rent", -900.0, "Housing"),
    ]
    needs, wants, savings = generate_recommendations(ledger).budget_rule
    assert needs.status == "danger"
    assert needs.actual == 500.0
    assert wants.status == "warning"
    assert wants.actual == 400.0
    assert savings.status == "warning"
    assert savings.actual == 100.0


def test_category_suggestions():
    ledger = [
        make_tx("2024-01-01", "Pay", 600.0, "Income"),
        make_tx("2024-01-15", "Pay", 400.0, "Income"),
        make_tx("2024-01-02", "Restaurant dinner", -200.0, "Food & Dining"),
        make_tx("2024-01-03", "Uber ride", -150.0, "Transportation"),
        make_tx("2024-01-04", "Concert ticket", -120.0, "Entertainment"),
    ]
    report = generate_recommendations(ledger)
    assert [(s.title, s.potential_savings) for s in report.suggestions] == [
        ("Optimize Food Spending", pytest.approx(40.0)),
        ("Review Transportation Costs", pytest.approx(22.5)),
        ("Balance Entertainment Budget", pytest.approx(30.0)),
    ]
    assert report.risk_areas == []


def test_emergency_fund_suggestion_when_expenses_are_high():
    ledger = [
        make_tx("2024-01-01", "Pay", 1000.0, "Income"),
        make_tx("2024-01-02", "Pay", 1000.0, "Income"),
        make_tx("2024-01-03", "Rent", -1700.0, "Housing"),
    ]
    titles = [s.title for s in generate_recommendations(ledger).suggestions]
    assert titles == ["Emergency Fund Priority"]


def test_high_spending_category_is_a_risk():
    ledger = [
        make_tx("2024-01-01", "Pay", 500.0, "Income"),
        make_tx("2024-01-16", "Pay", 500.0, "Income"),
        make_tx("2024-01-03", "Rent", -300.0, "Housing"),
        make_tx("2024-01-04", "Lunch", -20.0, "Food & Dining"),
    ]
    risks = generate_recommendations(ledger).risk_areas
    assert len(risks) == 1
    risk = risks[0]
    assert risk.title == "High Housing Spending"
    assert "30.0% of your income" in risk.description
    assert risk.current_amount == 300.0
    assert risk.recommended_amount == 150.0


def test_risk_without_income_does_not_divide_by_zero():
    ledger = [make_tx("2024-01-03", "Rent", -300.0, "Housing")]
    titles = [r.title for r in generate_recommendations(ledger).risk_areas]
    assert titles == ["High Housing Spending", "Irregular Income"]


def test_subscription_and_bulk_opportunities():
    ledger = [
        make_tx("2024-01-01", "NETFLIX.COM", -15.99, "Entertainment"),
        make_tx("2024-01-02", "Spotify", -9.99, "Entertainment"),
        make_tx("2024-01-03", "Hulu", -12.99, "Entertainment"),
        make_tx("2024-01-04", "Gym monthly fee", -40.0, "Personal Care"),
        make_tx("2024-01-05", "Refund from Netflix", 15.99, "Income"),
    ]
    opportunities = savings_opportunities(ledger, 78.97)
    assert [o.title for o in opportunities] == ["Review Subscriptions"]
    assert opportunities[0].estimated_savings == pytest.approx(78.97 * 0.3)

    bulk = savings_opportunities([], 2500.0)
    assert [(o.title, o.estimated_savings) for o in bulk] == [("Bulk Purchasing", pytest.approx(125.0))]


def test_dining_out_only_counts_food_category():
    ledger = [
        make_tx("2024-01-01", "Hotel restaurant", -80.0, "Travel"),
        make_tx("2024-01-02", "Supermarket", -100.0, "Food & Dining"),
    ]
    assert savings_opportunities(ledger, 180.0) == []


def test_summary_guards_zero_income():
    report = generate_recommendations([make_tx("2024-01-03", "Rent", -300.0, "Housing")])
    assert report.summary.total_income == 0
    assert report.summary.savings_rate == 0
    assert report.summary.net_savings == -300.0


def test_async_recommendations(sample_ledger):
    report = anyio.run(generate_recommendations_async, sample_ledger)
    assert report == generate_recommendations(sample_ledger)


def test_spending_insights(two_month_ledger):
    insights = generate_spending_insights(two_month_ledger)
    assert [i.title for i in insights] == ["Most Expensive Day", "Spending Decrease"]
    assert "Wednesdays ($200.00 total)" in insights[0].description
    assert insights[1].description == (
        "Great job! Your spending decreased by $150.00 from January 2024 to February 2024"
    )


def test_spending_insights_single_month():
    ledger = [make_tx("2024-01-10", "Rent", -200.0, "Housing")]
    assert [i.type for i in generate_spending_insights(ledger)] == ["pattern"]
    assert generate_spending_insights([]) == []


def test_analyze_savings():
    ledger = [
        make_tx("2024-01-01", "Cafe", -60.0, "Food & Dining"),
        make_tx("2024-01-02", "Deli", -50.0, "Food & Dining"),
        make_tx("2024-01-03", "Bakery", -40.0, "Food & Dining"),
        make_tx("2024-01-04", "Rent", -300.0, "Housing"),
        make_tx("2024-01-05", "Trip", -20.0, "Travel"),
        make_tx("2024-01-06", "Pay", 1000.0, "Income"),
    ]
    analysis = analyze_savings(ledger)
    assert [c.category for c in analysis.high_spending_categories] == ["Housing", "Food & Dining"]
    assert [c.category for c in analysis.recurring_expenses] == ["Food & Dining"]
    assert analysis.recurring_expenses[0].average_per_transaction == 50.0
    assert analysis.potential_savings == pytest.approx(90.0)
    assert analysis.total_expenses == 470.0
    assert analyze_savings([]) is None
