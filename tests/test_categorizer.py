import anyio
import pytest

from budget_analyzer.core.categorizer import (
    SPENDING_CATEGORIES,
    categories_from_config,
    categorize,
    categorize_transactions,
    categorize_transactions_async,
    score_description,
)
from budget_analyzer.core.models import NormalizedTransaction


def tx(description, amount=-10.0, category=None):
    return NormalizedTransaction(date="2024-01-01", description=description, amount=amount, category=category)


def test_starbucks_is_food_with_confidence():
    result = categorize(tx("Starbucks Coffee Run", -4.50))
    assert result.category == "Food & Dining"
    assert result.confidence >= 0.6
    assert result.confidence == pytest.approx(0.7)


def test_positive_amounts_are_always_income():
    for desc in ("Restaurant refund", "Netflix", "QZX 123", "Salary"):
        assert categorize(tx(desc, 25.0)).category == "Income"


def test_ties_go_to_earlier_category():
    # "gas" is listed under Transportation and Utilities
    assert score_description("GAS") == ("Transportation", 1)
    assert categorize(tx("GAS")).category == "Transportation"


def test_no_match_is_uncategorized():
    result = categorize(tx("QZX 123"))
    assert result.category == "Uncategorized"
    assert result.confidence == 0.3


def test_confidence_is_capped():
    result = categorize(tx("restaurant cafe food dining meal lunch"))
    assert result.category == "Food & Dining"
    assert result.confidence == 0.9


def test_original_category_is_recorded_not_used():
    result = categorize(tx("Electric Bill", -89.45, category="Groceries"))
    assert result.category == "Utilities"
    assert result.original_category == "Groceries"
    assert categorize(tx("Electric Bill")).original_category is None


def test_category_table_order():
    names = [name for name, _ in SPENDING_CATEGORIES]
    assert names == [
        "Food & Dining", "Transportation", "Entertainment", "Shopping", "Utilities",
        "Healthcare", "Education", "Housing", "Personal Care", "Travel",
    ]


def test_categorize_transactions_keeps_order_and_fields():
    txs = [tx("Grocery Store", -45.67), tx("Salary Deposit", 2500.0)]
    result = categorize_transactions(txs)
    assert [t.description for t in result] == ["Grocery Store", "Salary Deposit"]
    assert [t.category for t in result] == ["Food & Dining", "Income"]
    assert result[0].amount == -45.67
    assert result[0].date == "2024-01-01"


def test_custom_table_from_config():
    table = categories_from_config([
        {"name": "Coffee", "keywords": ["COFFEE", "starbucks"]},
        {"name": "Food", "keywords": ["coffee"]},
    ])
    result = categorize(tx("Starbucks coffee"), table)
    assert result.category == "Coffee"
    assert categories_from_config(None) is SPENDING_CATEGORIES


def test_custom_table_must_be_a_list():
    with pytest.raises(ValueError):
        categories_from_config({"Coffee": ["coffee"]})
    with pytest.raises(ValueError):
        categories_from_config([{"keywords": ["coffee"]}])


def test_async_categorization_matches_sync():
    txs = [tx("Movie Theater", -12.99), tx("Uber ride", -20.0)]
    result = anyio.run(categorize_transactions_async, txs)
    assert result == categorize_transactions(txs)
