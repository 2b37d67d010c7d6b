import pytest

from budget_analyzer.core.models import CategorizedTransaction
from budget_analyzer.sample import sample_rows


def make_tx(date, description, amount, category):
    return CategorizedTransaction(
        date=date,
        description=description,
        amount=amount,
        category=category,
        confidence=0.6,
        original_category=None,
    )


@pytest.fixture
def five_rows():
    """Grocery, gas, salary, Netflix and restaurant rows from the upload template."""
    return sample_rows(5)


@pytest.fixture
def two_month_ledger():
    return [
        make_tx("2024-01-05", "Salary", 1000.0, "Income"),
        make_tx("2024-01-10", "Rent", -200.0, "Housing"),
        make_tx("2024-01-15", "Lunch", -50.0, "Food & Dining"),
        make_tx("2024-02-20", "Salary", 1000.0, "Income"),
        make_tx("2024-02-25", "Dinner", -100.0, "Food & Dining"),
    ]
