# budget_analyzer/sample.py
import csv


SAMPLE_ROWS = [
    {'Date': '2024-01-01', 'Description': 'Grocery Store', 'Amount': '-45.67', 'Category': 'Food & Dining'},
    {'Date': '2024-01-02', 'Description': 'Gas Station', 'Amount': '-32.50', 'Category': 'Transportation'},
    {'Date': '2024-01-03', 'Description': 'Salary Deposit', 'Amount': '2500.00', 'Category': 'Income'},
    {'Date': '2024-01-04', 'Description': 'Netflix Subscription', 'Amount': '-15.99', 'Category': 'Entertainment'},
    {'Date': '2024-01-05', 'Description': 'Restaurant', 'Amount': '-67.89', 'Category': 'Food & Dining'},
    {'Date': '2024-01-06', 'Description': 'Electric Bill', 'Amount': '-89.45', 'Category': 'Utilities'},
    {'Date': '2024-01-07', 'Description': 'Amazon Purchase', 'Amount': '-23.99', 'Category': 'Shopping'},
    {'Date': '2024-01-08', 'Description': 'Gas Station', 'Amount': '-28.75', 'Category': 'Transportation'},
    {'Date': '2024-01-09', 'Description': 'Coffee Shop', 'Amount': '-4.50', 'Category': 'Food & Dining'},
    {'Date': '2024-01-10', 'Description': 'Movie Theater', 'Amount': '-12.99', 'Category': 'Entertainment'},
]


def sample_rows(count=None):
    """Return copies of the template statement rows (the first ``count`` if given)."""
    rows = SAMPLE_ROWS if count is None else SAMPLE_ROWS[:count]
    return [dict(r) for r in rows]


def write_sample_csv(path, count=None):
    rows = sample_rows(count)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=['Date', 'Description', 'Amount', 'Category'])
        writer.writeheader()
        writer.writerows(rows)
    return path
