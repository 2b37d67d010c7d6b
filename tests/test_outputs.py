import csv

import openpyxl

from budget_analyzer.outputs import get_output
from budget_analyzer.outputs.excel_output import ExcelOutput
from budget_analyzer.pipeline import AnalysisResult, analyze_rows
from budget_analyzer.sample import sample_rows


def make_config(tmp_path):
    return {
        'output_modules': {
            'csv': 'budget_analyzer.outputs.csv_output.CSVOutput',
            'excel': 'budget_analyzer.outputs.excel_output.ExcelOutput',
        },
        'output_dir': str(tmp_path / 'data'),
    }


def test_csv_output_sorted_by_date(tmp_path):
    rows = list(reversed(sample_rows()))
    result = analyze_rows(rows)
    out_path = get_output('csv', make_config(tmp_path)).write(result)

    assert out_path == str(tmp_path / 'data' / 'Budget2024.csv')
    with open(out_path, newline='') as f:
        records = list(csv.DictReader(f))
    assert len(records) == 10
    assert [r['date'] for r in records] == sorted(r['date'] for r in records)
    assert records[0] == {
        'date': '2024-01-01',
        'description': 'Grocery Store',
        'category': 'Food & Dining',
        'confidence': '0.60',
        'original_category': 'Food & Dining',
        'amount': '-45.67',
    }
    assert records[2]['amount'] == '2500.00'
    assert records[2]['category'] == 'Income'


def test_outputs_skip_empty_results(tmp_path):
    cfg = make_config(tmp_path)
    empty = AnalysisResult(ledger=[])
    assert get_output('csv', cfg).write(empty) is None
    assert get_output('excel', cfg).write(empty) is None
    assert list((tmp_path / 'data').iterdir()) == []


def test_excel_output_workbook(tmp_path):
    result = analyze_rows(sample_rows())
    out_path = get_output('excel', make_config(tmp_path)).write(result)

    wb = openpyxl.load_workbook(out_path)
    assert wb.sheetnames == ['Ledger', 'Categories', 'Monthly', 'Recommendations']

    ledger = list(wb['Ledger'].iter_rows(values_only=True))
    assert ledger[0] == ('date', 'description', 'category', 'confidence', 'original_category', 'amount')
    assert len(ledger) == 11
    assert ledger[1][:3] == ('2024-01-01', 'Grocery Store', 'Food & Dining')
    assert ledger[1][5] == -45.67

    categories = list(wb['Categories'].iter_rows(values_only=True))
    assert categories[1][0] == 'Food & Dining'
    assert categories[-1][0] == 'Income'

    monthly = list(wb['Monthly'].iter_rows(min_row=2, max_row=2, values_only=True))[0]
    assert monthly[0] == 'January 2024'
    assert monthly[3] == 10

    first_cells = [row[0] for row in wb['Recommendations'].iter_rows(values_only=True) if row[0]]
    assert first_cells[0] == 'Budget health score: 100'
    assert '50/30/20 rule' in first_cells
    assert 'Suggestions' in first_cells


def test_build_category_table_orders_by_expenses():
    out = object.__new__(ExcelOutput)
    metrics = analyze_rows(sample_rows()).metrics

    table = out._build_category_table(metrics)

    assert table[0] == ['Category', 'Total', 'Transactions', 'Expenses', 'Income']
    assert [row[0] for row in table[1:]] == [
        'Food & Dining',
        'Utilities',
        'Transportation',
        'Entertainment',
        'Shopping',
        'Income',
    ]
    assert table[-1][1:] == [2500.0, 1, 0.0, 2500.0]
