import openpyxl
import pytest

from budget_analyzer.config import load_config
from budget_analyzer.loaders import loader_for_path
from budget_analyzer.loaders.csv_rows import CSVRowLoader
from budget_analyzer.loaders.excel_rows import ExcelRowLoader
from budget_analyzer.pipeline import analyze_rows


def test_csv_loader_skips_preamble(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text(
        "Account,12345\n"
        "Statement period,January 2024\n"
        "Date,Description,Amount\n"
        "31/12/2024,Coffee,\"-$1,004.50\"\n"
        ",,\n"
        "2024-12-30,Salary,2500\n"
    )
    rows = list(CSVRowLoader().load(str(path)))
    assert [r.fields for r in rows] == [
        {"Date": "31/12/2024", "Description": "Coffee", "Amount": "-$1,004.50"},
        {"Date": "2024-12-30", "Description": "Salary", "Amount": "2500"},
    ]
    result = analyze_rows(rows)
    assert [t.amount for t in result.ledger] == [-1004.50, 2500.0]


def test_csv_loader_without_header_raises(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("foo,bar\n1,2\n")
    with pytest.raises(RuntimeError):
        list(CSVRowLoader().load(str(path)))


def test_excel_loader(tmp_path):
    path = tmp_path / "statement.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Exported statement"])
    ws.append(["DATE", "DESC", "AMOUNT", "CAT"])
    ws.append(["2024-01-04", "Netflix Subscription", -15.99, "Entertainment"])
    ws.append(["2024-01-05", "Restaurant", -67.89, None])
    wb.save(path)

    rows = list(ExcelRowLoader().load(str(path)))
    assert len(rows) == 2
    assert rows[0].fields["DESC"] == "Netflix Subscription"
    assert rows[1].fields["CAT"] == ""

    ledger = analyze_rows(rows).ledger
    assert [(t.category, t.amount) for t in ledger] == [
        ("Entertainment", -15.99),
        ("Food & Dining", -67.89),
    ]
    assert ledger[1].original_category is None


def test_loader_for_path_picks_by_suffix():
    cfg = load_config()
    assert isinstance(loader_for_path("a/b/Statement.CSV", cfg), CSVRowLoader)
    assert isinstance(loader_for_path("statement.xlsx", cfg), ExcelRowLoader)
    with pytest.raises(ValueError):
        loader_for_path("statement.pdf", cfg)
