# budget_analyzer/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

The workbook mirrors what the dashboard shows: a ``Ledger`` sheet with
every categorized transaction, a ``Categories`` sheet with the per-category
breakdown and a pie chart of expenses, a ``Monthly`` sheet with income and
expenses per month, and a ``Recommendations`` sheet listing the budget
recommendations, the 50/30/20 check, suggestions, risks and opportunities.
"""

from __future__ import annotations

from datetime import datetime
import logging
import os
import xlsxwriter

from budget_analyzer.outputs.base import BaseOutput

logger = logging.getLogger(__name__)


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook for one analysis result."""

    LEDGER = "Ledger"
    CATEGORIES = "Categories"
    MONTHLY = "Monthly"
    RECOMMENDATIONS = "Recommendations"

    def __init__(self, config: dict):
        self.config = config
        self.output_dir = config.get("output_dir", "data")
        os.makedirs(self.output_dir, exist_ok=True)

    def write(self, result):
        if not result.ledger:
            logger.info("No transactions to write.")
            return None

        ledger = sorted(result.ledger, key=lambda t: t.date)
        year = datetime.fromisoformat(ledger[0].date).year
        out_path = os.path.join(self.output_dir, f"Budget{year}.xlsx")

        workbook = xlsxwriter.Workbook(out_path)
        amount_fmt = workbook.add_format({"num_format": "$#,##0.00"})
        pct_fmt = workbook.add_format({"num_format": "0.00"})

        self._write_ledger(workbook, ledger, amount_fmt, pct_fmt)
        if result.metrics is not None:
            self._write_categories(workbook, result.metrics, amount_fmt)
            self._write_monthly(workbook, result.metrics, amount_fmt)
        self._write_recommendations(workbook, result, amount_fmt)

        workbook.close()
        logger.info("Written Excel workbook %s", out_path)
        return out_path

    def _write_ledger(self, workbook, ledger, amount_fmt, pct_fmt):
        ws = workbook.add_worksheet(self.LEDGER)
        ws.freeze_panes(1, 0)
        headers = ["date", "description", "category", "confidence", "original_category", "amount"]
        ws.write_row(0, 0, headers)
        for row_idx, tx in enumerate(ledger, start=1):
            ws.write_row(row_idx, 0, [tx.date, tx.description, tx.category])
            ws.write_number(row_idx, 3, tx.confidence, pct_fmt)
            ws.write(row_idx, 4, tx.original_category or "")
            ws.write_number(row_idx, 5, float(tx.amount), amount_fmt)
        ws.set_column(5, 5, None, amount_fmt)
        ws.add_table(0, 0, len(ledger), 5, {
            "columns": [{"header": h} for h in headers]
        })

    def _write_categories(self, workbook, metrics, amount_fmt):
        ws = workbook.add_worksheet(self.CATEGORIES)
        ws.freeze_panes(1, 0)
        table = self._build_category_table(metrics)
        for offset, row in enumerate(table):
            ws.write_row(offset, 0, row)
        ws.set_column(1, 1, None, amount_fmt)
        ws.set_column(3, 4, None, amount_fmt)

        expense_rows = [r for r in table[1:] if r[3] > 0]
        if expense_rows:
            # pie of expenses only; rows are sorted so expense rows come first
            chart = workbook.add_chart({"type": "pie"})
            chart.add_series({
                "categories": [ws.name, 1, 0, len(expense_rows), 0],
                "values": [ws.name, 1, 3, len(expense_rows), 3],
                "name": "Spending by category",
            })
            chart.set_title({"name": "Spending by category"})
            chart.set_legend({"position": "right"})
            ws.insert_chart(0, 6, chart, {"x_offset": 0, "y_offset": 0})

    def _write_monthly(self, workbook, metrics, amount_fmt):
        ws = workbook.add_worksheet(self.MONTHLY)
        ws.freeze_panes(1, 0)
        ws.write_row(0, 0, ["month", "income", "expenses", "transactions"])
        averages = metrics.monthly_averages
        months = averages.months if averages else []
        for row_idx, month in enumerate(months, start=1):
            label = datetime.strptime(month.month, "%Y-%m").strftime("%B %Y")
            ws.write(row_idx, 0, label)
            ws.write_number(row_idx, 1, month.income, amount_fmt)
            ws.write_number(row_idx, 2, month.expenses, amount_fmt)
            ws.write_number(row_idx, 3, month.count)

        row_idx = len(months) + 2
        if averages:
            ws.write(row_idx, 0, "Average")
            ws.write_number(row_idx, 1, averages.average_monthly_income, amount_fmt)
            ws.write_number(row_idx, 2, averages.average_monthly_expenses, amount_fmt)
            ws.write(row_idx + 1, 0, "Average savings")
            ws.write_number(row_idx + 1, 1, averages.average_monthly_savings, amount_fmt)

        if months:
            chart = workbook.add_chart({"type": "column"})
            for col, title in ((1, "Income"), (2, "Expenses")):
                chart.add_series({
                    "categories": [ws.name, 1, 0, len(months), 0],
                    "values": [ws.name, 1, col, len(months), col],
                    "name": title,
                })
            chart.set_title({"name": "Income vs expenses"})
            chart.set_legend({"position": "bottom"})
            ws.insert_chart(0, 6, chart, {"x_offset": 0, "y_offset": 0})

    def _write_recommendations(self, workbook, result, amount_fmt):
        ws = workbook.add_worksheet(self.RECOMMENDATIONS)
        ws.set_column(0, 0, 32)
        ws.set_column(1, 1, 80)
        row_idx = 0

        def section(title):
            nonlocal row_idx
            if row_idx:
                row_idx += 1
            ws.write(row_idx, 0, title)
            row_idx += 1

        if result.metrics is not None:
            section(f"Budget health score: {result.metrics.budget_health_score}")
            for rec in result.metrics.recommendations:
                ws.write_row(row_idx, 0, [f"[{rec.type}] {rec.title}", rec.description])
                row_idx += 1
                for action in rec.actions:
                    ws.write(row_idx, 1, f"- {action}")
                    row_idx += 1

        advice = result.advice
        if advice is None:
            return

        section("50/30/20 rule")
        for entry in advice.budget_rule:
            ws.write_row(row_idx, 0, [entry.name, entry.status])
            ws.write_number(row_idx, 2, entry.actual, amount_fmt)
            ws.write_number(row_idx, 3, entry.target, amount_fmt)
            row_idx += 1

        section("Suggestions")
        for s in advice.suggestions:
            ws.write_row(row_idx, 0, [s.title, s.description])
            ws.write_number(row_idx, 2, s.potential_savings, amount_fmt)
            row_idx += 1

        if advice.risk_areas:
            section("Risk areas")
            for r in advice.risk_areas:
                ws.write_row(row_idx, 0, [r.title, r.description])
                ws.write_number(row_idx, 2, r.current_amount, amount_fmt)
                ws.write_number(row_idx, 3, r.recommended_amount, amount_fmt)
                row_idx += 1

        if advice.opportunities:
            section("Savings opportunities")
            for o in advice.opportunities:
                ws.write_row(row_idx, 0, [o.title, o.description])
                ws.write_number(row_idx, 2, o.estimated_savings, amount_fmt)
                row_idx += 1

    def _build_category_table(self, metrics):
        """Rows for the Categories sheet, biggest spend first, income-only last."""
        rows = [
            [category, bucket.total, bucket.count, bucket.expenses, bucket.income]
            for category, bucket in metrics.category_breakdown.items()
        ]
        rows.sort(key=lambda r: (r[3] <= 0, -r[3], -r[4]))
        return [["Category", "Total", "Transactions", "Expenses", "Income"]] + rows
