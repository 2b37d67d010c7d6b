"""Turn bank statement rows into a categorized ledger and budget advice."""
from budget_analyzer.pipeline import AnalysisResult, analyze_rows, analyze_rows_async

__all__ = ["AnalysisResult", "analyze_rows", "analyze_rows_async"]
