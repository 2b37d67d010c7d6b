# budget_analyzer/loaders/excel_rows.py
import pandas as pd
from budget_analyzer.loaders.base import BaseLoader, looks_like_header
from budget_analyzer.core.models import RawRow


class ExcelRowLoader(BaseLoader):
    """Loader for statement workbooks; only the first sheet is read."""

    def load(self, file_path):
        # 1. Detect header row
        raw = pd.read_excel(file_path, header=None, dtype=str)
        header_row = None
        for idx, row in raw.iterrows():
            vals = [v for v in row.values if pd.notna(v)]
            if looks_like_header(vals):
                header_row = idx
                break
        if header_row is None:
            raise RuntimeError(f"Could not locate header row in {file_path}")

        # 2. Read with that header
        df = pd.read_excel(file_path, header=header_row, dtype=str)
        df = df.fillna('')
        df.columns = [str(c).strip() for c in df.columns]

        for record in df.to_dict(orient='records'):
            if not any(str(v).strip() for v in record.values()):
                continue
            yield RawRow(fields=record)
