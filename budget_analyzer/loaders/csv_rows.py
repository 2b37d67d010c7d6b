# budget_analyzer/loaders/csv_rows.py
import csv
import pandas as pd
from budget_analyzer.loaders.base import BaseLoader, looks_like_header
from budget_analyzer.core.models import RawRow


class CSVRowLoader(BaseLoader):
    """
    Loader for generic bank statement CSV exports.

    Some banks put account details above the column headers, so the header
    row is the first row that names both a date and an amount column.
    Every cell is read as a string; blank cells become empty strings.
    """
    def load(self, file_path):
        # 1. Auto-detect header row
        header_row = None
        header     = None
        with open(file_path, newline='', encoding='utf-8-sig') as f:
            reader = csv.reader(f)
            for idx, row in enumerate(reader):
                if looks_like_header(row):
                    header_row = idx
                    header     = [c.strip() for c in row]
                    break
        if header_row is None:
            raise RuntimeError(f"Could not locate header row in {file_path}")

        # 2. Read CSV from that row onward
        df = pd.read_csv(
            file_path,
            skiprows=header_row + 1,
            header=None,
            names=header,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding='utf-8-sig',
            engine='python',
        )

        # 3. Yield rows, skipping lines with no content at all
        for record in df.to_dict(orient='records'):
            if not any(str(v).strip() for v in record.values()):
                continue
            yield RawRow(fields=record)
