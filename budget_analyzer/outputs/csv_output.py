# budget_analyzer/outputs/csv_output.py

import os
import csv
import logging
from datetime import datetime
from decimal import Decimal
from budget_analyzer.outputs.base import BaseOutput

logger = logging.getLogger(__name__)

HEADERS = ['date', 'description', 'category', 'confidence', 'original_category', 'amount']


class CSVOutput(BaseOutput):
    """
    Writes the categorized ledger to a single CSV file named Budget<Year>.csv,
    sorted by date (oldest to latest). The year is taken from the oldest
    transaction.
    """
    def __init__(self, config):
        self.config      = config
        self.output_dir  = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)

    def write(self, result):
        if not result.ledger:
            logger.info("No transactions to write.")
            return None

        # stable sort keeps statement order within a day
        sorted_txs = sorted(result.ledger, key=lambda t: t.date)
        year = datetime.fromisoformat(sorted_txs[0].date).year

        filename = f"Budget{year}.csv"
        out_path = os.path.join(self.output_dir, filename)

        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(HEADERS)
            for tx in sorted_txs:
                writer.writerow([
                    tx.date,
                    tx.description,
                    tx.category,
                    f"{tx.confidence:.2f}",
                    tx.original_category or '',
                    f"{Decimal(str(tx.amount)):.2f}",
                ])

        logger.info("Written %d transactions to %s", len(sorted_txs), out_path)
        return out_path
