# budget_analyzer/loaders/base.py
from abc import ABC, abstractmethod

from budget_analyzer.core.normalizer import AMOUNT_ALIASES, DATE_ALIASES


def looks_like_header(values) -> bool:
    """True when a row names both a date column and an amount column."""
    vals = [str(v).strip().lower() for v in values if v is not None]
    has_date = any(v in DATE_ALIASES for v in vals)
    has_amt = any(v in AMOUNT_ALIASES for v in vals)
    return has_date and has_amt


class BaseLoader(ABC):
    @abstractmethod
    def load(self, file_path: str):
        """
        Yield RawRow instances from file_path, one per statement line.
        Values are passed through untouched; validation happens later.
        """
        pass
