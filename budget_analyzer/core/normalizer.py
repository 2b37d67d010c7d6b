# budget_analyzer/core/normalizer.py
import logging
import math
import re
import unicodedata
from typing import Iterable, List, Optional

from budget_analyzer.core.dates import parse_date
from budget_analyzer.core.models import NormalizedTransaction, RawRow

logger = logging.getLogger(__name__)

DATE_ALIASES = ('date',)
DESCRIPTION_ALIASES = ('description', 'desc')
AMOUNT_ALIASES = ('amount', 'amt')
CATEGORY_ALIASES = ('category', 'cat')

# minus sign, figure/en/em dash, small and fullwidth hyphen-minus
_DASHES = dict.fromkeys(map(ord, '\u2212\u2012\u2013\u2014\ufe63\uff0d'), '-')
# thousands separators and whitespace (\s covers no-break spaces)
_SEPARATORS = re.compile(r"[,'\s]")
_PLAIN_NUMBER = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")


def _strip_currency(text: str) -> str:
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Sc')


def parse_amount(raw) -> Optional[float]:
    """Turn a statement amount into a float, or None if it is not a number.

    Accepts currency symbols, thousands separators, accounting style
    negatives ("(45.67)") and a trailing minus ("45.67-"). Anything else
    left after cleaning (letters, exponents, stray signs) rejects the value.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None

    amt_raw = str(raw).translate(_DASHES).strip()
    is_negative = False
    if amt_raw.startswith('(') and amt_raw.endswith(')'):
        is_negative = True
        amt_raw = amt_raw[1:-1]
    elif amt_raw.endswith('-') and not amt_raw.startswith('-'):
        is_negative = True
        amt_raw = amt_raw[:-1]

    cleaned = _SEPARATORS.sub('', _strip_currency(amt_raw))
    if not _PLAIN_NUMBER.match(cleaned):
        return None
    value = float(cleaned)
    if not math.isfinite(value):
        return None
    return -abs(value) if is_negative else value


def _clean_text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def normalize_row(row) -> Optional[NormalizedTransaction]:
    """Validate a single raw row; returns None when the row must be dropped."""
    row = RawRow.from_mapping(row)
    if row.is_empty():
        logger.debug("Dropping empty row")
        return None

    d = parse_date(row.lookup(*DATE_ALIASES))
    if d is None:
        logger.debug("Dropping row with unparsable date: %s", dict(row.fields))
        return None

    desc = _clean_text(row.lookup(*DESCRIPTION_ALIASES))
    if not desc:
        logger.debug("Dropping row without description: %s", dict(row.fields))
        return None

    amount = parse_amount(row.lookup(*AMOUNT_ALIASES))
    if amount is None:
        logger.debug("Dropping row with invalid amount: %s", dict(row.fields))
        return None
    if amount == 0:
        logger.debug("Dropping zero-amount row: %s", dict(row.fields))
        return None

    category = _clean_text(row.lookup(*CATEGORY_ALIASES)) or None
    return NormalizedTransaction(date=d, description=desc, amount=amount, category=category)


def normalize_rows(rows: Iterable) -> List[NormalizedTransaction]:
    """Map raw rows onto the fixed schema, keeping input order.

    Rows that fail validation are left out of the result; a bad row never
    aborts the batch.
    """
    txs = []
    seen = 0
    for row in rows:
        seen += 1
        tx = normalize_row(row)
        if tx is not None:
            txs.append(tx)

    dropped = seen - len(txs)
    if dropped:
        logger.info("Dropped %d of %d rows during normalization", dropped, seen)
    return txs
