"""
Column type classification.

Infers a semantic ColumnType for a column from a sample of its values.
Each value is tagged with a ValueKind once; the type rules then work on
the kinds instead of inspecting Python types again.
"""
import math
import logging
from enum import Enum
from numbers import Number
from typing import Any, Dict, List, Optional
import pandas as pd

from dashboard_core.core.schemas import ColumnType

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 10

# Month names and abbreviations (English and Portuguese) -> month index (0 = January)
MONTH_INDEX: Dict[str, int] = {
    "january": 0, "jan": 0, "janeiro": 0,
    "february": 1, "feb": 1, "fevereiro": 1, "fev": 1,
    "march": 2, "mar": 2, "março": 2, "marco": 2,
    "april": 3, "apr": 3, "abril": 3, "abr": 3,
    "may": 4, "maio": 4, "mai": 4,
    "june": 5, "jun": 5, "junho": 5,
    "july": 6, "jul": 6, "julho": 6,
    "august": 7, "aug": 7, "agosto": 7, "ago": 7,
    "september": 8, "sep": 8, "sept": 8, "setembro": 8, "set": 8,
    "october": 9, "oct": 9, "outubro": 9, "out": 9,
    "november": 10, "nov": 10, "novembro": 10,
    "december": 11, "dec": 11, "dezembro": 11, "dez": 11,
}

BOOLEAN_TEXT = ("true", "false")

# Words pandas resolves against the clock rather than reading a date
RELATIVE_DATE_WORDS = ("now", "today", "yesterday", "tomorrow")


class ValueKind(str, Enum):
    MISSING = "missing"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Tag a raw cell value. Booleans are checked before numbers since bool is an int."""
    if value is None:
        return ValueKind.MISSING
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    return ValueKind.OTHER


def parse_number(text: str) -> Optional[float]:
    """
    Parse numeric text the way a spreadsheet export reads it.

    Surrounding whitespace is ignored and blank text reads as 0.
    Returns None when the text is not a finite number ('nan', 'Infinity',
    '1e400' are not numbers).
    """
    stripped = text.strip()
    if not stripped:
        return 0.0
    if "_" in stripped:
        return None
    try:
        number = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def to_number(value: Any) -> float:
    """Numeric form of a cell for aggregation; anything non-numeric or non-finite counts as 0."""
    kind = value_kind(value)
    if kind == ValueKind.BOOLEAN:
        return 1.0 if value else 0.0
    if kind == ValueKind.NUMBER:
        try:
            return finite_or_zero(float(value))
        except OverflowError:
            # integers too large for a float
            return 0.0
    if kind == ValueKind.TEXT:
        parsed = parse_number(value)
        return parsed if parsed is not None else 0.0
    return 0.0


def mentions_month(text: str) -> bool:
    lower = text.lower()
    return any(name in lower for name in MONTH_INDEX)


def month_position(label: str) -> Optional[int]:
    """Index of a label that is exactly a month name, or None."""
    return MONTH_INDEX.get(label.strip().lower())


def parses_as_date(text: str) -> bool:
    """True for text pandas reads as a calendar date; relative words like 'now' are not dates."""
    if text.strip().lower() in RELATIVE_DATE_WORDS:
        return False
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return False
    return not pd.isna(parsed)


def _is_numeric(value: Any, kind: ValueKind) -> bool:
    if kind == ValueKind.NUMBER:
        return True
    if kind == ValueKind.TEXT:
        return parse_number(value) is not None
    return False


def _is_boolean(value: Any, kind: ValueKind) -> bool:
    if kind == ValueKind.BOOLEAN:
        return True
    return kind == ValueKind.TEXT and value in BOOLEAN_TEXT


def _is_date(value: Any, kind: ValueKind) -> bool:
    if kind != ValueKind.TEXT:
        return False
    return mentions_month(value) or parses_as_date(value)


def classify_column(rows: List[Dict[str, Any]], column: str, sample_size: int = DEFAULT_SAMPLE_SIZE) -> ColumnType:
    """
    Infer the ColumnType of one column from its first ``sample_size`` values.

    Rules are tried in order: number, boolean, date, string. An empty sample
    satisfies every "all values" rule and therefore classifies as number.
    """
    sample = [(row.get(column), value_kind(row.get(column))) for row in rows[:sample_size]]

    if all(_is_numeric(value, kind) for value, kind in sample):
        return ColumnType.NUMBER

    if all(_is_boolean(value, kind) for value, kind in sample):
        return ColumnType.BOOLEAN

    if all(_is_date(value, kind) for value, kind in sample):
        return ColumnType.DATE

    return ColumnType.STRING
