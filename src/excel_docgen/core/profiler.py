"""Heuristic column profiler.

Turns one :class:`Column` into the four values a documentation row needs:
a type classification, a quality flag, a couple of sample values and an
advisory note. Every function is pure and only looks at a bounded prefix
of the column (the sample window); nothing is cached between calls.
"""

import math
import re
from datetime import date, datetime, time
from typing import List, Optional, Sequence

from ..models.base import (
    CellKind, CellValue, Column, ColumnProfile, QualityFlag, QualityLevel,
    TypeClassification
)
from ..utils.config import EMPTY_PLACEHOLDER, TRUNCATION_MARKER
from ..utils.logging import get_logger
from .advisory import COLUMN_RULES, AdvisoryRule, advise

logger = get_logger(__name__)

SAMPLE_WINDOW_SIZE = 100
TYPE_VOTE_SIZE = 10
MAX_SAMPLES = 2
MAX_SAMPLE_LENGTH = 25
ERROR_EMPTY_PERCENT = 50

GENERAL_FORMAT = "general"

_CURRENCY_SYMBOLS = ("$", "€", "£", "¥")
# [$€-407] names a currency, [$-409] only a locale
_CURRENCY_TAG = re.compile(r"\[\$[^\]\-]+(?:-[^\]]*)?\]")
_LOCALE_TAG = re.compile(r"\[\$-[^\]]*\]")
_CURRENCY_WORDS = ("currency", "accounting")

# Literal text inside a number format, e.g. "0.00 \"pct\"" or 0\%
_FORMAT_LITERAL = re.compile(r'"[^"]*"|\\.')

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%d.%m.%Y",
    "%d-%b-%Y",
    "%d %b %Y",
    "%b %d, %Y",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
)


class InvalidColumnError(ValueError):
    """Raised when a profiler operation receives no column at all."""


def _require_column(column: Optional[Column]) -> Column:
    if column is None:
        raise InvalidColumnError("invalid column: expected a Column, got None")
    return column


def sample_window(column: Column, sample_size: int = SAMPLE_WINDOW_SIZE) -> Sequence[CellValue]:
    """Return the bounded prefix of a column used by every heuristic."""
    return _require_column(column).values[:max(sample_size, 0)]


# ---------------------------------------------------------------------------
# Declared formats
# ---------------------------------------------------------------------------

def is_currency_format(number_format: Optional[str]) -> bool:
    """Check if an Excel number format displays a currency."""
    if not number_format or number_format.strip().lower() == GENERAL_FORMAT:
        return False
    if _CURRENCY_TAG.search(number_format):
        return True
    stripped = _LOCALE_TAG.sub("", number_format)
    lowered = stripped.lower()
    if any(word in lowered for word in _CURRENCY_WORDS):
        return True
    return any(symbol in stripped for symbol in _CURRENCY_SYMBOLS)


def is_percentage_format(number_format: Optional[str]) -> bool:
    """Check if an Excel number format displays a percentage."""
    if not number_format or number_format.strip().lower() == GENERAL_FORMAT:
        return False
    return "%" in _FORMAT_LITERAL.sub("", number_format)


# ---------------------------------------------------------------------------
# Value probing
# ---------------------------------------------------------------------------

def parses_as_date(text: str) -> bool:
    """Check if text is a date in one of the accepted layouts."""
    candidate = text.strip()
    for fmt in _DATE_FORMATS:
        try:
            datetime.strptime(candidate, fmt)
            return True
        except ValueError:
            continue
    return False


def parses_as_number(text: str) -> bool:
    """Check if text is a finite number, allowing thousands separators."""
    candidate = text.strip().replace(",", "")
    if not candidate:
        return False
    try:
        return math.isfinite(float(candidate))
    except (ValueError, OverflowError):
        return False


def _vote_category(cell: CellValue) -> str:
    if cell.is_missing:
        return "empty"
    if cell.kind == CellKind.DATE:
        return "date"
    if cell.kind == CellKind.NUMBER:
        return "numeric"
    if cell.kind == CellKind.TEXT:
        text = str(cell.value)
        if parses_as_date(text):
            return "date"
        if parses_as_number(text):
            return "numeric"
    return "text"


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def classify_type(
    column: Column,
    declared_format: Optional[str] = None,
    sample_size: int = SAMPLE_WINDOW_SIZE,
    vote_size: int = TYPE_VOTE_SIZE
) -> TypeClassification:
    """Infer the semantic type of a column.

    A currency or percentage display format decides on its own. Otherwise a
    leading formula marks the column as Formula, and a strict-majority vote
    over the first ``vote_size`` sampled values picks Date, Number or Text.
    """
    column = _require_column(column)
    if len(column) == 0:
        return TypeClassification.EMPTY

    number_format = declared_format if declared_format is not None else column.number_format
    if is_currency_format(number_format):
        return TypeClassification.CURRENCY
    if is_percentage_format(number_format):
        return TypeClassification.PERCENTAGE

    window = sample_window(column, sample_size)

    first_value = next((cell for cell in window if not cell.is_missing), None)
    if first_value is not None and first_value.kind == CellKind.FORMULA:
        return TypeClassification.FORMULA

    voters = window[:max(vote_size, 0)]
    counts = {"date": 0, "numeric": 0, "text": 0, "empty": 0}
    for cell in voters:
        counts[_vote_category(cell)] += 1

    sampled = len(voters)
    if sampled == 0 or counts["empty"] == sampled:
        return TypeClassification.EMPTY
    if counts["date"] * 2 > sampled:
        return TypeClassification.DATE
    if counts["numeric"] * 2 > sampled:
        return TypeClassification.NUMBER
    return TypeClassification.TEXT


def compute_quality(
    column: Column,
    sample_size: int = SAMPLE_WINDOW_SIZE,
    error_threshold: int = ERROR_EMPTY_PERCENT
) -> QualityFlag:
    """Grade a column by the share of empty or ``null`` cells in its sample window."""
    column = _require_column(column)
    window = sample_window(column, sample_size)
    if len(window) == 0:
        return QualityFlag(level=QualityLevel.ERROR, empty_percent=100)

    missing = sum(1 for cell in window if cell.is_missing)
    empty_percent = round(100 * missing / len(window))

    if empty_percent == 0:
        level = QualityLevel.CLEAN
    elif empty_percent < error_threshold:
        level = QualityLevel.WARNING
    else:
        level = QualityLevel.ERROR
    return QualityFlag(level=level, empty_percent=empty_percent)


def format_cell(cell: CellValue) -> str:
    """Render a cell value the way it reads in a report."""
    value = cell.value
    if cell.kind == CellKind.EMPTY:
        return ""
    if cell.kind == CellKind.BOOLEAN:
        return "TRUE" if value else "FALSE"
    if cell.kind == CellKind.NUMBER:
        number = float(value)
        if number.is_integer():
            return str(int(number))
        return f"{number:.15g}"
    if cell.kind == CellKind.DATE:
        if isinstance(value, datetime):
            if value.time() == time(0, 0):
                return value.date().isoformat()
            return value.isoformat(sep=" ")
        if isinstance(value, (date, time)):
            return value.isoformat()
    return str(value)


def truncate(text: str, max_len: int = MAX_SAMPLE_LENGTH) -> str:
    """Cut text to ``max_len`` characters, marker included."""
    if len(text) <= max_len:
        return text
    keep = max_len - len(TRUNCATION_MARKER)
    if keep <= 0:
        return text[:max_len]
    return text[:keep] + TRUNCATION_MARKER


def sample_values(
    column: Column,
    max_samples: int = MAX_SAMPLES,
    max_len: int = MAX_SAMPLE_LENGTH,
    sample_size: int = SAMPLE_WINDOW_SIZE
) -> List[str]:
    """Return up to ``max_samples`` readable values in row order."""
    if max_samples <= 0:
        return []

    samples: List[str] = []
    for cell in sample_window(column, sample_size):
        if len(samples) >= max_samples:
            break
        if cell.is_missing:
            continue
        samples.append(truncate(format_cell(cell), max_len))
    return samples or [EMPTY_PLACEHOLDER]


def profile_column(
    column: Column,
    index: int = 1,
    rules: Sequence[AdvisoryRule] = COLUMN_RULES,
    sample_size: int = SAMPLE_WINDOW_SIZE,
    vote_size: int = TYPE_VOTE_SIZE,
    max_samples: int = MAX_SAMPLES,
    max_len: int = MAX_SAMPLE_LENGTH,
    error_threshold: int = ERROR_EMPTY_PERCENT
) -> ColumnProfile:
    """Profile one column into a documentation row."""
    column = _require_column(column)

    try:
        data_type = classify_type(column, sample_size=sample_size, vote_size=vote_size)
    except InvalidColumnError:
        raise
    except Exception as e:
        logger.warning(f"Type inference failed for column '{column.name}': {e}")
        data_type = TypeClassification.UNKNOWN

    return ColumnProfile(
        index=index,
        column_name=column.name,
        data_type=data_type,
        quality=compute_quality(column, sample_size=sample_size, error_threshold=error_threshold),
        sample_values=sample_values(
            column, max_samples=max_samples, max_len=max_len, sample_size=sample_size
        ),
        note=advise(column.name, data_type, rules),
    )
