"""Ordered rule tables that turn names and formulas into advisory notes.

Rules are plain data: the first rule whose pattern matches wins, so the
order of each table is part of its meaning. Callers may pass their own
tables to the advisory functions to extend or replace the defaults.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.base import TypeClassification


@dataclass(frozen=True)
class AdvisoryRule:
    """Substrings of a lower-cased name that map to one note."""
    patterns: Tuple[str, ...]
    note: str

    def matches(self, text: str) -> bool:
        return any(pattern in text for pattern in self.patterns)


COLUMN_RULES: Tuple[AdvisoryRule, ...] = (
    AdvisoryRule(("id",), "Use for lookups/joins"),
    AdvisoryRule(("key", "code"), "Reference key - use for matching/grouping"),
    AdvisoryRule(("date", "time"), "Time-based field - use for trends/filtering"),
    AdvisoryRule(("amount", "total", "sum"), "Financial metric - use for aggregations"),
    AdvisoryRule(("count", "number", "qty"), "Quantity field - use for calculations"),
    AdvisoryRule(("status", "state", "flag"), "Categorical status - use for filtering/grouping"),
    AdvisoryRule(("name", "title", "description"), "Descriptive text - use for display/search"),
    AdvisoryRule(("email", "phone", "address"), "Contact information - may contain PII"),
    AdvisoryRule(("percent", "rate"), "Ratio field - format as percentage"),
)

TYPE_NOTES = {
    TypeClassification.CURRENCY: "Use for financial calculations",
    TypeClassification.DATE: "Use for date calculations/filtering",
    TypeClassification.NUMBER: "Use to calculate/analyze",
    TypeClassification.EMPTY: "Mostly empty - consider removing",
}
DEFAULT_TYPE_NOTE = "Use as category/filter"


def advise(
    column_name: Optional[str],
    type_classification: Optional[TypeClassification],
    rules: Sequence[AdvisoryRule] = COLUMN_RULES
) -> str:
    """Return the usage hint for a column.

    Name rules are tried in order; when none matches the note falls back
    to the column's type. Never raises.
    """
    name = str(column_name or "").lower()
    for rule in rules:
        if rule.matches(name):
            return rule.note
    return TYPE_NOTES.get(type_classification, DEFAULT_TYPE_NOTE)


# Formula notes are keyed by upper-case function names
FORMULA_RULES: Tuple[AdvisoryRule, ...] = (
    AdvisoryRule(
        ("VLOOKUP", "HLOOKUP", "XLOOKUP", "LOOKUP", "INDEX", "MATCH", "XMATCH"),
        "Lookup - check that reference ranges stay aligned",
    ),
    AdvisoryRule(
        ("IF", "IFS", "IFERROR", "IFNA", "SWITCH", "AND", "OR", "NOT"),
        "Conditional logic - review every branch",
    ),
    AdvisoryRule(
        ("SUM", "SUMIF", "SUMIFS", "SUMPRODUCT", "AVERAGE", "AVERAGEIF",
         "AVERAGEIFS", "COUNT", "COUNTA", "COUNTIF", "COUNTIFS", "MIN", "MAX",
         "SUBTOTAL", "AGGREGATE"),
        "Aggregation - confirm the summed range",
    ),
    AdvisoryRule(
        ("TODAY", "NOW", "DATE", "DATEVALUE", "YEAR", "MONTH", "DAY",
         "EOMONTH", "EDATE", "NETWORKDAYS", "WORKDAY", "DATEDIF"),
        "Date calculation - volatile when based on TODAY/NOW",
    ),
    AdvisoryRule(
        ("CONCAT", "CONCATENATE", "TEXTJOIN", "LEFT", "RIGHT", "MID", "TEXT",
         "TRIM", "UPPER", "LOWER", "PROPER", "SUBSTITUTE", "LEN"),
        "Text manipulation",
    ),
)
CROSS_SHEET_NOTE = "References other sheets"
DIRECT_FORMULA_NOTE = "Direct calculation/reference"

_FUNCTION_PATTERN = re.compile(r"([A-Z_][A-Z0-9\._]*)\s*\(", re.IGNORECASE)
_STRING_LITERAL = re.compile(r'"[^"]*"')


def extract_functions(formula: str) -> List[str]:
    """Return the distinct function names of a formula in order of appearance."""
    body = _STRING_LITERAL.sub('""', formula or "")
    functions: List[str] = []
    for match in _FUNCTION_PATTERN.finditer(body):
        name = match.group(1).upper()
        # Excel stores newer functions with an _xlfn. prefix
        if name.startswith("_XLFN."):
            name = name[len("_XLFN."):]
        if name not in functions:
            functions.append(name)
    return functions


def advise_formula(
    functions: Iterable[str],
    cross_sheet: bool = False,
    rules: Sequence[AdvisoryRule] = FORMULA_RULES
) -> str:
    """Return the note for a formula from its function names."""
    names = {name.upper() for name in functions}
    for rule in rules:
        if names.intersection(rule.patterns):
            return rule.note
    if cross_sheet:
        return CROSS_SHEET_NOTE
    return DIRECT_FORMULA_NOTE
