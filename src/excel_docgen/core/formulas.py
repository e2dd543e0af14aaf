"""Formula inventory with heuristic complexity grading."""

import re
from typing import List, Sequence, Tuple

from ..models.base import FormulaComplexity, FormulaEntry
from .advisory import FORMULA_RULES, AdvisoryRule, advise_formula, extract_functions

_STRING_LITERAL = re.compile(r'"[^"]*"')


def nesting_depth(formula: str) -> int:
    """Deepest level of parentheses outside string literals."""
    depth = deepest = 0
    for char in _STRING_LITERAL.sub('""', formula or ""):
        if char == "(":
            depth += 1
            deepest = max(deepest, depth)
        elif char == ")":
            depth = max(depth - 1, 0)
    return deepest


def references_other_sheet(formula: str) -> bool:
    body = _STRING_LITERAL.sub('""', formula or "")
    return "!" in body


def grade_complexity(function_count: int, depth: int) -> FormulaComplexity:
    if function_count >= 4 or depth >= 3:
        return FormulaComplexity.COMPLEX
    if function_count <= 1 and depth <= 1:
        return FormulaComplexity.SIMPLE
    return FormulaComplexity.MODERATE


def document_formula(
    sheet_name: str,
    coordinate: str,
    formula: str,
    rules: Sequence[AdvisoryRule] = FORMULA_RULES
) -> FormulaEntry:
    """Describe one formula cell."""
    functions = extract_functions(formula)
    depth = nesting_depth(formula)
    cross_sheet = references_other_sheet(formula)
    return FormulaEntry(
        sheet_name=sheet_name,
        cell=coordinate,
        formula=formula,
        functions=functions,
        cross_sheet=cross_sheet,
        nesting_depth=depth,
        complexity=grade_complexity(len(functions), depth),
        note=advise_formula(functions, cross_sheet, rules),
    )


def scan_formulas(
    sheet,
    max_rows: int = 1000,
    max_cols: int = 100,
    limit: int = 500
) -> Tuple[List[FormulaEntry], bool]:
    """Document the formulas of a sheet.

    The scan covers at most ``max_rows`` x ``max_cols`` cells and stops
    after ``limit`` formulas; the second return value says whether it
    stopped early.
    """
    entries: List[FormulaEntry] = []

    # Limit scan to reasonable area to avoid performance issues
    max_row = min(sheet.max_row or max_rows, max_rows)
    max_col = min(sheet.max_column or max_cols, max_cols)

    for row in sheet.iter_rows(min_row=1, max_row=max_row, min_col=1, max_col=max_col):
        for cell in row:
            if cell.data_type != "f" or not cell.value:
                continue
            if len(entries) >= limit:
                return entries, True

            formula = str(getattr(cell.value, "text", cell.value))
            if not formula.startswith("="):
                formula = f"={formula}"
            entries.append(document_formula(sheet.title, cell.coordinate, formula))

    return entries, False
