"""In-place cleanup operations on a worksheet."""

import re
from typing import Optional

from openpyxl.cell.cell import MergedCell
from openpyxl.formula.translate import Translator
from openpyxl.utils import range_boundaries

from ..utils.logging import get_logger

logger = get_logger(__name__)

_SPACE_RUN = re.compile(r" {2,}")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _bounds(sheet, cell_range: Optional[str], skip_header: bool = False):
    if cell_range:
        return range_boundaries(cell_range)
    min_col, min_row, max_col, max_row = range_boundaries(sheet.dimensions)
    if skip_header:
        min_row += 1
    return min_col, min_row, max_col, max_row


def trim_whitespace(sheet, cell_range: Optional[str] = None) -> int:
    """Strip text cells and collapse runs of spaces; returns cells changed.

    Cells left with nothing but whitespace become blank. Formulas are
    never touched.
    """
    min_col, min_row, max_col, max_row = _bounds(sheet, cell_range)
    changed = 0

    for row in sheet.iter_rows(min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col):
        for cell in row:
            if isinstance(cell, MergedCell) or cell.data_type == "f":
                continue
            if not isinstance(cell.value, str):
                continue

            trimmed = _SPACE_RUN.sub(" ", cell.value.strip())
            if trimmed != cell.value:
                cell.value = trimmed or None
                changed += 1

    logger.debug(f"Trimmed {changed} cells in sheet '{sheet.title}'")
    return changed


def fill_blanks(
    sheet,
    cell_range: Optional[str] = None,
    fill_value: Optional[str] = None
) -> int:
    """Fill blank cells with a constant, or with the value above; returns cells filled.

    Without ``cell_range`` the used range below the header row is filled.
    Filling from above works top to bottom so a run of blanks takes the
    last value before it; formulas are shifted to their new position.
    """
    min_col, min_row, max_col, max_row = _bounds(sheet, cell_range, skip_header=True)
    filled = 0

    for row_idx in range(min_row, max_row + 1):
        for col_idx in range(min_col, max_col + 1):
            cell = sheet.cell(row=row_idx, column=col_idx)
            if isinstance(cell, MergedCell) or not _is_blank(cell.value):
                continue

            if fill_value is not None:
                cell.value = fill_value
                filled += 1
                continue

            if row_idx == min_row:
                continue
            above = sheet.cell(row=row_idx - 1, column=col_idx)
            if _is_blank(above.value):
                continue

            if above.data_type == "f" and isinstance(above.value, str):
                cell.value = Translator(above.value, origin=above.coordinate).translate_formula(cell.coordinate)
            else:
                cell.value = above.value
            cell.number_format = above.number_format
            filled += 1

    logger.debug(f"Filled {filled} blank cells in sheet '{sheet.title}'")
    return filled


def delete_hidden_rows(sheet) -> int:
    """Delete every hidden row of a sheet; returns rows deleted."""
    hidden = sorted(
        (idx for idx, dimension in list(sheet.row_dimensions.items())
         if dimension.hidden and idx <= sheet.max_row),
        reverse=True,
    )

    for idx in hidden:
        sheet.delete_rows(idx)
        _shift_row_dimensions(sheet, idx)

    logger.debug(f"Deleted {len(hidden)} hidden rows in sheet '{sheet.title}'")
    return len(hidden)


def _shift_row_dimensions(sheet, deleted: int) -> None:
    """Move row heights, outline levels and visibility up after a row is deleted.

    ``delete_rows`` moves cells only; the dimension of the deleted row is dropped.
    """
    dimensions = sheet.row_dimensions
    moved = {}
    for idx, dimension in list(dimensions.items()):
        if idx == deleted:
            continue
        new_idx = idx - 1 if idx > deleted else idx
        dimension.index = new_idx
        moved[new_idx] = dimension

    dimensions.clear()
    dimensions.update(moved)
