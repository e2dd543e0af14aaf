"""Workbook access: validation, table discovery and column reading."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import openpyxl
import pandas as pd
from openpyxl.utils import get_column_letter, range_boundaries
from openpyxl.workbook.properties import CalcProperties

from ..models.base import CellValue, Column
from ..utils.config import SUPPORTED_WORKBOOK_SUFFIXES, get_config
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TableRegion:
    """A rectangular block of a sheet documented as one table."""
    sheet_name: str
    name: str
    ref: str
    header_rows: int = 1
    totals_rows: int = 0
    implicit: bool = False

    @property
    def bounds(self):
        """``(min_col, min_row, max_col, max_row)`` of the region."""
        return range_boundaries(self.ref)

    @property
    def first_data_row(self) -> int:
        return self.bounds[1] + self.header_rows

    @property
    def last_data_row(self) -> int:
        return self.bounds[3] - self.totals_rows

    @property
    def row_count(self) -> int:
        return max(self.last_data_row - self.first_data_row + 1, 0)

    @property
    def column_count(self) -> int:
        min_col, _, max_col, _ = self.bounds
        return max_col - min_col + 1


def validate_file(file_path, allowed_suffixes: Sequence[str] = SUPPORTED_WORKBOOK_SUFFIXES) -> Path:
    """Check that a file exists, has a supported suffix and is not too large."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File does not exist: {file_path}")

    if path.suffix.lower() not in allowed_suffixes:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    max_size_mb = get_config().max_file_size_mb
    file_size = path.stat().st_size
    if file_size > max_size_mb * 1024 * 1024:
        raise ValueError(
            f"File too large: {file_size / (1024*1024):.1f}MB > {max_size_mb}MB"
        )
    return path


def open_workbook(file_path, data_only: bool = False):
    """Load a workbook with formulas kept as formulas."""
    path = validate_file(file_path)
    return openpyxl.load_workbook(
        path,
        read_only=False,
        data_only=data_only,
        keep_vba=path.suffix.lower() == ".xlsm",
    )


def get_sheet(workbook, sheet_name: Optional[str] = None):
    """Return the named sheet, or the active one."""
    if sheet_name is None:
        return workbook.active
    if sheet_name not in workbook.sheetnames:
        raise ValueError(f"Sheet '{sheet_name}' not found in workbook")
    return workbook[sheet_name]


def _sheet_is_empty(sheet) -> bool:
    return (
        sheet.max_row == 1
        and sheet.max_column == 1
        and sheet.cell(row=1, column=1).value is None
    )


def find_tables(
    workbook,
    sheet_name: Optional[str] = None,
    include_sheet_ranges: bool = True
) -> List[TableRegion]:
    """List the tables of a workbook in sheet order.

    Worksheet tables are used as defined. A sheet without tables is
    documented through its used range when ``include_sheet_ranges`` is set.
    """
    sheet_names = [sheet_name] if sheet_name else workbook.sheetnames
    regions: List[TableRegion] = []

    for name in sheet_names:
        sheet = get_sheet(workbook, name)
        tables = list(sheet.tables.values())

        for table in tables:
            regions.append(TableRegion(
                sheet_name=name,
                name=table.displayName or table.name,
                ref=table.ref,
                header_rows=table.headerRowCount if table.headerRowCount is not None else 1,
                totals_rows=table.totalsRowCount or 0,
            ))

        if not tables and include_sheet_ranges and not _sheet_is_empty(sheet):
            regions.append(TableRegion(
                sheet_name=name,
                name=name,
                ref=sheet.dimensions,
                implicit=True,
            ))

    logger.debug(f"Found {len(regions)} tables in {len(sheet_names)} sheets")
    return regions


def read_header(sheet, region: TableRegion) -> List[str]:
    """Column names of a region, with letters standing in for blank headers."""
    min_col, min_row, max_col, _ = region.bounds
    names = []
    for col in range(min_col, max_col + 1):
        value = sheet.cell(row=min_row, column=col).value if region.header_rows else None
        if value is None or not str(value).strip():
            names.append(f"Column {get_column_letter(col)}")
        else:
            names.append(str(value).strip())
    return names


def read_column(sheet, region: TableRegion, offset: int, name: Optional[str] = None) -> Column:
    """Read the data cells of one region column into an immutable Column."""
    if not 0 <= offset < region.column_count:
        raise IndexError(
            f"Column offset {offset} outside table '{region.name}' ({region.ref})"
        )

    col = region.bounds[0] + offset
    if name is None:
        name = read_header(sheet, region)[offset]

    if region.row_count == 0:
        return Column(name=name)

    cells = [
        row[0] for row in sheet.iter_rows(
            min_row=region.first_data_row,
            max_row=region.last_data_row,
            min_col=col,
            max_col=col,
        )
    ]
    return Column(
        name=name,
        values=tuple(CellValue.from_cell(cell) for cell in cells),
        number_format=cells[0].number_format if cells else None,
    )


def columns_from_dataframe(df: pd.DataFrame) -> List[Column]:
    """Convert every DataFrame column into a Column in column order."""
    return [
        Column.from_series(df.iloc[:, position], name=str(column_name))
        for position, column_name in enumerate(df.columns)
    ]


class BulkOperationScope:
    """Put a workbook into manual calculation for the length of a bulk edit.

    The previous calculation settings are restored on every exit path,
    including when the edit raises.

    Usage::

        with BulkOperationScope(workbook):
            trim_whitespace(sheet)
    """

    def __init__(self, workbook, calc_mode: str = "manual"):
        self.workbook = workbook
        self.calc_mode = calc_mode
        self._saved = None

    def __enter__(self):
        if self.workbook.calculation is None:
            self.workbook.calculation = CalcProperties()

        calculation = self.workbook.calculation
        self._saved = (calculation.calcMode, calculation.fullCalcOnLoad)
        calculation.calcMode = self.calc_mode
        calculation.fullCalcOnLoad = False
        logger.debug(f"Calculation mode set to '{self.calc_mode}' for bulk operation")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        calc_mode, full_calc_on_load = self._saved
        self.workbook.calculation.calcMode = calc_mode
        self.workbook.calculation.fullCalcOnLoad = full_calc_on_load
        if exc_type is not None:
            logger.warning(f"Bulk operation aborted, settings restored: {exc_val}")
        else:
            logger.debug("Bulk operation finished, settings restored")
        return False

    @property
    def saved_settings(self):
        return self._saved
