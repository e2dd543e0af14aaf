"""Unit tests for the tagged cell and column models."""

from datetime import date, datetime
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from excel_docgen.models.base import (
    CellKind, CellValue, Column, QualityFlag, QualityLevel
)


class TestCellValue:
    """Raw value tagging."""

    @pytest.mark.parametrize("raw", [None, float("nan"), float("inf"), "", "   ", pd.NaT])
    def test_empty_values(self, raw):
        assert CellValue.from_raw(raw).kind == CellKind.EMPTY

    def test_booleans_are_not_numbers(self):
        assert CellValue.from_raw(True) == CellValue(kind=CellKind.BOOLEAN, value=True)
        assert CellValue.from_raw(np.bool_(False)).kind == CellKind.BOOLEAN

    @pytest.mark.parametrize("raw, expected", [
        (5, 5.0),
        (2.5, 2.5),
        (np.int64(7), 7.0),
        (np.float64(1.25), 1.25),
        (Decimal("1.5"), 1.5),
    ])
    def test_numbers(self, raw, expected):
        cell = CellValue.from_raw(raw)
        assert cell.kind == CellKind.NUMBER
        assert cell.value == expected

    def test_dates(self):
        assert CellValue.from_raw(date(2024, 1, 2)).kind == CellKind.DATE
        cell = CellValue.from_raw(pd.Timestamp("2024-01-02 03:04:05"))
        assert cell.kind == CellKind.DATE
        assert cell.value == datetime(2024, 1, 2, 3, 4, 5)

    def test_text_and_formulas(self):
        assert CellValue.from_raw("hello").kind == CellKind.TEXT
        assert CellValue.from_raw("=A1*2").kind == CellKind.FORMULA
        assert CellValue.from_raw(object()).kind == CellKind.TEXT

    def test_missing(self):
        assert CellValue.from_raw(None).is_missing
        assert CellValue.from_raw(" NULL ").is_missing
        assert not CellValue.from_raw("nullable").is_missing
        assert not CellValue.from_raw(0).is_missing


class TestColumn:
    """Immutable columns."""

    def test_from_values(self):
        column = Column.from_values("Qty", [1, None, "x"], number_format="0")
        assert len(column) == 3
        assert [cell.kind for cell in column.values] == [
            CellKind.NUMBER, CellKind.EMPTY, CellKind.TEXT
        ]
        assert column.number_format == "0"

    def test_from_series(self):
        column = Column.from_series(pd.Series([1, None, 3], name="qty"))
        assert column.name == "qty"
        assert [cell.kind for cell in column.values] == [
            CellKind.NUMBER, CellKind.EMPTY, CellKind.NUMBER
        ]

    def test_columns_are_frozen(self):
        column = Column.from_values("Qty", [1])
        with pytest.raises(ValidationError):
            column.name = "Other"


class TestQualityFlag:
    """Quality labels."""

    def test_labels(self):
        assert QualityFlag(level=QualityLevel.CLEAN).label == "Clean"
        assert QualityFlag(level=QualityLevel.WARNING, empty_percent=40).label == \
            "Warning (40% empty/null)"
        assert QualityFlag(level=QualityLevel.ERROR, empty_percent=100).label == \
            "Error (100% empty/null)"

    def test_label_is_serialized(self):
        dumped = QualityFlag(level=QualityLevel.WARNING, empty_percent=10).model_dump()
        assert dumped["label"] == "Warning (10% empty/null)"
