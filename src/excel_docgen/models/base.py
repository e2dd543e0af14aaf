"""Base data models for the Excel documentation toolkit."""

import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..utils.config import NULL_LITERAL


class AgentStatus(str, Enum):
    """Agent execution status."""
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"
    TIMEOUT = "timeout"


class OutputFormat(str, Enum):
    """Report output formats."""
    MARKDOWN = "markdown"
    JSON = "json"


class CellKind(str, Enum):
    """Tag of a cell value."""
    EMPTY = "empty"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    TEXT = "text"
    FORMULA = "formula"


class TypeClassification(str, Enum):
    """Inferred semantic type of a column."""
    EMPTY = "Empty"
    NUMBER = "Number"
    CURRENCY = "Currency"
    PERCENTAGE = "Percentage"
    DATE = "Date"
    FORMULA = "Formula"
    TEXT = "Text"
    UNKNOWN = "Unknown"


class QualityLevel(str, Enum):
    """Coarse completeness grade of a column."""
    CLEAN = "Clean"
    WARNING = "Warning"
    ERROR = "Error"


class FormulaComplexity(str, Enum):
    """Heuristic complexity grade of a formula."""
    SIMPLE = "Simple"
    MODERATE = "Moderate"
    COMPLEX = "Complex"


class AgentRequest(BaseModel):
    """Base request model for all agents."""
    agent_id: str
    request_id: str = Field(default_factory=lambda: f"req_{datetime.now().isoformat()}")
    timestamp: datetime = Field(default_factory=datetime.now)
    context: Dict[str, Any] = Field(default_factory=dict)


class AgentResponse(BaseModel):
    """Base response model for all agents."""
    agent_id: str
    request_id: str
    status: AgentStatus
    result: Optional[Dict[str, Any]] = None
    error_log: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    execution_time_ms: Optional[int] = None


class CellValue(BaseModel):
    """A single cell value tagged with its kind."""
    model_config = ConfigDict(frozen=True)

    kind: CellKind
    value: Any = None

    @property
    def is_missing(self) -> bool:
        """Empty cells and the literal text ``null`` count as missing."""
        if self.kind == CellKind.EMPTY:
            return True
        return (
            self.kind == CellKind.TEXT
            and str(self.value).strip().lower() == NULL_LITERAL
        )

    @classmethod
    def from_raw(cls, value: Any) -> "CellValue":
        """Tag a raw Python, numpy or pandas scalar."""
        if value is None or value is pd.NaT:
            return cls(kind=CellKind.EMPTY)

        if isinstance(value, (bool, np.bool_)):
            return cls(kind=CellKind.BOOLEAN, value=bool(value))

        if isinstance(value, (Real, Decimal)):
            number = float(value)
            if not math.isfinite(number):
                return cls(kind=CellKind.EMPTY)
            return cls(kind=CellKind.NUMBER, value=number)

        if isinstance(value, pd.Timestamp):
            return cls(kind=CellKind.DATE, value=value.to_pydatetime())

        if isinstance(value, (datetime, date, time)):
            return cls(kind=CellKind.DATE, value=value)

        if isinstance(value, str):
            if not value.strip():
                return cls(kind=CellKind.EMPTY)
            if value.startswith("="):
                return cls(kind=CellKind.FORMULA, value=value)
            return cls(kind=CellKind.TEXT, value=value)

        return cls(kind=CellKind.TEXT, value=str(value))

    @classmethod
    def from_cell(cls, cell) -> "CellValue":
        """Tag an openpyxl cell, keeping formulas as formulas."""
        if cell.data_type == "f":
            # Array formulas carry their text on an object
            text = str(getattr(cell.value, "text", cell.value) or "")
            if not text.startswith("="):
                text = f"={text}"
            return cls(kind=CellKind.FORMULA, value=text)
        return cls.from_raw(cell.value)


class Column(BaseModel):
    """An ordered, immutable column of cell values with optional display format."""
    model_config = ConfigDict(frozen=True)

    name: str
    values: Tuple[CellValue, ...] = ()
    number_format: Optional[str] = None

    def __len__(self) -> int:
        return len(self.values)

    @classmethod
    def from_values(
        cls,
        name: str,
        values: Iterable[Any],
        number_format: Optional[str] = None
    ) -> "Column":
        """Build a column from raw scalars."""
        return cls(
            name=str(name),
            values=tuple(
                v if isinstance(v, CellValue) else CellValue.from_raw(v)
                for v in values
            ),
            number_format=number_format,
        )

    @classmethod
    def from_series(cls, series: pd.Series, name: Optional[str] = None) -> "Column":
        """Build a column from a pandas Series."""
        return cls.from_values(name if name is not None else series.name, series.tolist())


class QualityFlag(BaseModel):
    """Completeness grade plus the empty/null percentage it was derived from."""
    model_config = ConfigDict(frozen=True)

    level: QualityLevel
    empty_percent: int = 0

    @computed_field
    @property
    def label(self) -> str:
        if self.level == QualityLevel.CLEAN:
            return "Clean"
        return f"{self.level.value} ({self.empty_percent}% empty/null)"


class ColumnProfile(BaseModel):
    """Column profiling information for one report row."""
    index: int
    column_name: str
    data_type: TypeClassification
    quality: QualityFlag
    sample_values: List[str] = Field(default_factory=list)
    note: str = ""


class SkippedColumn(BaseModel):
    """A column that could not be read or profiled."""
    column_name: str
    reason: str


class TableDocumentation(BaseModel):
    """Profiles of every column of one table."""
    sheet_name: str
    table_name: str
    ref: Optional[str] = None
    row_count: int = 0
    implicit: bool = False
    profiles: List[ColumnProfile] = Field(default_factory=list)
    skipped_columns: List[SkippedColumn] = Field(default_factory=list)


class FormulaEntry(BaseModel):
    """One documented formula."""
    sheet_name: str
    cell: str
    formula: str
    functions: List[str] = Field(default_factory=list)
    cross_sheet: bool = False
    nesting_depth: int = 0
    complexity: FormulaComplexity = FormulaComplexity.SIMPLE
    note: str = ""


class WorkbookDocumentation(BaseModel):
    """Everything generated for one workbook."""
    file_name: str
    generated_at: datetime = Field(default_factory=datetime.now)
    tables: List[TableDocumentation] = Field(default_factory=list)
    formulas: List[FormulaEntry] = Field(default_factory=list)
    skipped_tables: List[str] = Field(default_factory=list)
