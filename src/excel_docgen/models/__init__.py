"""Data models for the Excel documentation toolkit."""

from .base import (
    AgentRequest, AgentResponse, AgentStatus, CellKind, CellValue, Column,
    ColumnProfile, QualityFlag, QualityLevel, TableDocumentation,
    TypeClassification, WorkbookDocumentation
)
from .agents import *

__all__ = [
    "AgentRequest",
    "AgentResponse",
    "AgentStatus",
    "CellKind",
    "CellValue",
    "Column",
    "ColumnProfile",
    "QualityFlag",
    "QualityLevel",
    "TableDocumentation",
    "TypeClassification",
    "WorkbookDocumentation",
]
