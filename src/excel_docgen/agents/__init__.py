"""Agent implementations for the Excel documentation toolkit."""

from .base import BaseAgent
from .table_documentation import TableDocumentationAgent
from .formula_documentation import FormulaDocumentationAgent
from .sheet_cleanup import SheetCleanupAgent

__all__ = [
    "BaseAgent",
    "TableDocumentationAgent",
    "FormulaDocumentationAgent",
    "SheetCleanupAgent",
]
