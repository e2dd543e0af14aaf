"""Agent-specific data models."""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import Field
from .base import (
    AgentRequest, AgentResponse, FormulaEntry, OutputFormat, TableDocumentation
)


class CleanupOperation(str, Enum):
    """Bulk edits supported by the Sheet Cleanup Agent."""
    TRIM_WHITESPACE = "trim_whitespace"
    FILL_BLANKS = "fill_blanks"
    DELETE_HIDDEN_ROWS = "delete_hidden_rows"


# Table Documentation Agent Models
class TableDocumentationRequest(AgentRequest):
    """Request for Table Documentation Agent."""
    file_path: str
    sheet_name: Optional[str] = None  # If None, document every sheet
    output_format: OutputFormat = OutputFormat.MARKDOWN


class TableDocumentationResponse(AgentResponse):
    """Response from Table Documentation Agent."""
    tables: List[TableDocumentation] = Field(default_factory=list)
    skipped_tables: List[str] = Field(default_factory=list)
    content: Optional[str] = None


# Formula Documentation Agent Models
class FormulaDocumentationRequest(AgentRequest):
    """Request for Formula Documentation Agent."""
    file_path: str
    sheet_name: Optional[str] = None
    output_format: OutputFormat = OutputFormat.MARKDOWN


class FormulaDocumentationResponse(AgentResponse):
    """Response from Formula Documentation Agent."""
    formulas: List[FormulaEntry] = Field(default_factory=list)
    truncated: bool = False
    content: Optional[str] = None


# Sheet Cleanup Agent Models
class SheetCleanupRequest(AgentRequest):
    """Request for Sheet Cleanup Agent."""
    file_path: str
    sheet_name: Optional[str] = None  # If None, the active sheet
    operations: List[CleanupOperation] = Field(min_length=1)
    cell_range: Optional[str] = None
    fill_value: Optional[str] = None  # If None, blanks take the value above
    output_path: Optional[str] = None  # If None, overwrite the source file


class SheetCleanupResponse(AgentResponse):
    """Response from Sheet Cleanup Agent."""
    output_path: Optional[str] = None
    changes: Dict[str, int] = Field(default_factory=dict)
    log: List[str] = Field(default_factory=list)
