"""Core components for the Excel documentation toolkit."""

from .profiler import (
    InvalidColumnError, classify_type, compute_quality, profile_column,
    sample_values
)
from .advisory import AdvisoryRule, COLUMN_RULES, advise
from .workbook import BulkOperationScope

__all__ = [
    "InvalidColumnError",
    "classify_type",
    "compute_quality",
    "profile_column",
    "sample_values",
    "AdvisoryRule",
    "COLUMN_RULES",
    "advise",
    "BulkOperationScope",
]
