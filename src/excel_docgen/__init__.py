"""
Excel Documentation Toolkit

Profiles the columns of Excel tables into Markdown or JSON documentation,
inventories formulas, and tidies worksheets.
"""

__version__ = "0.1.0"

from .core.orchestrator import Orchestrator
from .core.profiler import classify_type, compute_quality, profile_column, sample_values
from .core.advisory import advise
from .models.base import AgentRequest, AgentResponse, Column
from .agents import *

__all__ = [
    "Orchestrator",
    "AgentRequest",
    "AgentResponse",
    "Column",
    "classify_type",
    "compute_quality",
    "sample_values",
    "advise",
    "profile_column",
]
