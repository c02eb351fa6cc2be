"""
archscribe Schemas

Input contract for the architectural decision classifier.
"""

from .change_analysis import (
    ChangeAnalysis,
    PartialChangeAnalysis,
    Scope,
    Recommendation,
    ChangeAnalysisError,
    parse_change_analysis,
    parse_partial_analysis,
)

__all__ = [
    "ChangeAnalysis",
    "PartialChangeAnalysis",
    "Scope",
    "Recommendation",
    "ChangeAnalysisError",
    "parse_change_analysis",
    "parse_partial_analysis",
]
