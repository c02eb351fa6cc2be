"""
Fast-path check: is this likely an architectural decision?

A cheaper, unweighted alternative to ChangeScorer for when only part of the
analysis is available. Any single criterion is enough. Missing facts never
count as evidence.
"""

from typing import Any, Mapping, Union

from ..common.schemas import ChangeAnalysis, PartialChangeAnalysis, Scope, parse_partial_analysis
from .scorer import MIN_AFFECTED_CONCEPTS, MIN_AFFECTED_FILES, MIN_DEPENDENTS

AnalysisLike = Union[ChangeAnalysis, PartialChangeAnalysis, Mapping[str, Any]]


def is_likely_architectural(analysis: AnalysisLike) -> bool:
    """
    Quick check on possibly incomplete change facts.

    Configuration changes alone are not considered here.

    Args:
        analysis: Full or partial analysis, or a mapping of its fields

    Returns:
        True if any criterion holds for the fields that are present

    Raises:
        ChangeAnalysisError: if a mapping holds a malformed value
    """
    if isinstance(analysis, Mapping):
        analysis = parse_partial_analysis(analysis)

    files = analysis.affected_files
    concepts = analysis.affected_concepts
    dependents = analysis.dependents_count
    patterns = analysis.pattern_changes

    return bool(
        (files is not None and len(files) >= MIN_AFFECTED_FILES)
        or (concepts is not None and len(concepts) >= MIN_AFFECTED_CONCEPTS)
        or analysis.scope is Scope.PROJECT
        or (dependents is not None and dependents >= MIN_DEPENDENTS)
        or (patterns is not None and len(patterns) > 0)
        or analysis.breaking_changes
    )
