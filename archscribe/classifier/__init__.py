"""
Architectural Decision Classifier

Decides whether a code change is an architectural decision worth recording.

Key Components:
- ChangeScorer: Weighted criteria, confidence and recommendation
- is_likely_architectural: Unweighted fast path for partial facts
- NarrativeSynthesizer: Decision context and rationale for the record
- is_architecturally_significant: File path catalog lookup

All components are pure functions of their input.
"""

from .scorer import (
    ChangeScorer,
    ArchitecturalDecisionCriteria,
    Criterion,
    ScopeCriterion,
    DEFAULT_CRITERIA,
    assess_architectural_decision,
)
from .fast_path import is_likely_architectural
from .narrative import NarrativeSynthesizer, DecisionContext, extract_decision_context
from .path_matcher import is_architecturally_significant, matching_categories

__all__ = [
    "ChangeScorer",
    "ArchitecturalDecisionCriteria",
    "Criterion",
    "ScopeCriterion",
    "DEFAULT_CRITERIA",
    "assess_architectural_decision",
    "is_likely_architectural",
    "NarrativeSynthesizer",
    "DecisionContext",
    "extract_decision_context",
    "is_architecturally_significant",
    "matching_categories",
]
