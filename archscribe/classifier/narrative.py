"""
Narrative Synthesizer

Turns the facts of a change into a short decision context and rationale for an
architecture decision record. Unlike the scorer, only one branch is used: the
first matching rule in priority order (patterns, project scope, breaking
changes, then a structural default).
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from ..common.schemas import ChangeAnalysis, Scope


@dataclass
class DecisionContext:
    """Suggested text for recording a decision"""
    decision_context: str
    suggested_rationale: str
    # No alternatives are synthesized yet; kept so records have a stable shape
    suggested_alternatives: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "decision_context": self.decision_context,
            "suggested_rationale": self.suggested_rationale,
            "suggested_alternatives": dict(self.suggested_alternatives),
        }


Branch = Tuple[
    str,
    Callable[[ChangeAnalysis], bool],
    Callable[[ChangeAnalysis], Tuple[str, str]],
]


def _pattern_narrative(a: ChangeAnalysis) -> Tuple[str, str]:
    return (
        f"Adopted {', '.join(a.pattern_changes)} pattern(s)",
        f"Pattern detected across {len(a.affected_files)} files",
    )


def _project_narrative(a: ChangeAnalysis) -> Tuple[str, str]:
    return (
        f"Project-wide change affecting {len(a.affected_files)} files",
        f"Change impacts multiple modules and {len(a.affected_concepts)} concepts",
    )


def _breaking_narrative(a: ChangeAnalysis) -> Tuple[str, str]:
    return (
        "Breaking change introduced",
        f"Change affects {a.dependents_count} dependent files",
    )


def _structural_narrative(a: ChangeAnalysis) -> Tuple[str, str]:
    return (
        f"Structural change affecting {len(a.affected_files)} files",
        f"Change impacts {len(a.affected_concepts)} semantic concepts",
    )


NARRATIVE_BRANCHES: List[Branch] = [
    ("pattern_changes", lambda a: len(a.pattern_changes) > 0, _pattern_narrative),
    ("project_scope", lambda a: a.scope is Scope.PROJECT, _project_narrative),
    ("breaking_changes", lambda a: a.breaking_changes, _breaking_narrative),
]


class NarrativeSynthesizer:
    """Builds decision context and rationale from change facts."""

    def __init__(self, branches: Optional[List[Branch]] = None):
        self._branches = list(NARRATIVE_BRANCHES if branches is None else branches)

    def select_branch(self, analysis: ChangeAnalysis) -> str:
        """Name of the branch that would drive the narrative."""
        for name, matches, _ in self._branches:
            if matches(analysis):
                return name
        return "structural"

    def explain(self, analysis: ChangeAnalysis) -> DecisionContext:
        """
        Extract decision context from change analysis.

        Args:
            analysis: Validated change facts

        Returns:
            DecisionContext from the first matching branch
        """
        build = _structural_narrative
        for _, matches, narrative in self._branches:
            if matches(analysis):
                build = narrative
                break

        context, rationale = build(analysis)
        return DecisionContext(
            decision_context=context,
            suggested_rationale=rationale,
        )


def extract_decision_context(analysis: ChangeAnalysis) -> DecisionContext:
    """Synthesize a decision context with the default branches."""
    return NarrativeSynthesizer().explain(analysis)
