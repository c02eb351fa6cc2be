"""
Change Scorer

Weighted, additive scoring of a ChangeAnalysis. Decides whether a change is an
architectural decision worth recording.

Every criterion that fires contributes its weight to the raw confidence and one
reason string, so each verdict can be traced back to the facts behind it.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..common.config import DEFAULT_RECORD_THRESHOLD, DEFAULT_PROJECT_DECISION_THRESHOLD
from ..common.schemas import ChangeAnalysis, Recommendation, Scope

logger = logging.getLogger("archscribe.classifier.scorer")

# Trigger levels, shared with the fast-path check
MIN_AFFECTED_FILES = 3
MIN_AFFECTED_CONCEPTS = 10
MIN_DEPENDENTS = 5

# Criterion weights
FILE_IMPACT_WEIGHT = 0.30
CONCEPT_IMPACT_WEIGHT = 0.25
PROJECT_SCOPE_WEIGHT = 0.30
MODULE_SCOPE_WEIGHT = 0.15
DEPENDENTS_WEIGHT = 0.20
PATTERN_CHANGES_WEIGHT = 0.25
BREAKING_CHANGES_WEIGHT = 0.20
CONFIGURATION_CHANGES_WEIGHT = 0.15

# Raw sums are rounded so that weights adding up to a threshold land on it
_CONFIDENCE_PRECISION = 6


@dataclass
class ArchitecturalDecisionCriteria:
    """Result of scoring a change"""
    is_architectural: bool
    confidence: float  # clamped to [0, 1]
    reasons: List[str] = field(default_factory=list)
    recommendation: Recommendation = Recommendation.SKIP
    raw_confidence: float = 0.0  # unclamped, used for threshold comparisons

    def to_dict(self) -> dict:
        return {
            "is_architectural": self.is_architectural,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "recommendation": self.recommendation.value,
            "raw_confidence": self.raw_confidence,
        }


@dataclass(frozen=True)
class Criterion:
    """One weighted rule: when ``applies`` holds, add ``weight`` and a reason."""
    name: str
    weight: float
    applies: Callable[[ChangeAnalysis], bool]
    reason: Callable[[ChangeAnalysis], str]

    def evaluate(self, analysis: ChangeAnalysis) -> Optional[Tuple[float, str]]:
        if not self.applies(analysis):
            return None
        return self.weight, self.reason(analysis)


@dataclass(frozen=True)
class ScopeCriterion:
    """Scope rule keyed by the Scope enum. At most one entry can apply."""
    name: str
    table: Dict[Scope, Tuple[float, str]]

    def evaluate(self, analysis: ChangeAnalysis) -> Optional[Tuple[float, str]]:
        return self.table.get(analysis.scope)


SCOPE_CRITERION = ScopeCriterion(
    name="scope",
    table={
        Scope.PROJECT: (PROJECT_SCOPE_WEIGHT, "Project-wide scope detected"),
        Scope.MODULE: (MODULE_SCOPE_WEIGHT, "Module-wide scope detected"),
    },
)

DEFAULT_CRITERIA: Tuple = (
    Criterion(
        name="file_impact",
        weight=FILE_IMPACT_WEIGHT,
        applies=lambda a: len(a.affected_files) >= MIN_AFFECTED_FILES,
        reason=lambda a: f"Affects {len(a.affected_files)} files",
    ),
    Criterion(
        name="concept_impact",
        weight=CONCEPT_IMPACT_WEIGHT,
        applies=lambda a: len(a.affected_concepts) >= MIN_AFFECTED_CONCEPTS,
        reason=lambda a: f"Affects {len(a.affected_concepts)} semantic concepts",
    ),
    SCOPE_CRITERION,
    Criterion(
        name="dependents",
        weight=DEPENDENTS_WEIGHT,
        applies=lambda a: a.dependents_count >= MIN_DEPENDENTS,
        reason=lambda a: f"Affects {a.dependents_count} dependent files",
    ),
    Criterion(
        name="pattern_changes",
        weight=PATTERN_CHANGES_WEIGHT,
        applies=lambda a: len(a.pattern_changes) > 0,
        reason=lambda a: f"Introduces {len(a.pattern_changes)} pattern changes",
    ),
    Criterion(
        name="breaking_changes",
        weight=BREAKING_CHANGES_WEIGHT,
        applies=lambda a: a.breaking_changes,
        reason=lambda a: "Contains breaking changes",
    ),
    Criterion(
        name="configuration_changes",
        weight=CONFIGURATION_CHANGES_WEIGHT,
        applies=lambda a: a.configuration_changes,
        reason=lambda a: "Modifies project configuration",
    ),
)


class ChangeScorer:
    """
    Scores a change against weighted criteria.

    Algorithm:
    1. Evaluate each criterion in order
    2. Sum the weights of the criteria that fire, collecting their reasons
    3. raw >= record_threshold: record
    4. raw >= project_decision_threshold: use the project-level decision
    5. Otherwise skip

    Only the reported confidence is clamped to 1.0; thresholds compare the
    unclamped sum.
    """

    def __init__(
        self,
        criteria: Sequence = DEFAULT_CRITERIA,
        record_threshold: float = DEFAULT_RECORD_THRESHOLD,
        project_decision_threshold: float = DEFAULT_PROJECT_DECISION_THRESHOLD,
    ):
        """
        Initialize change scorer.

        Args:
            criteria: Ordered criteria; each exposes ``evaluate(analysis)``
            record_threshold: Minimum raw confidence to record a decision
            project_decision_threshold: Minimum raw confidence to defer to a
                project-level decision

        Raises:
            ValueError: if the thresholds are negative or out of order
        """
        if not 0.0 <= project_decision_threshold <= record_threshold:
            raise ValueError(
                "Thresholds must satisfy 0 <= project_decision_threshold <= record_threshold "
                f"(got {project_decision_threshold}, {record_threshold})"
            )
        self._criteria = tuple(criteria)
        self._record_threshold = record_threshold
        self._project_decision_threshold = project_decision_threshold

    @property
    def criteria(self) -> Tuple:
        return self._criteria

    @property
    def record_threshold(self) -> float:
        return self._record_threshold

    @property
    def project_decision_threshold(self) -> float:
        return self._project_decision_threshold

    def score(self, analysis: ChangeAnalysis) -> ArchitecturalDecisionCriteria:
        """
        Score a change.

        Args:
            analysis: Validated change facts

        Returns:
            ArchitecturalDecisionCriteria with verdict, confidence, reasons
            and recommendation
        """
        reasons: List[str] = []
        raw = 0.0

        for criterion in self._criteria:
            hit = criterion.evaluate(analysis)
            if hit is None:
                continue
            weight, reason = hit
            raw += weight
            reasons.append(reason)

        raw = round(raw, _CONFIDENCE_PRECISION)
        recommendation = self.recommend(raw)
        is_architectural = recommendation is Recommendation.RECORD

        logger.debug(
            "Scored change: raw=%.2f recommendation=%s criteria=%d",
            raw, recommendation.value, len(reasons),
        )

        return ArchitecturalDecisionCriteria(
            is_architectural=is_architectural,
            confidence=min(1.0, raw),
            reasons=reasons,
            recommendation=recommendation,
            raw_confidence=raw,
        )

    def recommend(self, raw_confidence: float) -> Recommendation:
        """Map an unclamped confidence to a recommendation."""
        if raw_confidence >= self._record_threshold:
            return Recommendation.RECORD
        if raw_confidence >= self._project_decision_threshold:
            # Medium impact: likely covered by a project-level decision
            return Recommendation.USE_PROJECT_DECISION
        return Recommendation.SKIP

    def explain(self, result: ArchitecturalDecisionCriteria) -> str:
        """
        Generate human-readable explanation of a scoring result.

        Args:
            result: Scoring result to explain

        Returns:
            Explanation string
        """
        if result.is_architectural:
            headline = f"Architectural decision detected (confidence: {result.confidence:.2f})"
        else:
            headline = (
                f"Not architectural (confidence: {result.confidence:.2f}, "
                f"threshold: {self._record_threshold})"
            )

        lines = [headline]
        if result.reasons:
            lines.append("  Reasons:")
            for reason in result.reasons:
                lines.append(f"    - {reason}")

        if result.recommendation is Recommendation.RECORD:
            lines.append("  Action: RECORD (write an architecture decision record)")
        elif result.recommendation is Recommendation.USE_PROJECT_DECISION:
            lines.append("  Action: USE PROJECT DECISION (moderate impact)")
        else:
            lines.append("  Action: SKIP")

        return "\n".join(lines)


_default_scorer = ChangeScorer()


def assess_architectural_decision(analysis: ChangeAnalysis) -> ArchitecturalDecisionCriteria:
    """Score a change with the default criteria and thresholds."""
    return _default_scorer.score(analysis)
