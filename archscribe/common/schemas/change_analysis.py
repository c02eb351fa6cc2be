"""
Change Analysis Schema

Input facts about a proposed code change, as computed by an upstream diff or
static-analysis pipeline. The classifier only aggregates these facts; it never
inspects code itself.

Field names follow Python conventions, but the camelCase wire names
(affectedFiles, dependentsCount, ...) are accepted when validating.
"""

from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, ValidationError
from pydantic.alias_generators import to_camel


# ============================================================================
# Enums
# ============================================================================

class Scope(str, Enum):
    """Blast radius of a change"""
    FILE = "file"
    MODULE = "module"
    PROJECT = "project"


class Recommendation(str, Enum):
    """Action guidance derived from confidence"""
    RECORD = "record"
    SKIP = "skip"
    USE_PROJECT_DECISION = "use_project_decision"


# ============================================================================
# Models
# ============================================================================

class ChangeAnalysis(BaseModel):
    """Complete, validated facts about a change. Sequences may be empty but not absent."""
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    affected_files: List[StrictStr] = Field(..., description="Files touched by the change")
    affected_concepts: List[StrictStr] = Field(..., description="Distinct semantic concepts touched")
    scope: Scope = Field(..., description="Blast radius: file, module or project")
    pattern_changes: List[StrictStr] = Field(..., description="Named design-pattern changes")
    dependents_count: StrictInt = Field(..., ge=0, description="Files depending on the changed code")
    breaking_changes: StrictBool = Field(..., description="Change breaks a public contract")
    configuration_changes: StrictBool = Field(..., description="Change alters project configuration")


class PartialChangeAnalysis(BaseModel):
    """
    Facts about a change that may still be incomplete.

    Any field may be None, meaning "not computed yet". Used by the fast-path
    check while a fuller analysis is being assembled.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    affected_files: Optional[List[StrictStr]] = None
    affected_concepts: Optional[List[StrictStr]] = None
    scope: Optional[Scope] = None
    pattern_changes: Optional[List[StrictStr]] = None
    dependents_count: Optional[StrictInt] = Field(default=None, ge=0)
    breaking_changes: Optional[StrictBool] = None
    configuration_changes: Optional[StrictBool] = None


# ============================================================================
# Boundary validation
# ============================================================================

class ChangeAnalysisError(ValueError):
    """Raised when change facts do not satisfy the input contract"""


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "analysis"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_change_analysis(data: Mapping[str, Any]) -> ChangeAnalysis:
    """
    Validate a mapping into a ChangeAnalysis.

    Raises:
        ChangeAnalysisError: if a field is missing, has the wrong type,
            a count is negative or the scope is not file/module/project
    """
    try:
        return ChangeAnalysis.model_validate(dict(data))
    except ValidationError as e:
        raise ChangeAnalysisError(f"Invalid change analysis: {_format_errors(e)}") from e


def parse_partial_analysis(data: Mapping[str, Any]) -> PartialChangeAnalysis:
    """Validate a mapping into a PartialChangeAnalysis (absent keys stay None)."""
    try:
        return PartialChangeAnalysis.model_validate(dict(data))
    except ValidationError as e:
        raise ChangeAnalysisError(f"Invalid partial change analysis: {_format_errors(e)}") from e
