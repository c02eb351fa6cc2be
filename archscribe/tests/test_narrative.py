"""
Tests for Narrative Synthesizer

Tests branch priority and the generated context/rationale text.
"""

import pytest


def make_analysis(**overrides):
    from archscribe.common.schemas import ChangeAnalysis

    fields = {
        "affected_files": ["src/a.py", "src/b.py", "src/c.py", "src/d.py"],
        "affected_concepts": ["Order", "Invoice"],
        "scope": "file",
        "pattern_changes": [],
        "dependents_count": 8,
        "breaking_changes": False,
        "configuration_changes": False,
    }
    fields.update(overrides)
    return ChangeAnalysis(**fields)


class TestNarrativeSynthesizer:

    @pytest.fixture
    def synthesizer(self):
        from archscribe.classifier.narrative import NarrativeSynthesizer
        return NarrativeSynthesizer()

    def test_pattern_branch(self, synthesizer):
        result = synthesizer.explain(make_analysis(pattern_changes=["Repository", "Unit of Work"]))

        assert result.decision_context == "Adopted Repository, Unit of Work pattern(s)"
        assert result.suggested_rationale == "Pattern detected across 4 files"

    def test_project_branch(self, synthesizer):
        result = synthesizer.explain(make_analysis(scope="project"))

        assert result.decision_context == "Project-wide change affecting 4 files"
        assert result.suggested_rationale == "Change impacts multiple modules and 2 concepts"

    def test_breaking_branch(self, synthesizer):
        result = synthesizer.explain(make_analysis(breaking_changes=True))

        assert result.decision_context == "Breaking change introduced"
        assert result.suggested_rationale == "Change affects 8 dependent files"

    def test_default_branch(self, synthesizer):
        result = synthesizer.explain(make_analysis(scope="module"))

        assert result.decision_context == "Structural change affecting 4 files"
        assert result.suggested_rationale == "Change impacts 2 semantic concepts"

    def test_patterns_win_over_breaking_changes(self, synthesizer):
        analysis = make_analysis(pattern_changes=["CQRS"], breaking_changes=True, scope="project")

        result = synthesizer.explain(analysis)

        assert result.decision_context == "Adopted CQRS pattern(s)"
        assert synthesizer.select_branch(analysis) == "pattern_changes"

    def test_project_wins_over_breaking_changes(self, synthesizer):
        analysis = make_analysis(scope="project", breaking_changes=True)

        assert synthesizer.select_branch(analysis) == "project_scope"

    def test_alternatives_always_empty(self, synthesizer):
        result = synthesizer.explain(make_analysis(pattern_changes=["Saga"]))

        assert result.suggested_alternatives == {}

    def test_alternatives_not_shared_between_calls(self, synthesizer):
        first = synthesizer.explain(make_analysis())
        first.suggested_alternatives["option"] = "mutated"

        second = synthesizer.explain(make_analysis())

        assert second.suggested_alternatives == {}

    def test_custom_branches_replace_defaults(self):
        from archscribe.classifier.narrative import NarrativeSynthesizer

        only_breaking = [(
            "breaking_only",
            lambda a: a.breaking_changes,
            lambda a: ("API break", f"{a.dependents_count} callers"),
        )]
        synthesizer = NarrativeSynthesizer(branches=only_breaking)
        analysis = make_analysis(pattern_changes=["Saga"], breaking_changes=True)

        result = synthesizer.explain(analysis)

        assert result.decision_context == "API break"
        assert result.suggested_rationale == "8 callers"
        assert synthesizer.select_branch(make_analysis()) == "structural"

    def test_empty_branch_list_always_structural(self):
        from archscribe.classifier.narrative import NarrativeSynthesizer

        synthesizer = NarrativeSynthesizer(branches=[])

        result = synthesizer.explain(make_analysis(pattern_changes=["Saga"]))

        assert result.decision_context == "Structural change affecting 4 files"

    def test_to_dict(self, synthesizer):
        data = synthesizer.explain(make_analysis(breaking_changes=True)).to_dict()

        assert data == {
            "decision_context": "Breaking change introduced",
            "suggested_rationale": "Change affects 8 dependent files",
            "suggested_alternatives": {},
        }


def test_extract_decision_context_function():
    from archscribe.classifier import extract_decision_context

    result = extract_decision_context(make_analysis(affected_files=[], affected_concepts=[]))

    assert result.decision_context == "Structural change affecting 0 files"
    assert result.suggested_rationale == "Change impacts 0 semantic concepts"
