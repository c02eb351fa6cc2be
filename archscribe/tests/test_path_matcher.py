"""Tests for the architecturally significant path catalog."""

import pytest


class TestIsArchitecturallySignificant:

    @pytest.mark.parametrize("path", [
        "package.json",
        "services/billing/package.json",
        "crates/engine/Cargo.toml",
        "backend/go.mod",
        "pyproject.toml",
        "apps/web/src/main.ts",
        "server/app.py",
        "docs/adr/0003-use-postgres.md",
        "docs/architecture/overview.md",
        "ARCHITECTURE/architecture.md",
        "src/core/events.py",
        "src/infrastructure/db/pool.ts",
        "lib/core/util.rb",
    ])
    def test_significant_paths(self, path):
        from archscribe.classifier.path_matcher import is_architecturally_significant

        assert is_architecturally_significant(path) is True

    @pytest.mark.parametrize("path", [
        "src/utils/string_helpers.py",
        "tests/test_billing.py",
        "README.md",
        "src/components/Button.tsx",
    ])
    def test_unrelated_paths(self, path):
        from archscribe.classifier.path_matcher import is_architecturally_significant

        assert is_architecturally_significant(path) is False

    def test_case_sensitive(self):
        from archscribe.classifier.path_matcher import is_architecturally_significant

        assert is_architecturally_significant("Package.JSON") is False
        assert is_architecturally_significant("cargo.toml") is False

    def test_no_separator_normalization(self):
        from archscribe.classifier.path_matcher import is_architecturally_significant

        assert is_architecturally_significant("src\\core\\events.py") is False
        assert is_architecturally_significant("src/core/events.py") is True


class TestMatchingCategories:

    def test_manifest_category(self):
        from archscribe.classifier.path_matcher import matching_categories

        assert matching_categories("a/b/pom.xml") == ["configuration"]

    def test_multiple_categories_in_catalog_order(self):
        from archscribe.classifier.path_matcher import matching_categories

        assert matching_categories("src/core/main.go") == ["entry_point", "core_infrastructure"]

    def test_no_match(self):
        from archscribe.classifier.path_matcher import matching_categories

        assert matching_categories("notes.txt") == []

    def test_catalog_has_four_categories(self):
        from archscribe.classifier.path_matcher import ARCHITECTURAL_INDICATORS

        assert list(ARCHITECTURAL_INDICATORS) == [
            "configuration",
            "entry_point",
            "architecture_docs",
            "core_infrastructure",
        ]
