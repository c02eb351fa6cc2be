"""
Path Significance Matcher

Decides whether a file path points at something architecturally meaningful:
build manifests, entry points, architecture docs or core infrastructure
directories.

Matching is plain, case-sensitive substring/suffix matching. Paths are not
normalized, so callers must use forward slashes like the catalog does.
"""

from typing import Dict, List, Tuple

CONFIGURATION_FILES: Tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "pyproject.toml",
)

ENTRY_POINTS: Tuple[str, ...] = (
    "main.ts",
    "main.js",
    "index.ts",
    "index.js",
    "app.py",
    "main.rs",
    "main.go",
)

ARCHITECTURE_DOCS: Tuple[str, ...] = (
    "architecture.md",
    "adr/",
    "docs/architecture",
)

CORE_INFRASTRUCTURE: Tuple[str, ...] = (
    "src/core/",
    "src/infrastructure/",
    "src/framework/",
    "lib/core/",
)

ARCHITECTURAL_INDICATORS: Dict[str, Tuple[str, ...]] = {
    "configuration": CONFIGURATION_FILES,
    "entry_point": ENTRY_POINTS,
    "architecture_docs": ARCHITECTURE_DOCS,
    "core_infrastructure": CORE_INFRASTRUCTURE,
}


def _matches(file_path: str, indicator: str) -> bool:
    return indicator in file_path or file_path.endswith(indicator)


def is_architecturally_significant(file_path: str) -> bool:
    """
    Check if a file path indicates architectural significance.

    Args:
        file_path: Path as reported by the change analysis

    Returns:
        True if any catalog indicator occurs in the path
    """
    return any(
        _matches(file_path, indicator)
        for indicators in ARCHITECTURAL_INDICATORS.values()
        for indicator in indicators
    )


def matching_categories(file_path: str) -> List[str]:
    """Return the catalog categories matched by file_path, in catalog order."""
    return [
        category
        for category, indicators in ARCHITECTURAL_INDICATORS.items()
        if any(_matches(file_path, indicator) for indicator in indicators)
    ]
