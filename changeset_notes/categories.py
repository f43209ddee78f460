"""Section categories for release notes.

Defines the 13 section categories shared by the transform pipeline, the
fragment parser and any changelog validators. Each category maps
conventional commit types to a CHANGELOG section heading and carries a
priority used to order sections (lower sorts first).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SectionCategory:
    """A named, prioritized changelog grouping.

    Attributes:
        heading: Display heading used in CHANGELOG output, e.g. "Bug Fixes".
        priority: Ordering rank, 1 = first. Unique per category.
        commit_types: Conventional commit types that map onto this category.
        description: Brief description for documentation.
    """

    heading: str
    priority: int
    commit_types: tuple[str, ...]
    description: str


BREAKING_CHANGES = SectionCategory(
    heading="Breaking Changes",
    priority=1,
    commit_types=(),  # selected by the breaking flag, never by type
    description="Backward-incompatible changes",
)
FEATURES = SectionCategory(
    heading="Features",
    priority=2,
    commit_types=("feat",),
    description="New functionality",
)
BUG_FIXES = SectionCategory(
    heading="Bug Fixes",
    priority=3,
    commit_types=("fix",),
    description="Bug corrections",
)
PERFORMANCE = SectionCategory(
    heading="Performance",
    priority=4,
    commit_types=("perf",),
    description="Performance improvements",
)
DOCUMENTATION = SectionCategory(
    heading="Documentation",
    priority=5,
    commit_types=("docs",),
    description="Documentation changes",
)
REFACTORING = SectionCategory(
    heading="Refactoring",
    priority=6,
    commit_types=("refactor",),
    description="Code restructuring",
)
TESTS = SectionCategory(
    heading="Tests",
    priority=7,
    commit_types=("test",),
    description="Test additions or modifications",
)
BUILD_SYSTEM = SectionCategory(
    heading="Build System",
    priority=8,
    commit_types=("build",),
    description="Build configuration changes",
)
CI = SectionCategory(
    heading="CI",
    priority=9,
    commit_types=("ci",),
    description="Continuous integration changes",
)
DEPENDENCIES = SectionCategory(
    heading="Dependencies",
    priority=10,
    commit_types=("deps",),
    description="Dependency updates",
)
MAINTENANCE = SectionCategory(
    heading="Maintenance",
    priority=11,
    commit_types=("chore", "style"),
    description="General maintenance",
)
REVERTS = SectionCategory(
    heading="Reverts",
    priority=12,
    commit_types=("revert",),
    description="Reverted changes",
)
OTHER = SectionCategory(
    heading="Other",
    priority=13,
    commit_types=(),
    description="Uncategorized changes",
)

# All categories ordered by priority (ascending)
CATEGORIES: tuple[SectionCategory, ...] = (
    BREAKING_CHANGES,
    FEATURES,
    BUG_FIXES,
    PERFORMANCE,
    DOCUMENTATION,
    REFACTORING,
    TESTS,
    BUILD_SYSTEM,
    CI,
    DEPENDENCIES,
    MAINTENANCE,
    REVERTS,
    OTHER,
)

_HEADING_TO_CATEGORY: dict[str, SectionCategory] = {
    category.heading.lower(): category for category in CATEGORIES
}

_COMMIT_TYPE_TO_CATEGORY: dict[str, SectionCategory] = {
    commit_type: category
    for category in CATEGORIES
    for commit_type in category.commit_types
}


def all_categories() -> tuple[SectionCategory, ...]:
    """Return every category in priority order."""
    return CATEGORIES


def all_headings() -> list[str]:
    """Return the heading text of every category in priority order."""
    return [category.heading for category in CATEGORIES]


def from_heading(heading: str) -> SectionCategory | None:
    """Look up a category by its section heading text.

    Comparison is case-insensitive and exact otherwise: "bug fixes" matches
    Bug Fixes, "Bug Fix" does not.

    Args:
        heading: Heading text, e.g. "Features".

    Returns:
        The matching category, or None if the heading is not recognized.
    """
    return _HEADING_TO_CATEGORY.get(heading.lower())


def is_valid_heading(heading: str) -> bool:
    """Check whether a heading matches a known category (case-insensitive)."""
    return heading.lower() in _HEADING_TO_CATEGORY


def resolve_commit_type(
    commit_type: str, scope: str | None = None, breaking: bool = False
) -> SectionCategory:
    """Resolve a conventional commit type to a category.

    Resolution order:
    1. ``breaking`` always wins and returns Breaking Changes.
    2. ``chore`` with scope ``deps`` (``chore(deps):``) maps to Dependencies.
    3. The commit type table.
    4. Anything unknown falls back to Other.

    Args:
        commit_type: Commit type, e.g. "feat", "fix", "chore".
        scope: Optional commit scope, e.g. "deps".
        breaking: True when the commit carries the ``!`` breaking marker.

    Returns:
        The resolved category. Every input resolves to some category.
    """
    if breaking:
        return BREAKING_CHANGES

    if commit_type == "chore" and scope == "deps":
        return DEPENDENCIES

    return _COMMIT_TYPE_TO_CATEGORY.get(commit_type, OTHER)
