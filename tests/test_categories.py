"""Tests for the section category registry."""

import pytest

from changeset_notes.categories import (
    BREAKING_CHANGES,
    BUG_FIXES,
    CATEGORIES,
    DEPENDENCIES,
    FEATURES,
    MAINTENANCE,
    OTHER,
    all_categories,
    all_headings,
    from_heading,
    is_valid_heading,
    resolve_commit_type,
)


class TestCatalogue:
    """Tests for the shape of the category table."""

    def test_thirteen_categories(self) -> None:
        """There are exactly 13 categories."""
        assert len(all_categories()) == 13

    def test_priorities_consecutive(self) -> None:
        """Priorities run 1..13 in table order."""
        assert [c.priority for c in CATEGORIES] == list(range(1, 14))

    def test_headings_unique_case_insensitive(self) -> None:
        """No two categories share a heading, ignoring case."""
        lowered = [heading.lower() for heading in all_headings()]
        assert len(set(lowered)) == len(lowered)

    def test_first_and_last(self) -> None:
        """Breaking Changes sorts first, Other last."""
        assert all_categories()[0] is BREAKING_CHANGES
        assert all_categories()[-1] is OTHER

    def test_categories_are_frozen(self) -> None:
        """Categories cannot be mutated."""
        with pytest.raises(AttributeError):
            FEATURES.priority = 99  # type: ignore[misc]

    def test_all_headings_order(self) -> None:
        """Headings are listed in priority order."""
        headings = all_headings()
        assert headings[:3] == ["Breaking Changes", "Features", "Bug Fixes"]
        assert headings[-1] == "Other"


class TestFromHeading:
    """Tests for heading lookup."""

    def test_exact_match(self) -> None:
        """Display heading resolves to its category."""
        assert from_heading("Bug Fixes") is BUG_FIXES

    def test_case_insensitive(self) -> None:
        """Lookup ignores case."""
        assert from_heading("bug fixes") is BUG_FIXES
        assert from_heading("FEATURES") is FEATURES
        assert from_heading("ci") is not None

    def test_partial_heading_not_matched(self) -> None:
        """Only exact headings match."""
        assert from_heading("Bug Fix") is None
        assert from_heading("Feature") is None

    def test_unknown_heading(self) -> None:
        """Unknown headings return None."""
        assert from_heading("Miscellaneous") is None
        assert from_heading("") is None

    @pytest.mark.parametrize("heading", [c.heading for c in CATEGORIES])
    def test_every_heading_round_trips(self, heading: str) -> None:
        """Every category heading resolves to itself."""
        category = from_heading(heading)
        assert category is not None
        assert category.heading == heading

    def test_is_valid_heading(self) -> None:
        """is_valid_heading agrees with from_heading."""
        assert is_valid_heading("performance")
        assert not is_valid_heading("Perf")


class TestResolveCommitType:
    """Tests for conventional commit type resolution."""

    def test_feat(self) -> None:
        """feat maps to Features."""
        assert resolve_commit_type("feat") is FEATURES

    def test_fix(self) -> None:
        """fix maps to Bug Fixes."""
        assert resolve_commit_type("fix") is BUG_FIXES

    def test_chore_and_style_are_maintenance(self) -> None:
        """chore and style both map to Maintenance."""
        assert resolve_commit_type("chore") is MAINTENANCE
        assert resolve_commit_type("style") is MAINTENANCE

    def test_chore_deps_scope(self) -> None:
        """chore(deps) maps to Dependencies."""
        assert resolve_commit_type("chore", scope="deps") is DEPENDENCIES

    def test_other_scope_with_chore(self) -> None:
        """chore with another scope stays Maintenance."""
        assert resolve_commit_type("chore", scope="release") is MAINTENANCE

    def test_deps_type(self) -> None:
        """deps as a type maps to Dependencies."""
        assert resolve_commit_type("deps") is DEPENDENCIES

    def test_breaking_wins(self) -> None:
        """The breaking flag overrides type and scope."""
        assert resolve_commit_type("feat", breaking=True) is BREAKING_CHANGES
        assert resolve_commit_type("chore", scope="deps", breaking=True) is BREAKING_CHANGES

    def test_unknown_type_is_other(self) -> None:
        """Unknown types fall back to Other."""
        assert resolve_commit_type("wip") is OTHER
        assert resolve_commit_type("") is OTHER
