"""Tests for ordering sections by category priority."""

from changeset_notes.markdown import parse_markdown, stringify_markdown
from changeset_notes.markdown.nodes import Heading
from changeset_notes.transform.blocks import get_block_sections, get_version_blocks
from changeset_notes.transform.reorder_sections import (
    UNKNOWN_PRIORITY,
    reorder_sections,
    section_priority,
)


def reordered(text: str) -> str:
    tree = parse_markdown(text)
    reorder_sections(tree)
    return stringify_markdown(tree)


def heading_order(text: str) -> list[str]:
    return [line[4:] for line in text.splitlines() if line.startswith("### ")]


class TestSectionPriority:
    """Tests for per-section priority lookup."""

    def test_known_and_unknown(self) -> None:
        """Known headings use their category priority; others sort last."""
        tree = parse_markdown("## 1.0.0\n\n### Bug Fixes\n\n### Upgrade Notes\n")
        fixes, notes = get_block_sections(tree, get_version_blocks(tree)[0])
        assert section_priority(fixes) == 3
        assert section_priority(notes) == UNKNOWN_PRIORITY


class TestReorderSections:
    """Tests for the reorder pass."""

    def test_features_before_bug_fixes(self) -> None:
        """Features (2) sorts before Bug Fixes (3)."""
        result = reordered("## 1.0.0\n\n### Bug Fixes\n\n- B\n\n### Features\n\n- A\n")
        assert result == "## 1.0.0\n\n### Features\n\n- A\n\n### Bug Fixes\n\n- B\n"

    def test_full_priority_order(self) -> None:
        """Sections follow category priority."""
        result = reordered(
            "## 1.0.0\n\n### Other\n\n- o\n\n### Maintenance\n\n- m\n\n"
            "### Breaking Changes\n\n- b\n\n### Documentation\n\n- d\n"
        )
        assert heading_order(result) == [
            "Breaking Changes",
            "Documentation",
            "Maintenance",
            "Other",
        ]

    def test_unknown_after_known_stable(self) -> None:
        """Unknown headings go last and keep their relative order."""
        result = reordered(
            "## 1.0.0\n\n### Zeta\n\n- z\n\n### Alpha\n\n- a\n\n### Features\n\n- f\n"
        )
        assert heading_order(result) == ["Features", "Zeta", "Alpha"]

    def test_content_moves_with_heading(self) -> None:
        """Section content, including sub-headings, moves with its heading."""
        result = reordered(
            "## 1.0.0\n\n### Bug Fixes\n\n- B\n\n#### Detail\n\ntext\n\n### Features\n\n- A\n"
        )
        assert result == (
            "## 1.0.0\n\n### Features\n\n- A\n\n"
            "### Bug Fixes\n\n- B\n\n#### Detail\n\ntext\n"
        )

    def test_preamble_stays_first(self) -> None:
        """Block preamble is not reordered."""
        result = reordered(
            "## 1.0.0\n\nIntro.\n\n### Bug Fixes\n\n- B\n\n### Features\n\n- A\n"
        )
        assert result.startswith("## 1.0.0\n\nIntro.\n\n### Features")

    def test_already_sorted_untouched(self) -> None:
        """Sorted blocks keep their nodes."""
        tree = parse_markdown("## 1.0.0\n\n### Features\n\n- A\n\n### Bug Fixes\n\n- B\n")
        before = list(tree.children)
        reorder_sections(tree)
        assert all(a is b for a, b in zip(tree.children, before))

    def test_blocks_independent(self) -> None:
        """Sections never move between version blocks."""
        result = reordered(
            "## 2.0.0\n\n### Bug Fixes\n\n- B2\n\n### Features\n\n- A2\n\n"
            "## 1.0.0\n\n### Bug Fixes\n\n- B1\n"
        )
        new, old = result.split("## 1.0.0")
        assert heading_order(new) == ["Features", "Bug Fixes"]
        assert heading_order(old) == ["Bug Fixes"]
        assert "B1" in old and "A2" not in old

    def test_headings_are_same_nodes(self) -> None:
        """Reordering moves nodes rather than copying them."""
        tree = parse_markdown("## 1.0.0\n\n### Bug Fixes\n\n- B\n\n### Features\n\n- A\n")
        features = tree.children[3]
        assert isinstance(features, Heading)
        reorder_sections(tree)
        assert tree.children[1] is features
