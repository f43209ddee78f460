"""End-to-end tests for the CHANGELOG transform pipeline."""

from pathlib import Path

import pytest

from changeset_notes.transform import TRANSFORM_PASSES, ChangelogTransformer, transform
from changeset_notes.transform.contributor_footnotes import contributor_footnotes
from changeset_notes.transform.merge_sections import merge_sections
from changeset_notes.transform.normalize_format import normalize_format

ISSUES = "https://github.com/acme/widgets/issues"

ASSEMBLED = f"""\
# widgets

## 1.2.0

### Bug Fixes

- Fixed crash on empty input [#99]({ISSUES}/99) Thanks [@alice](https://github.com/alice)!

### Features

- Added streaming API [#5]({ISSUES}/5) Thanks @bob!

### Performance

### Features

- Added retry option Thanks [@alice](https://github.com/alice)!
- Added streaming API [#5]({ISSUES}/5) Thanks @bob!

### Breaking Changes

- Dropped Python 3.8

### Maintenance

- Bumped lint config

## 1.1.0

### Features

- Added config file support Thanks @carol!

### Features

- Added config file support Thanks @carol!
"""

EXPECTED = f"""\
# widgets

## 1.2.0

### Breaking Changes

- Dropped Python 3.8

### Features

- Added streaming API [#5]

* Added retry option

### Bug Fixes

- Fixed crash on empty input [#99]

### Maintenance

- Bumped lint config

Thanks to [@alice](https://github.com/alice) and @bob for their contributions!

[#5]: {ISSUES}/5

[#99]: {ISSUES}/99

## 1.1.0

### Features

- Added config file support

Thanks to @carol for their contributions!
"""


class TestPassOrder:
    """Tests for the pass table."""

    def test_six_passes(self) -> None:
        """Merge runs first and normalize last."""
        assert len(TRANSFORM_PASSES) == 6
        assert TRANSFORM_PASSES[0] is merge_sections
        assert TRANSFORM_PASSES[3] is contributor_footnotes
        assert TRANSFORM_PASSES[-1] is normalize_format


class TestTransform:
    """Tests for the full pipeline on an assembled CHANGELOG."""

    def test_full_document(self) -> None:
        """All passes combine into the canonical document."""
        assert transform(ASSEMBLED) == EXPECTED

    def test_idempotent(self) -> None:
        """Transforming canonical output changes nothing."""
        once = transform(ASSEMBLED)
        assert transform(once) == once

    def test_items_differing_only_in_attribution(self) -> None:
        """Such items survive the first run and collapse on the second."""
        document = (
            "## 1.0.0\n\n### Features\n\n- Added X Thanks @alice!\n- Added X Thanks @bob!\n"
        )
        once = transform(document)
        assert once == (
            "## 1.0.0\n\n### Features\n\n- Added X\n- Added X\n\n"
            "Thanks to @alice and @bob for their contributions!\n"
        )
        twice = transform(once)
        assert twice.count("- Added X") == 1
        assert transform(twice) == twice

    def test_empty_document(self) -> None:
        """Empty input stays empty."""
        assert transform("") == ""

    def test_no_version_blocks(self) -> None:
        """Documents without version headings pass through the codec only."""
        assert transform("# Title\n\nSome text.\n") == "# Title\n\nSome text.\n"


IDEMPOTENCE_DOCUMENTS = [
    ASSEMBLED,
    "## 1.0.0\n\n### Features\n\n- A\n\n### Features\n\n- B\n\n### Features\n\n- A\n",
    "## 1.0.0\n\nIntro.\n\n### Other\n\n- o\n\n### Tests\n\n- t\n\n### Upgrade Notes\n\ntext\n",
    f"## 1.0.0\n\n- **Fixed [#3]({ISSUES}/3)** Thanks @dan!\n\n## 0.1.0\n\n- [#3]({ISSUES}/3)\n",
    "## 2.0.0\n\n### Bug Fixes\n\n- A [#5](https://github.com/acme/a/issues/5)\n\n"
    "## 1.0.0\n\n### Bug Fixes\n\n- B [#5](https://github.com/acme/b/issues/5)\n",
    "## 1.0.0\n\n### Features\n\n### Bug Fixes\n\n### Tests\n",
    "## 1.0.0\n\n| a | b |\n| - | - |\n| 1 | 2 |\n\n```sh\npip install widgets\n```\n",
]


class TestProperties:
    """Properties of the transform over assembled documents."""

    @pytest.mark.parametrize("document", IDEMPOTENCE_DOCUMENTS)
    def test_idempotence(self, document: str) -> None:
        """transform(transform(d)) == transform(d)."""
        once = transform(document)
        assert transform(once) == once

    def test_merge(self) -> None:
        """Two Features sections become one holding both items."""
        result = transform("## 1.0.0\n\n### Features\n\n- A\n\n### Features\n\n- B\n")
        assert result.count("### Features") == 1
        assert "- A" in result
        assert "B" in result

    def test_reorder(self) -> None:
        """Features appears before Bug Fixes."""
        result = transform("## 1.0.0\n\n### Bug Fixes\n\n- B\n\n### Features\n\n- A\n")
        assert result.index("### Features") < result.index("### Bug Fixes")

    def test_dedup_scoping(self) -> None:
        """Identical items survive under different headings only."""
        result = transform(
            "## 1.0.0\n\n### Features\n\n- Added X\n- Added X\n\n### Bug Fixes\n\n- Added X\n"
        )
        assert result.count("Added X") == 2

    def test_contributor_aggregation(self) -> None:
        """Repeated credits end up once, in one summary paragraph."""
        result = transform(
            "## 1.0.0\n\n### Features\n\n"
            "- Added X Thanks [@alice](https://github.com/alice)!\n"
            "- Added Y Thanks [@alice](https://github.com/alice)!\n"
        )
        assert result.count("@alice") == 1
        assert result.count("Thanks to ") == 1
        assert "Thanks [@alice]" not in result

    def test_issue_ref_ordering(self) -> None:
        """#5 is defined before #99."""
        result = transform(
            f"## 1.0.0\n\n### Features\n\n- A [#99]({ISSUES}/99)\n- B [#5]({ISSUES}/5)\n"
        )
        assert result.index("[#5]: ") < result.index("[#99]: ")

    def test_empty_section_removal(self) -> None:
        """An empty Features section is dropped."""
        result = transform("## 1.0.0\n\n### Features\n\n### Bug Fixes\n\n- B\n")
        assert "### Features" not in result
        assert "### Bug Fixes" in result

    def test_cross_block_isolation(self) -> None:
        """Each version block transforms independently."""
        result = transform(
            "## 2.0.0\n\n### Bug Fixes\n\n- B2 Thanks @alice!\n\n### Features\n\n- A2\n\n"
            "### Features\n\n- C2\n\n"
            "## 1.0.0\n\n### Bug Fixes\n\n- B1 Thanks @bob!\n\n### Features\n\n- A1\n"
        )
        new, old = result.split("## 1.0.0")
        assert new.count("### Features") == 1
        assert old.count("### Features") == 1
        assert "A1" not in new and "A2" not in old
        assert "@alice" in new and "@alice" not in old
        assert "@bob" in old and "@bob" not in new


class TestChangelogTransformer:
    """Tests for the file and string entry points."""

    def test_transform_content(self) -> None:
        """transform_content matches transform."""
        assert ChangelogTransformer.transform_content(ASSEMBLED) == EXPECTED

    def test_transform_file_rewrites(self, tmp_path: Path) -> None:
        """The file is rewritten and a change is reported."""
        changelog = tmp_path / "CHANGELOG.md"
        changelog.write_text(ASSEMBLED, encoding="utf-8")
        assert ChangelogTransformer.transform_file(changelog) is True
        assert changelog.read_text(encoding="utf-8") == EXPECTED

    def test_transform_file_unchanged(self, tmp_path: Path) -> None:
        """Canonical files are left alone."""
        changelog = tmp_path / "CHANGELOG.md"
        changelog.write_text(EXPECTED, encoding="utf-8")
        assert ChangelogTransformer.transform_file(changelog) is False
        assert changelog.read_text(encoding="utf-8") == EXPECTED

    def test_transform_file_missing(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ChangelogTransformer.transform_file(tmp_path / "missing.md")
