"""CHANGELOG transform pipeline.

Runs the six structural passes over a parsed CHANGELOG in a fixed order:

1. ``merge_sections`` - merge duplicate h3 headings (must run before reorder)
2. ``reorder_sections`` - sort sections by category priority
3. ``deduplicate_items`` - remove duplicate list items
4. ``contributor_footnotes`` - aggregate contributor attributions
5. ``issue_link_refs`` - convert inline issue links to reference-style
6. ``normalize_format`` - final cleanup (remove empty sections/lists)

Each pass mutates the tree in place and sees the settled output of the
previous one. Transforming an already transformed document returns it
unchanged, with one exception: items that differ only in their attribution
(``Added X Thanks @alice!`` and ``Added X Thanks @bob!``) both survive the
first run, since duplicates are removed before attributions are stripped,
and collapse into one on the next run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from changeset_notes.markdown import parse_markdown, stringify_markdown
from changeset_notes.markdown.nodes import Root
from changeset_notes.transform.contributor_footnotes import contributor_footnotes
from changeset_notes.transform.deduplicate_items import deduplicate_items
from changeset_notes.transform.issue_link_refs import issue_link_refs
from changeset_notes.transform.merge_sections import merge_sections
from changeset_notes.transform.normalize_format import normalize_format
from changeset_notes.transform.reorder_sections import reorder_sections

logger = logging.getLogger(__name__)

TransformPass = Callable[[Root], None]

TRANSFORM_PASSES: tuple[TransformPass, ...] = (
    merge_sections,
    reorder_sections,
    deduplicate_items,
    contributor_footnotes,
    issue_link_refs,
    normalize_format,
)


def run_transforms(tree: Root) -> Root:
    """Run every transform pass over ``tree`` in order. Mutates and returns it."""
    for transform_pass in TRANSFORM_PASSES:
        transform_pass(tree)
        logger.debug(f"{transform_pass.__name__}: {len(tree.children)} top-level nodes")
    return tree


def transform(content: str) -> str:
    """Parse CHANGELOG markdown, run all passes, and print it back."""
    return stringify_markdown(run_transforms(parse_markdown(content)))


class ChangelogTransformer:
    """Static entry points for transforming CHANGELOG content and files.

    Example:
        >>> cleaned = ChangelogTransformer.transform_content(raw_markdown)
        >>> ChangelogTransformer.transform_file(Path("CHANGELOG.md"))
    """

    @staticmethod
    def transform_content(content: str) -> str:
        """Transform CHANGELOG markdown content by running all passes."""
        return transform(content)

    @staticmethod
    def transform_file(file_path: Path | str) -> bool:
        """Transform a CHANGELOG file in place.

        Args:
            file_path: Path to the CHANGELOG file.

        Returns:
            True if the file content changed.

        Raises:
            OSError: If the file cannot be read or written.
        """
        path = Path(file_path)
        content = path.read_text(encoding="utf-8")
        result = transform(content)
        if result == content:
            logger.info(f"{path} is already normalized")
            return False

        path.write_text(result, encoding="utf-8")
        logger.info(f"Transformed {path}")
        return True
