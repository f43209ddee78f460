"""Remove duplicate list items within each section.

Items are compared by their plain text, so ``- Added **X**`` and
``- Added X`` are duplicates. Comparison is scoped to one level-3 section:
the same text under two different headings is kept twice.
"""

from __future__ import annotations

import logging

from changeset_notes.markdown.nodes import List, Root
from changeset_notes.markdown.text import to_plain_text
from changeset_notes.transform.blocks import get_block_sections, get_version_blocks

logger = logging.getLogger(__name__)


def deduplicate_items(tree: Root) -> None:
    """Drop repeated list items per section and remove emptied lists, in place."""
    emptied: list[List] = []

    for block in get_version_blocks(tree):
        for section in get_block_sections(tree, block):
            # One seen-set per section, spanning all of its lists
            seen: set[str] = set()
            for node in section.content_nodes:
                if not isinstance(node, List):
                    continue

                kept = []
                for item in node.children:
                    text = to_plain_text(item)
                    if text in seen:
                        logger.debug(f"Dropping duplicate item: {text!r}")
                        continue
                    seen.add(text)
                    kept.append(item)

                if len(kept) != len(node.children):
                    node.children = kept
                    if not kept:
                        emptied.append(node)

    if emptied:
        emptied_ids = {id(node) for node in emptied}
        tree.children[:] = [node for node in tree.children if id(node) not in emptied_ids]
