"""Reorder level-3 sections by category priority.

Sorts the sections of each version block so Breaking Changes come first
(priority 1) and Other comes last (priority 13). Headings that match no
category sort after every known category.
"""

from __future__ import annotations

import logging

from changeset_notes.categories import from_heading
from changeset_notes.markdown.nodes import Node, Root
from changeset_notes.transform.blocks import (
    BlockSection,
    get_block_sections,
    get_heading_text,
    get_version_blocks,
)

logger = logging.getLogger(__name__)

# Sorts after all known categories
UNKNOWN_PRIORITY = 999


def section_priority(section: BlockSection) -> int:
    """Priority of a section's heading, ``UNKNOWN_PRIORITY`` if unrecognized."""
    category = from_heading(get_heading_text(section.heading))
    return category.priority if category is not None else UNKNOWN_PRIORITY


def reorder_sections(tree: Root) -> None:
    """Stable-sort the sections of each version block by priority, in place."""
    blocks = get_version_blocks(tree)

    for block in reversed(blocks):
        sections = get_block_sections(tree, block)
        if len(sections) <= 1:
            continue

        preamble = tree.children[block.start_index : sections[0].heading_index]

        ordered = sorted(sections, key=section_priority)
        if all(a is b for a, b in zip(ordered, sections)):
            continue

        rebuilt: list[Node] = list(preamble)
        for section in ordered:
            rebuilt.append(section.heading)
            rebuilt.extend(section.content_nodes)

        tree.children[block.start_index : block.end_index] = rebuilt
        logger.debug(
            "Reordered sections: "
            + ", ".join(get_heading_text(section.heading) for section in ordered)
        )
