"""Merge duplicate section headings within each version block.

When several changesets contribute the same section (two ``### Features``
headings under one version), the content of every later duplicate is moved
under the first occurrence and the duplicate headings are dropped.
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


def section_key(heading_text: str) -> str:
    """Grouping key: category heading if recognized, else the raw heading."""
    category = from_heading(heading_text)
    if category is not None:
        return category.heading.lower()
    return heading_text.lower()


def merge_sections(tree: Root) -> None:
    """Merge duplicate level-3 sections within each version block, in place.

    Groups keep first-occurrence order. The first member of a group is the
    merge target; the content of each later member follows the target's own
    content in document order. The block range is rebuilt and replaced in a
    single splice, so no index inside the block is reused after a mutation.
    """
    blocks = get_version_blocks(tree)

    # Reverse order: edits to a later block never shift an earlier one
    for block in reversed(blocks):
        sections = get_block_sections(tree, block)
        if len(sections) <= 1:
            continue

        groups: dict[str, list[BlockSection]] = {}
        for section in sections:
            key = section_key(get_heading_text(section.heading))
            groups.setdefault(key, []).append(section)

        if all(len(members) == 1 for members in groups.values()):
            continue

        first_section = sections[0].heading_index
        rebuilt: list[Node] = list(tree.children[block.start_index : first_section])

        for key, members in groups.items():
            target = members[0]
            rebuilt.append(target.heading)
            rebuilt.extend(target.content_nodes)
            for duplicate in members[1:]:
                rebuilt.extend(duplicate.content_nodes)
            if len(members) > 1:
                logger.debug(f"Merged {len(members) - 1} duplicate '{key}' section(s)")

        # Groups are emitted in first-occurrence order, which is the order of
        # the surviving headings in the document.
        tree.children[block.start_index : block.end_index] = rebuilt
