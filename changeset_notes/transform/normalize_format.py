"""Final cleanup pass: drop empty sections and empty lists.

Earlier passes can leave emptiness behind (merge moves content away, dedup
can empty a list, reorder can put an empty section next to another heading),
so this pass always runs last.
"""

from __future__ import annotations

import logging

from changeset_notes.markdown.nodes import List, Node, Paragraph, Root, is_heading
from changeset_notes.markdown.text import to_plain_text
from changeset_notes.transform.blocks import get_version_blocks

logger = logging.getLogger(__name__)


def _is_blank(node: Node) -> bool:
    """Whitespace-only paragraphs and item-less lists carry no content."""
    if isinstance(node, Paragraph):
        return to_plain_text(node).strip() == ""
    if isinstance(node, List):
        return not node.children
    return False


def normalize_format(tree: Root) -> None:
    """Remove empty level-3 sections and empty lists from every block, in place."""
    indices_to_remove: set[int] = set()

    for block in get_version_blocks(tree):
        for index in range(block.start_index, block.end_index):
            node = tree.children[index]

            if isinstance(node, List) and not node.children:
                indices_to_remove.add(index)
                continue

            if not is_heading(node, 3):
                continue

            has_content = False
            for following in range(index + 1, block.end_index):
                candidate = tree.children[following]
                if is_heading(candidate, 2, 3):
                    break
                if _is_blank(candidate):
                    indices_to_remove.add(following)
                    continue
                has_content = True
                break

            if not has_content:
                indices_to_remove.add(index)

    if indices_to_remove:
        logger.debug(f"Removing {len(indices_to_remove)} empty node(s)")

    for index in sorted(indices_to_remove, reverse=True):
        del tree.children[index]
