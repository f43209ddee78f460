"""Version block and section segmentation for CHANGELOG trees.

A version block starts at a level-2 heading (``## 1.2.0``) and extends to the
next level-2 heading or the end of the document. Level-1 headings (the
package title) never start a block. Within a block, level-3 headings start
named sections (``### Features``).

Blocks and sections are index ranges into ``Root.children``. Every pass
recomputes them before mutating, since earlier passes shift indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from changeset_notes.markdown.nodes import Heading, Node, Root, is_heading
from changeset_notes.markdown.text import to_plain_text


@dataclass
class VersionBlock:
    """A version block within a CHANGELOG document.

    Attributes:
        heading_index: Index of the level-2 heading in ``root.children``.
        start_index: First content index after the heading.
        end_index: One past the last content index (next h2 or end of children).
    """

    heading_index: int
    start_index: int
    end_index: int


@dataclass
class BlockSection:
    """A section within a version block, delimited by level-3 headings.

    ``content_nodes`` holds references to the nodes in the tree, not copies.
    """

    heading: Heading
    heading_index: int
    content_nodes: list[Node] = field(default_factory=list)


@dataclass
class HeadingSplit:
    """Nodes split at headings of one depth: a preamble and headed runs."""

    preamble: list[Node] = field(default_factory=list)
    sections: list[tuple[Heading, list[Node]]] = field(default_factory=list)


def get_version_blocks(tree: Root) -> list[VersionBlock]:
    """Extract all version blocks from a CHANGELOG tree, in document order.

    Returns:
        One block per level-2 heading; empty when there is none.
    """
    heading_indices = [
        index for index, node in enumerate(tree.children) if is_heading(node, 2)
    ]

    blocks = []
    for position, heading_index in enumerate(heading_indices):
        if position + 1 < len(heading_indices):
            end_index = heading_indices[position + 1]
        else:
            end_index = len(tree.children)
        blocks.append(
            VersionBlock(
                heading_index=heading_index,
                start_index=heading_index + 1,
                end_index=end_index,
            )
        )
    return blocks


def get_block_sections(tree: Root, block: VersionBlock) -> list[BlockSection]:
    """Extract the level-3 sections of a version block, in document order.

    Content before the first level-3 heading (the block preamble) belongs to
    no section; callers that rebuild a block must keep it themselves.
    """
    sections: list[BlockSection] = []

    for index in range(block.start_index, block.end_index):
        node = tree.children[index]
        if is_heading(node, 3):
            sections.append(BlockSection(heading=node, heading_index=index))  # type: ignore[arg-type]
        elif sections:
            sections[-1].content_nodes.append(node)

    return sections


def get_heading_text(heading: Heading) -> str:
    """Get the plain text of a heading node."""
    return to_plain_text(heading)


def split_at_headings(nodes: list[Node], depth: int) -> HeadingSplit:
    """Split a node sequence at every heading of ``depth``.

    Nodes before the first such heading form the preamble; each heading owns
    the nodes up to the next heading of the same depth. Deeper headings stay
    inside the run they appear in.
    """
    split = HeadingSplit()
    for node in nodes:
        if is_heading(node, depth):
            split.sections.append((node, []))  # type: ignore[arg-type]
        elif split.sections:
            split.sections[-1][1].append(node)
        else:
            split.preamble.append(node)
    return split
