"""Convert inline issue links to reference-style links.

``[#42](https://github.com/owner/repo/issues/42)`` becomes ``[#42]`` with a
single ``[#42]: https://...`` definition at the end of its version block.
Definitions are ordered by issue number. Links whose text is anything other
than ``#<digits>`` are left alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from changeset_notes.markdown.nodes import Definition, Link, LinkReference, Parent, Root, Text
from changeset_notes.transform.blocks import get_version_blocks

logger = logging.getLogger(__name__)

ISSUE_PATTERN = re.compile(r"^#\d+$")


@dataclass
class IssueReference:
    """An issue label (``#42``) and the first URL seen for it."""

    label: str
    url: str

    @property
    def number(self) -> int:
        return int(self.label[1:])


def issue_label(link: Link) -> str | None:
    """Return the link text if it is exactly ``#<digits>``, else None."""
    if len(link.children) != 1:
        return None
    child = link.children[0]
    if not isinstance(child, Text) or not ISSUE_PATTERN.match(child.value):
        return None
    return child.value


def _convert_issue_links(parent: Parent, references: dict[str, IssueReference]) -> None:
    """Replace issue links under ``parent`` in document order."""
    for index, child in enumerate(parent.children):
        if isinstance(child, Link):
            label = issue_label(child)
            if label is not None:
                if label not in references:
                    references[label] = IssueReference(label=label, url=child.url)
                parent.children[index] = LinkReference(
                    identifier=label,
                    label=label,
                    children=[Text(value=label)],
                )
                continue
        if isinstance(child, Parent):
            _convert_issue_links(child, references)


def issue_link_refs(tree: Root) -> None:
    """Convert issue links to references with per-block definitions, in place."""
    blocks = get_version_blocks(tree)

    for block in reversed(blocks):
        references: dict[str, IssueReference] = {}

        # A block's own issue definitions win over urls the parser resolved
        # from another block's definition of the same label
        defined_urls = {
            node.label: node.url
            for node in tree.children[block.start_index : block.end_index]
            if isinstance(node, Definition) and ISSUE_PATTERN.match(node.label)
        }

        for index in range(block.start_index, block.end_index):
            node = tree.children[index]
            if isinstance(node, Parent):
                _convert_issue_links(node, references)

        if not references:
            continue

        for reference in references.values():
            if reference.label in defined_urls:
                reference.url = defined_urls[reference.label]

        ordered = sorted(references.values(), key=lambda reference: reference.number)
        definitions = [
            Definition(identifier=reference.label, label=reference.label, url=reference.url)
            for reference in ordered
        ]

        # Existing definitions of re-emitted labels are replaced
        block_nodes = [
            node
            for node in tree.children[block.start_index : block.end_index]
            if not (isinstance(node, Definition) and node.label in references)
        ]
        tree.children[block.start_index : block.end_index] = block_nodes + definitions
        logger.debug(f"Collected {len(definitions)} issue reference(s)")
