"""Aggregate inline contributor attributions into one paragraph per version.

Changeset release lines end with an attribution such as
``Thanks [@alice](https://github.com/alice)!`` or ``Thanks @alice!``. This
pass strips those attributions from the list items and appends a single
``Thanks to ... for their contributions!`` paragraph at the end of each
version block that had any.

After parsing, the linked form is three sibling nodes at the end of a
paragraph: a text node ending in ``"Thanks "``, a link whose text is
``"@user"``, and a text node ``"!"``. The plain form stays a single text node.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from changeset_notes.markdown.nodes import Link, List, Node, Paragraph, Root, Text, walk
from changeset_notes.transform.blocks import get_version_blocks

logger = logging.getLogger(__name__)

# "Thanks @user!" at the end of a text node. ASCII word characters only.
ATTRIBUTION_PLAIN_PATTERN = re.compile(r"\s*Thanks @(\w[\w-]*)!$", re.ASCII)

# "Thanks " immediately before an attribution link
ATTRIBUTION_LEAD_PATTERN = re.compile(r"\s*Thanks $")

SUMMARY_LEAD_IN = "Thanks to "
SUMMARY_TRAILER = " for their contributions!"


@dataclass
class Contributor:
    """A credited contributor. ``url`` is None for plain ``@user`` credits."""

    username: str
    url: str | None = None


def extract_linked_attribution(paragraph: Paragraph) -> Contributor | None:
    """Strip a trailing ``Thanks [@user](url)!`` from a paragraph.

    Returns:
        The credited contributor, or None (paragraph untouched) if the
        paragraph does not end with the linked attribution shape.
    """
    children = paragraph.children
    if len(children) < 3:
        return None

    lead, link, bang = children[-3], children[-2], children[-1]

    if not isinstance(bang, Text) or bang.value != "!":
        return None

    if not isinstance(link, Link) or len(link.children) != 1:
        return None
    link_text = link.children[0]
    if not isinstance(link_text, Text) or not link_text.value.startswith("@"):
        return None

    if not isinstance(lead, Text) or not ATTRIBUTION_LEAD_PATTERN.search(lead.value):
        return None

    contributor = Contributor(username=link_text.value[1:], url=link.url)

    lead.value = ATTRIBUTION_LEAD_PATTERN.sub("", lead.value)
    del children[-2:]
    if lead.value == "":
        del children[-1]

    return contributor


def extract_plain_attribution(paragraph: Paragraph) -> Contributor | None:
    """Strip a trailing ``Thanks @user!`` from a paragraph's last text node."""
    if not paragraph.children:
        return None

    last = paragraph.children[-1]
    if not isinstance(last, Text):
        return None

    match = ATTRIBUTION_PLAIN_PATTERN.search(last.value)
    if match is None:
        return None

    last.value = last.value[: match.start()]
    if last.value == "":
        del paragraph.children[-1]
    return Contributor(username=match.group(1))


def format_contributors(contributors: list[Contributor]) -> Paragraph:
    """Build the ``Thanks to A, B, and C for their contributions!`` paragraph.

    Contributors are sorted case-insensitively by username. Two names are
    joined with " and "; three or more use commas with "and" before the last.
    """
    ordered = sorted(contributors, key=lambda contributor: contributor.username.lower())

    children: list[Node] = [Text(value=SUMMARY_LEAD_IN)]
    for position, contributor in enumerate(ordered):
        if position > 0 and len(ordered) > 2:
            children.append(Text(value=", "))
        if position > 0 and position == len(ordered) - 1:
            children.append(Text(value=" and " if len(ordered) == 2 else "and "))

        name = f"@{contributor.username}"
        if contributor.url:
            children.append(Link(url=contributor.url, children=[Text(value=name)]))
        else:
            children.append(Text(value=name))

    children.append(Text(value=SUMMARY_TRAILER))

    # Keep adjacent text runs merged, as the parser produces them
    merged: list[Node] = []
    for child in children:
        if isinstance(child, Text) and merged and isinstance(merged[-1], Text):
            merged[-1].value += child.value
        else:
            merged.append(child)
    return Paragraph(children=merged)


def contributor_footnotes(tree: Root) -> None:
    """Move contributor attributions into a summary paragraph per block, in place."""
    blocks = get_version_blocks(tree)

    # Reverse order: the insertion at a block's end never shifts earlier blocks
    for block in reversed(blocks):
        contributors: dict[str, Contributor] = {}

        for index in range(block.start_index, block.end_index):
            node = tree.children[index]
            if not isinstance(node, List):
                continue

            for paragraph in walk(node):
                if not isinstance(paragraph, Paragraph):
                    continue

                contributor = extract_linked_attribution(paragraph)
                if contributor is None:
                    contributor = extract_plain_attribution(paragraph)
                if contributor is None:
                    continue

                key = contributor.username.lower()
                if key not in contributors:
                    contributors[key] = contributor

        if not contributors:
            continue

        logger.debug(f"Aggregated {len(contributors)} contributor(s)")
        tree.children.insert(block.end_index, format_contributors(list(contributors.values())))
