"""Section-aware parsing of single changeset fragments.

A changeset body may be flat text, or may group its entries under level-2
headings named after categories::

    Some intro text

    ## Features

    - Added new login system

    ## Bug Fixes

    - Fixed token refresh

Sections are mapped to categories through the category registry. Content
before the first heading becomes the preamble; headings that match no
category are skipped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel

from changeset_notes.categories import SectionCategory, from_heading
from changeset_notes.markdown import parse_markdown, stringify_markdown
from changeset_notes.markdown.nodes import Node, Root
from changeset_notes.transform.blocks import get_heading_text, split_at_headings

logger = logging.getLogger(__name__)

# Leading YAML front matter of a changeset file
FRONTMATTER_PATTERN = re.compile(r"^---\n[\s\S]*?\n---\n?")

# Heading depth that opens a section inside a fragment
FRAGMENT_SECTION_DEPTH = 2


class ParsedSection(BaseModel):
    """A category section of a changeset fragment."""

    category: SectionCategory
    heading: str
    content: str


class ParsedChangeset(BaseModel):
    """A changeset fragment split into an optional preamble and sections."""

    preamble: str | None = None
    sections: list[ParsedSection] = []


def strip_frontmatter(content: str) -> str:
    """Remove a leading ``---`` delimited YAML block, if present."""
    return FRONTMATTER_PATTERN.sub("", content, count=1)


def _stringify_nodes(nodes: list[Node]) -> str:
    if not nodes:
        return ""
    return stringify_markdown(Root(children=list(nodes))).strip()


def parse_changeset_sections(summary: str) -> ParsedChangeset:
    """Parse a changeset summary into a preamble and category sections.

    Without any level-2 heading the whole summary is returned as the preamble
    with no sections (flat-text mode).

    Args:
        summary: Changeset body markdown, front matter already removed.

    Returns:
        The parsed changeset. ``preamble`` is None when sections start at the
        very top.
    """
    tree = parse_markdown(summary)
    split = split_at_headings(tree.children, FRAGMENT_SECTION_DEPTH)

    if not split.sections:
        return ParsedChangeset(preamble=summary.strip(), sections=[])

    result = ParsedChangeset(preamble=_stringify_nodes(split.preamble) or None)

    for heading, nodes in split.sections:
        heading_text = get_heading_text(heading)
        category = from_heading(heading_text)
        if category is None:
            logger.debug(f"Skipping unknown section heading: {heading_text!r}")
            continue
        result.sections.append(
            ParsedSection(
                category=category,
                heading=heading_text,
                content=_stringify_nodes(nodes),
            )
        )

    return result


def parse_changeset_file(path: Path | str) -> ParsedChangeset:
    """Read a changeset ``.md`` file and parse its body into sections."""
    content = Path(path).read_text(encoding="utf-8")
    return parse_changeset_sections(strip_frontmatter(content))
