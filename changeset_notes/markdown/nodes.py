"""Typed node tree for parsed markdown documents.

Every node kind is a dataclass carrying a ``type`` tag. Container nodes own an
ordered ``children`` list; the transform passes rewrite ``Root.children`` in
place. Node kinds the codec does not model as structure (tables, for example)
are kept as ``Raw`` blocks holding their source text verbatim.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar

# =============================================================================
# Base classes
# =============================================================================


@dataclass(eq=False)
class Node:
    """Base class for all nodes. Identity comparison only."""

    type: ClassVar[str] = "node"


@dataclass(eq=False)
class Parent(Node):
    """A node that owns an ordered list of child nodes."""

    children: list[Node] = field(default_factory=list)


# =============================================================================
# Block nodes
# =============================================================================


@dataclass(eq=False)
class Root(Parent):
    """Document root. Its children are the top-level blocks."""

    type: ClassVar[str] = "root"


@dataclass(eq=False)
class Heading(Parent):
    """ATX or setext heading, ``depth`` 1-6."""

    type: ClassVar[str] = "heading"
    depth: int = 1


@dataclass(eq=False)
class Paragraph(Parent):
    type: ClassVar[str] = "paragraph"


@dataclass(eq=False)
class List(Parent):
    """Bullet or ordered list.

    Attributes:
        ordered: True for ``1.`` style lists.
        start: First number of an ordered list (None for bullet lists).
        spread: True for loose lists (blank lines between items).
    """

    type: ClassVar[str] = "list"
    ordered: bool = False
    start: int | None = None
    spread: bool = False


@dataclass(eq=False)
class ListItem(Parent):
    type: ClassVar[str] = "listItem"


@dataclass(eq=False)
class Blockquote(Parent):
    type: ClassVar[str] = "blockquote"


@dataclass(eq=False)
class Code(Node):
    """Fenced or indented code block. ``value`` excludes the final newline."""

    type: ClassVar[str] = "code"
    value: str = ""
    lang: str | None = None
    fenced: bool = True


@dataclass(eq=False)
class ThematicBreak(Node):
    type: ClassVar[str] = "thematicBreak"


@dataclass(eq=False)
class Html(Node):
    type: ClassVar[str] = "html"
    value: str = ""


@dataclass(eq=False)
class Definition(Node):
    """Link reference definition: ``[label]: url "title"``."""

    type: ClassVar[str] = "definition"
    identifier: str = ""
    label: str = ""
    url: str = ""
    title: str | None = None


@dataclass(eq=False)
class Raw(Node):
    """Block kept verbatim from the source (tables and other extensions)."""

    type: ClassVar[str] = "raw"
    value: str = ""


# =============================================================================
# Inline nodes
# =============================================================================


@dataclass(eq=False)
class Text(Node):
    type: ClassVar[str] = "text"
    value: str = ""


@dataclass(eq=False)
class Link(Parent):
    type: ClassVar[str] = "link"
    url: str = ""
    title: str | None = None


@dataclass(eq=False)
class LinkReference(Parent):
    """Reference-style link, printed as ``[label]``."""

    type: ClassVar[str] = "linkReference"
    identifier: str = ""
    label: str = ""


@dataclass(eq=False)
class Emphasis(Parent):
    type: ClassVar[str] = "emphasis"


@dataclass(eq=False)
class Strong(Parent):
    type: ClassVar[str] = "strong"


@dataclass(eq=False)
class Delete(Parent):
    type: ClassVar[str] = "delete"


@dataclass(eq=False)
class InlineCode(Node):
    type: ClassVar[str] = "inlineCode"
    value: str = ""


@dataclass(eq=False)
class Image(Node):
    type: ClassVar[str] = "image"
    url: str = ""
    title: str | None = None
    alt: str = ""


@dataclass(eq=False)
class Break(Node):
    """Hard line break."""

    type: ClassVar[str] = "break"


@dataclass(eq=False)
class SoftBreak(Node):
    """Line ending inside a paragraph."""

    type: ClassVar[str] = "softBreak"


@dataclass(eq=False)
class InlineHtml(Node):
    type: ClassVar[str] = "inlineHtml"
    value: str = ""


def is_heading(node: Node, *depths: int) -> bool:
    """Check whether a node is a heading, optionally at one of ``depths``."""
    if not isinstance(node, Heading):
        return False
    return not depths or node.depth in depths


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth first, in document order."""
    yield node
    if isinstance(node, Parent):
        for child in node.children:
            yield from walk(child)
