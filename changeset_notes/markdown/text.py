"""Plain-text rendering of document nodes."""

from __future__ import annotations

from changeset_notes.markdown.nodes import (
    Break,
    Code,
    Html,
    Image,
    InlineCode,
    InlineHtml,
    Node,
    Parent,
    Raw,
    SoftBreak,
    Text,
)


def to_plain_text(node: Node) -> str:
    """Concatenate all descendant text of a node, ignoring markup.

    Link targets, heading markers and emphasis delimiters are dropped; image
    alt text, code and raw HTML contribute their literal content.
    """
    if isinstance(node, (Text, InlineCode, Code, Html, InlineHtml, Raw)):
        return node.value
    if isinstance(node, Image):
        return node.alt
    if isinstance(node, (SoftBreak, Break)):
        return "\n"
    if isinstance(node, Parent):
        return "".join(to_plain_text(child) for child in node.children)
    return ""
