"""Serialize the typed node tree back to markdown text.

The output style is fixed: ATX headings, ``-`` bullets, ``1.`` ordered
markers, fenced code, ``***`` thematic breaks, ``*``/``**`` emphasis, one
blank line between blocks. Text is escaped only where a character would
otherwise start markup, so parsing printed output and printing it again
gives the same text.
"""

from __future__ import annotations

import re

from changeset_notes.markdown.nodes import (
    Blockquote,
    Break,
    Code,
    Definition,
    Delete,
    Emphasis,
    Heading,
    Html,
    Image,
    InlineCode,
    InlineHtml,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Parent,
    Raw,
    Root,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)
from changeset_notes.markdown.text import to_plain_text

# Characters that start inline markup anywhere in a line
_INLINE_SPECIALS = re.compile(r"([\\`*\[\]])")

# "<" opens raw HTML or an autolink when followed by one of these
_ANGLE = re.compile(r"<(?=[A-Za-z/!?])")

# "_" only delimits emphasis when not flanked by alphanumerics on both sides
_UNDERSCORE = re.compile(r"(?<![A-Za-z0-9])_|_(?![A-Za-z0-9])")

# "~~" opens strikethrough
_TILDE_RUN = re.compile(r"~(?=~)|(?<=~)~")

# "&name;" would be decoded as an entity
_ENTITY_LIKE = re.compile(r"&(?=#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)")

# Line starts that would become a block construct
_BLOCK_START_CHAR = re.compile(r"^([>+=\-]|#(?=#{0,5}(?:\s|$)))")
_ORDERED_MARKER_START = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")

# Autolinks are printed as <url>
_AUTOLINK_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*$")

_BULLETS = ("-", "*")
_ORDERED_DELIMITERS = (".", ")")


class MarkdownPrinter:
    """Printer from a ``Root`` node tree to markdown text."""

    def print(self, root: Root) -> str:
        """Serialize a document tree.

        Returns:
            Markdown text ending in a single newline, or "" for an empty tree.
        """
        body = self._blocks(root.children, tight=False)
        return f"{body}\n" if body else ""

    # =========================================================================
    # Blocks
    # =========================================================================

    def _blocks(self, nodes: list[Node], tight: bool) -> str:
        parts: list[str] = []
        previous: Node | None = None
        list_style = 0
        for node in nodes:
            if isinstance(node, List):
                # Adjacent lists of the same kind alternate markers so they
                # stay separate lists when parsed again.
                same_kind = isinstance(previous, List) and previous.ordered == node.ordered
                list_style = 1 - list_style if same_kind else 0
                parts.append(self._list(node, list_style))
            else:
                parts.append(self._block(node))
            previous = node
        return ("\n" if tight else "\n\n").join(parts)

    def _block(self, node: Node) -> str:
        if isinstance(node, Heading):
            # Heading content is a single line of inlines
            children = [
                Text(value=" ") if isinstance(child, SoftBreak) else child
                for child in node.children
            ]
            text = self._inlines(children, nested=True).strip()
            # A trailing run of "#" would be read as a closing sequence
            if re.search(r"(^|\s)#+$", text):
                text = text[:-1] + "\\#"
            marker = "#" * node.depth
            return f"{marker} {text}" if text else marker

        if isinstance(node, Paragraph):
            return self._inlines(node.children)

        if isinstance(node, Blockquote):
            inner = self._blocks(node.children, tight=False)
            return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))

        if isinstance(node, Code):
            return self._code(node)

        if isinstance(node, ThematicBreak):
            return "***"

        if isinstance(node, Definition):
            line = f"[{node.label}]: {_destination(node.url)}"
            if node.title:
                line += f" {_title(node.title)}"
            return line

        if isinstance(node, (Html, Raw)):
            return node.value

        # Inline content that ended up at block level
        return self._inlines([node])

    def _list(self, node: List, style: int) -> str:
        items: list[str] = []
        number = node.start if node.start is not None else 1
        for item in node.children:
            if node.ordered:
                marker = f"{number}{_ORDERED_DELIMITERS[style]}"
                number += 1
            else:
                marker = _BULLETS[style]
            items.append(self._list_item(item, marker, tight=not node.spread))

        return ("\n" if not node.spread else "\n\n").join(items)

    def _list_item(self, item: Node, marker: str, tight: bool) -> str:
        children = item.children if isinstance(item, ListItem) else [item]
        content = self._blocks(children, tight=tight)
        if not content:
            return marker

        indent = " " * (len(marker) + 1)
        lines = content.split("\n")
        out = [f"{marker} {lines[0]}"]
        for line in lines[1:]:
            out.append(f"{indent}{line}" if line else "")
        return "\n".join(out)

    @staticmethod
    def _code(node: Code) -> str:
        longest = max((len(run) for run in re.findall(r"`{3,}", node.value)), default=0)
        fence = "`" * max(3, longest + 1)
        info = node.lang or ""
        if "`" in info:
            fence = "~" * len(fence)
        if node.value:
            return f"{fence}{info}\n{node.value}\n{fence}"
        return f"{fence}{info}\n{fence}"

    # =========================================================================
    # Inlines
    # =========================================================================

    def _inlines(self, nodes: list[Node], nested: bool = False) -> str:
        out: list[str] = []
        line_start = not nested
        for index, node in enumerate(nodes):
            following = nodes[index + 1] if index + 1 < len(nodes) else None
            out.append(self._inline(node, line_start, following))
            line_start = isinstance(node, (SoftBreak, Break))
        return "".join(out)

    def _inline(self, node: Node, line_start: bool, following: Node | None) -> str:
        if isinstance(node, Text):
            text = _escape(node.value, line_start)
            if text.endswith("!") and isinstance(following, (Link, LinkReference)):
                text = text[:-1] + "\\!"
            return text

        if isinstance(node, SoftBreak):
            return "\n"

        if isinstance(node, Break):
            return "\\\n"

        if isinstance(node, InlineCode):
            return _code_span(node.value)

        if isinstance(node, InlineHtml):
            return node.value

        if isinstance(node, Emphasis):
            return f"*{self._inlines(node.children, nested=True)}*"

        if isinstance(node, Strong):
            return f"**{self._inlines(node.children, nested=True)}**"

        if isinstance(node, Delete):
            return f"~~{self._inlines(node.children, nested=True)}~~"

        if isinstance(node, Link):
            if (
                node.title is None
                and _AUTOLINK_URL.match(node.url)
                and to_plain_text(node) == node.url
                and all(isinstance(child, Text) for child in node.children)
            ):
                return f"<{node.url}>"
            text = self._inlines(node.children, nested=True)
            destination = _destination(node.url)
            if node.title:
                destination += f" {_title(node.title)}"
            return f"[{text}]({destination})"

        if isinstance(node, LinkReference):
            text = self._inlines(node.children, nested=True)
            if to_plain_text(node) == node.label:
                return f"[{node.label}]"
            return f"[{text}][{node.label}]"

        if isinstance(node, Image):
            destination = _destination(node.url)
            if node.title:
                destination += f" {_title(node.title)}"
            return f"![{node.alt}]({destination})"

        if isinstance(node, Parent):
            return self._inlines(node.children, nested=True)

        return ""


def _escape(value: str, line_start: bool) -> str:
    text = _INLINE_SPECIALS.sub(r"\\\1", value)
    text = _ANGLE.sub(r"\\<", text)
    text = _UNDERSCORE.sub(r"\\_", text)
    text = _TILDE_RUN.sub(r"\\~", text)
    text = _ENTITY_LIKE.sub(r"\\&", text)
    if line_start:
        text = _BLOCK_START_CHAR.sub(r"\\\1", text)
        text = _ORDERED_MARKER_START.sub(r"\1\\\2", text)
    return text


def _code_span(value: str) -> str:
    longest = max((len(run) for run in re.findall(r"`+", value)), default=0)
    ticks = "`" * (longest + 1)
    padded = (
        value.startswith("`")
        or value.endswith("`")
        or (value.startswith(" ") and value.endswith(" ") and value.strip() != "")
    )
    if padded:
        return f"{ticks} {value} {ticks}"
    return f"{ticks}{value}{ticks}"


def _destination(url: str) -> str:
    if not url or re.search(r"[\s<>]", url) or url.count("(") != url.count(")"):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url


def _title(title: str) -> str:
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def stringify_markdown(root: Root) -> str:
    """Serialize a document tree to markdown text."""
    return MarkdownPrinter().print(root)
