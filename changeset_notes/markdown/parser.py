"""Parse markdown text into the typed node tree.

Parsing is delegated to markdown-it-py (CommonMark plus GFM tables and
strikethrough). The resulting syntax tree is folded into the dataclasses in
``changeset_notes.markdown.nodes`` so the transform passes can rewrite it and
the printer can serialize it back.

markdown-it resolves link reference definitions into ``env["references"]``
instead of emitting tokens for them. They are put back into the tree as
``Definition`` nodes at their source position so that a parse/print round
trip keeps them.
"""

from __future__ import annotations

import logging
import re
import textwrap
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

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
    List,
    ListItem,
    Node,
    Paragraph,
    Raw,
    Root,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)

logger = logging.getLogger(__name__)

# Label as written in the source line of a definition: "[label]: url"
_DEFINITION_LABEL_PATTERN = re.compile(r"^\s{0,3}\[((?:[^\]\\]|\\.)+)\]:")

# Inline token types that carry literal text
_TEXT_TOKEN_TYPES = {"text", "text_special"}


def create_markdown_it() -> MarkdownIt:
    """Create the markdown-it instance used for all parsing."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


class MarkdownParser:
    """Parser from markdown source text to a ``Root`` node tree."""

    def __init__(self) -> None:
        self._md = create_markdown_it()
        self._lines: list[str] = []

    def parse(self, text: str) -> Root:
        """Parse markdown text into a document tree.

        Args:
            text: Markdown source.

        Returns:
            The document root. Top-level blocks are ``root.children``.
        """
        env: dict[str, Any] = {}
        tokens = self._md.parse(text, env)
        self._lines = text.splitlines()

        syntax_root = SyntaxTreeNode(tokens)
        positioned: list[tuple[int, Node]] = []
        for child in syntax_root.children:
            node = self._convert_block(child)
            if node is None:
                continue
            start = child.map[0] if child.map else len(self._lines)
            positioned.append((start, node))

        references = list(env.get("references", {}).items())
        # Later definitions of an already defined label are kept as written
        references.extend(
            (duplicate["label"], duplicate) for duplicate in env.get("duplicate_refs", [])
        )
        positioned.extend(self._definitions(references))
        # Stable: definitions land after a block that starts on the same line
        positioned.sort(key=lambda pair: pair[0])

        root = Root(children=[node for _, node in positioned])
        logger.debug(f"Parsed {len(root.children)} top-level blocks")
        return root

    # =========================================================================
    # Block conversion
    # =========================================================================

    def _convert_block(self, node: SyntaxTreeNode) -> Node | None:
        kind = node.type

        if kind == "heading":
            return Heading(depth=int(node.tag[1]), children=self._inline_of(node))

        if kind == "paragraph":
            return Paragraph(children=self._inline_of(node))

        if kind in ("bullet_list", "ordered_list"):
            return self._convert_list(node)

        if kind == "blockquote":
            return Blockquote(children=self._convert_blocks(node.children))

        if kind == "fence":
            lang = node.info.strip() or None
            return Code(value=_strip_final_newline(node.content), lang=lang)

        if kind == "code_block":
            return Code(value=_strip_final_newline(node.content), fenced=False)

        if kind == "hr":
            return ThematicBreak()

        if kind == "html_block":
            return Html(value=node.content.rstrip("\n"))

        # Tables and anything else without a node type: keep the source
        source = self._source_of(node)
        if source is None:
            logger.debug(f"Dropping block without source map: {kind}")
            return None
        return Raw(value=source)

    def _convert_blocks(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        converted = []
        for child in nodes:
            node = self._convert_block(child)
            if node is not None:
                converted.append(node)
        return converted

    def _convert_list(self, node: SyntaxTreeNode) -> List:
        ordered = node.type == "ordered_list"
        start: int | None = None
        if ordered:
            start = int(node.attrs.get("start", 1))

        items: list[Node] = []
        spread = False
        for item in node.children:
            for block in item.children:
                # markdown-it hides paragraphs of tight lists
                if block.type == "paragraph" and not block.hidden:
                    spread = True
            items.append(ListItem(children=self._convert_blocks(item.children)))

        return List(ordered=ordered, start=start, spread=spread, children=items)

    def _source_of(self, node: SyntaxTreeNode) -> str | None:
        if not node.map:
            return None
        start, end = node.map
        return textwrap.dedent("\n".join(self._lines[start:end])).strip("\n")

    def _definitions(
        self, references: list[tuple[str, dict[str, Any]]]
    ) -> list[tuple[int, Node]]:
        definitions: list[tuple[int, Node]] = []
        for identifier, reference in references:
            line_map = reference.get("map")
            start = line_map[0] if line_map else len(self._lines)

            label = identifier
            if line_map and start < len(self._lines):
                match = _DEFINITION_LABEL_PATTERN.match(self._lines[start])
                if match:
                    label = match.group(1)

            definitions.append(
                (
                    start,
                    Definition(
                        identifier=identifier,
                        label=label,
                        url=reference.get("href", ""),
                        title=reference.get("title") or None,
                    ),
                )
            )
        return definitions

    # =========================================================================
    # Inline conversion
    # =========================================================================

    def _inline_of(self, node: SyntaxTreeNode) -> list[Node]:
        """Convert the inline content of a heading or paragraph."""
        children: list[Node] = []
        for child in node.children:
            if child.type == "inline":
                children.extend(self._convert_inlines(child.children))
        return children

    def _convert_inlines(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        converted: list[Node] = []
        for node in nodes:
            inline = self._convert_inline(node)
            if inline is None:
                continue
            # Merge adjacent text so attribution checks see one text run
            if isinstance(inline, Text) and converted and isinstance(converted[-1], Text):
                converted[-1].value += inline.value
            else:
                converted.append(inline)
        return converted

    def _convert_inline(self, node: SyntaxTreeNode) -> Node | None:
        kind = node.type

        if kind in _TEXT_TOKEN_TYPES:
            return Text(value=node.content)
        if kind == "softbreak":
            return SoftBreak()
        if kind == "hardbreak":
            return Break()
        if kind == "code_inline":
            return InlineCode(value=node.content)
        if kind == "html_inline":
            return InlineHtml(value=node.content)
        if kind == "link":
            return Link(
                url=str(node.attrs.get("href", "")),
                title=_optional_str(node.attrs.get("title")),
                children=self._convert_inlines(node.children),
            )
        if kind == "image":
            return Image(
                url=str(node.attrs.get("src", "")),
                title=_optional_str(node.attrs.get("title")),
                alt=node.content,
            )
        if kind == "em":
            return Emphasis(children=self._convert_inlines(node.children))
        if kind == "strong":
            return Strong(children=self._convert_inlines(node.children))
        if kind == "s":
            return Delete(children=self._convert_inlines(node.children))

        logger.debug(f"Keeping unknown inline token as text: {kind}")
        return Text(value=node.content) if node.content else None


def _strip_final_newline(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_markdown(text: str) -> Root:
    """Parse markdown text into a document tree."""
    return MarkdownParser().parse(text)
