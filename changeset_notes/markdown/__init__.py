"""Markdown codec: parse text into a typed node tree and print it back."""

from changeset_notes.markdown.parser import MarkdownParser, parse_markdown
from changeset_notes.markdown.printer import MarkdownPrinter, stringify_markdown
from changeset_notes.markdown.text import to_plain_text

__all__ = [
    "MarkdownParser",
    "MarkdownPrinter",
    "parse_markdown",
    "stringify_markdown",
    "to_plain_text",
]
