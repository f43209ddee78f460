"""Structural normalization of CHANGELOG files assembled from changesets."""

from changeset_notes.categories import SectionCategory, from_heading, resolve_commit_type
from changeset_notes.fragments import ParsedChangeset, ParsedSection, parse_changeset_sections
from changeset_notes.transform import ChangelogTransformer, transform

__version__ = "0.1.0"

__all__ = [
    "ChangelogTransformer",
    "ParsedChangeset",
    "ParsedSection",
    "SectionCategory",
    "from_heading",
    "parse_changeset_sections",
    "resolve_commit_type",
    "transform",
]
