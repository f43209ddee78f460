"""Structural transform passes for assembled CHANGELOG documents."""

from changeset_notes.transform.blocks import (
    BlockSection,
    VersionBlock,
    get_block_sections,
    get_heading_text,
    get_version_blocks,
)
from changeset_notes.transform.contributor_footnotes import contributor_footnotes
from changeset_notes.transform.deduplicate_items import deduplicate_items
from changeset_notes.transform.issue_link_refs import issue_link_refs
from changeset_notes.transform.merge_sections import merge_sections
from changeset_notes.transform.normalize_format import normalize_format
from changeset_notes.transform.pipeline import (
    TRANSFORM_PASSES,
    ChangelogTransformer,
    run_transforms,
    transform,
)
from changeset_notes.transform.reorder_sections import reorder_sections

__all__ = [
    # Segmentation
    "VersionBlock",
    "BlockSection",
    "get_version_blocks",
    "get_block_sections",
    "get_heading_text",
    # Passes, in pipeline order
    "merge_sections",
    "reorder_sections",
    "deduplicate_items",
    "contributor_footnotes",
    "issue_link_refs",
    "normalize_format",
    # Pipeline
    "TRANSFORM_PASSES",
    "run_transforms",
    "transform",
    "ChangelogTransformer",
]
