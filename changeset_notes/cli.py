"""CLI for normalizing CHANGELOG files and inspecting changeset fragments."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from changeset_notes.categories import all_categories
from changeset_notes.config import settings
from changeset_notes.fragments import parse_changeset_file
from changeset_notes.transform.pipeline import ChangelogTransformer

logger = logging.getLogger(__name__)


def transform_command(file: Path, dry_run: bool = False, check: bool = False) -> int:
    """Run the transform pipeline over a CHANGELOG file.

    Args:
        file: CHANGELOG path.
        dry_run: Print the transformed output instead of writing it.
        check: Only report whether the file would change (for CI).

    Returns:
        0 on success, 1 if the file cannot be read or written, or (with
        ``check``) would change.
    """
    path = file.resolve()

    if not dry_run and not check:
        try:
            ChangelogTransformer.transform_file(path)
        except OSError as e:
            logger.error(f"Cannot transform {path}: {e}")
            return 1
        return 0

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        return 1

    result = ChangelogTransformer.transform_content(content)

    if dry_run:
        print(result, end="")
        return 0

    if result != content:
        logger.info(f"{path} would be modified by transform.")
        return 1
    logger.info(f"{path} is already formatted.")
    return 0


def sections_command(file: Path) -> int:
    """Print the preamble and category sections of a changeset file."""
    try:
        parsed = parse_changeset_file(file)
    except OSError as e:
        logger.error(f"Cannot read {file}: {e}")
        return 1

    if parsed.preamble:
        print("Preamble:")
        print(f"  {parsed.preamble}")

    if not parsed.sections:
        print("No category sections (flat-text changeset)")
        return 0

    for section in parsed.sections:
        print(f"\n[{section.category.priority:>2}] {section.category.heading}")
        for line in section.content.splitlines():
            print(f"  {line}")

    return 0


def categories_command() -> int:
    """Print the section category catalogue in priority order."""
    for category in all_categories():
        commit_types = ", ".join(category.commit_types) or "-"
        print(
            f"{category.priority:>2}  {category.heading:<18} "
            f"{commit_types:<14} {category.description}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Normalize CHANGELOG files assembled from changesets"
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Transform command
    transform_parser = subparsers.add_parser(
        "transform", help="Merge, reorder and clean up a CHANGELOG file"
    )
    transform_parser.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=settings.changelog_path,
        help=f"CHANGELOG file (default: {settings.changelog_path})",
    )
    transform_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print transformed output instead of writing",
    )
    transform_parser.add_argument(
        "-c",
        "--check",
        action="store_true",
        help="Exit 1 if the file would change (for CI)",
    )

    # Sections command
    sections_parser = subparsers.add_parser(
        "sections", help="Show the category sections of a changeset file"
    )
    sections_parser.add_argument("file", type=Path, help="Changeset .md file")

    # Categories command
    subparsers.add_parser("categories", help="List section categories")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format=settings.log_format,
    )

    if args.command == "transform":
        return transform_command(
            file=args.file,
            dry_run=args.dry_run,
            check=args.check,
        )

    elif args.command == "sections":
        return sections_command(file=args.file)

    elif args.command == "categories":
        return categories_command()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
