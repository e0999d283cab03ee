"""
Name canonicalization for Notion export entries.

Notion appends a content-addressed identifier to every exported file and
folder name, e.g. ``"My Page 1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d.md"``. The
helpers here recover the human-authored title.
"""

import re
from pathlib import Path

# A space-separated 32-char hex ID, or a 32-36 char hyphenated hex ID.
NOTION_ID_SUFFIX = re.compile(
    r"\s+(?:[0-9a-f]{32}|[0-9a-f][0-9a-f-]{31,35})$",
    re.IGNORECASE,
)

# A leading "# Title" line, redundant with the note's title field.
TITLE_HEADING = re.compile(r"^#(?:[ \t]+[^\n]*)?(?:\n|$)")


def canonicalize_name(name: str) -> str:
    """
    Strip Notion's identifier suffix from a file or directory base name.

    The suffix is removed until none is left, so canonicalizing an already
    canonical name returns it unchanged.

    Args:
        name: Base name, extension already stripped for files

    Returns:
        The human-authored title
    """
    title = name.strip()
    while True:
        stripped = NOTION_ID_SUFFIX.sub("", title).strip()
        if stripped == title:
            return title
        title = stripped


def clean_title(path: Path) -> str:
    """Canonical title of a file, without its extension."""
    return canonicalize_name(path.stem)


def strip_title_heading(markdown: str) -> str:
    """
    Remove one leading ``# Title`` line and trim the remainder.

    Args:
        markdown: Full markdown document

    Returns:
        The document body
    """
    return TITLE_HEADING.sub("", markdown, count=1).strip()
