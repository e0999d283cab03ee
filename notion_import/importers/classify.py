"""
Classification of Notion export entries.

Notion exports mix real sub-pages with directories that only bundle the
binary attachments of a page, and emit a markdown page next to every folder
holding that folder's own description. The predicates here tell these apart.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, NamedTuple, Optional

from ..models import FolderRecord

MARKDOWN_SUFFIX = ".md"


class DirectoryKind(Enum):
    CONTENT_FOLDER = "content_folder"
    ATTACHMENT_BUNDLE = "attachment_bundle"


class FileKind(Enum):
    REGULAR_NOTE = "regular_note"
    OVERVIEW_NOTE = "overview_note"
    ATTACHMENT = "attachment"
    SKIPPED = "skipped"


class FileClassification(NamedTuple):
    """Kind of a file and, for overview notes, the folder it describes."""

    kind: FileKind
    folder: Optional[FolderRecord] = None


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() == MARKDOWN_SUFFIX


def classify_directory(path: Path) -> DirectoryKind:
    """
    Decide whether a directory is a navigable folder or an attachment bundle.

    A directory holding neither markdown files nor subdirectories is a pure
    leaf of binary files attached to a page.

    Args:
        path: Directory to inspect

    Returns:
        The directory kind

    Raises:
        OSError: If the directory cannot be listed
    """
    has_markdown = False
    has_subdirectories = False
    for entry in path.iterdir():
        if entry.is_dir():
            has_subdirectories = True
        elif is_markdown(entry):
            has_markdown = True

    if has_markdown or has_subdirectories:
        return DirectoryKind.CONTENT_FOLDER
    return DirectoryKind.ATTACHMENT_BUNDLE


def classify_file(
    path: Path,
    sibling_folders: Dict[str, FolderRecord],
    skip_extensions: Iterable[str] = (".html",)
) -> FileClassification:
    """
    Decide how a file of the export is imported.

    Args:
        path: File to classify
        sibling_folders: Folders already created in the same directory, keyed
            by their on-disk directory name
        skip_extensions: Lower-case extensions that are never imported

    Returns:
        The file classification
    """
    suffix = path.suffix.lower()

    if suffix == MARKDOWN_SUFFIX:
        # "Page <id>.md" next to directory "Page <id>" describes that folder
        folder = sibling_folders.get(path.stem)
        if folder is not None:
            return FileClassification(FileKind.OVERVIEW_NOTE, folder)
        return FileClassification(FileKind.REGULAR_NOTE)

    if suffix in skip_extensions:
        return FileClassification(FileKind.SKIPPED)

    return FileClassification(FileKind.ATTACHMENT)
