"""
Notion export importer.

This module walks a Notion "Markdown & CSV" export, reconstructs its folder
hierarchy and converts every page into a NoteRecord whose content is a parsed
block tree.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..config import config
from ..models import BlockType, ContentBlock, FolderRecord, ImportResult, NoteRecord, TextRun, TextStyles
from ..parsing import canonicalize_name, clean_title, parse_blocks, strip_title_heading
from .base import BaseImporter
from .classify import DirectoryKind, FileKind, classify_directory, classify_file, is_markdown

FILE_DESCRIPTIONS = {
    ".csv": "CSV spreadsheet",
    ".pdf": "PDF document",
    ".png": "Image (PNG)",
    ".jpg": "Image (JPEG)",
    ".jpeg": "Image (JPEG)",
    ".gif": "Image (GIF)",
    ".svg": "Image (SVG)",
    ".zip": "ZIP archive",
    ".xls": "Excel spreadsheet",
    ".xlsx": "Excel spreadsheet",
    ".docx": "Word document",
    ".json": "JSON file",
    ".xml": "XML file",
    ".ovpn": "OpenVPN config",
    ".bat": "Batch script",
    ".xhtml": "XHTML document",
}

OVERVIEW_ORDER = -1


def format_size(size: int) -> str:
    """Human readable size in KB, or MB above one mebibyte."""
    if size > 1024 * 1024:
        return f"{size / 1024 / 1024:.1f} MB"
    return f"{size / 1024:.1f} KB"


def describe_file(extension: str, size: int) -> str:
    """
    Describe a non-convertible file, e.g. ``"PDF document - 12.3 KB"``.

    Args:
        extension: Lower-case extension including the dot
        size: File size in bytes
    """
    description = FILE_DESCRIPTIONS.get(extension, f"File ({extension})")
    return f"{description} - {format_size(size)}"


def attachment_blocks(file_name: str, description: str) -> List[ContentBlock]:
    """Placeholder content recording that an attachment existed."""
    return [
        ContentBlock(
            type=BlockType.PARAGRAPH,
            content=[TextRun(text=description, styles=TextStyles(italic=True))],
        ),
        ContentBlock(
            type=BlockType.PARAGRAPH,
            content=[TextRun(text=f"Original file: {file_name}", styles=TextStyles(code=True))],
        ),
    ]


class NotionExportImporter(BaseImporter):
    """
    Importer for a directory produced by Notion's markdown export.
    """

    def __init__(self, export_path: str, skip_extensions: Optional[Iterable[str]] = None):
        """
        Initialize the importer.

        Args:
            export_path: Root folder of the unpacked export
            skip_extensions: Extensions that are never imported (defaults to configuration)
        """
        self.export_path = Path(export_path)
        if skip_extensions is None:
            skip_extensions = config.skip_extensions
        self.skip_extensions = tuple(ext.lower() for ext in skip_extensions)

        logging.info(f"Initialized Notion export importer for: {self.export_path}")

    def import_export(self) -> ImportResult:
        """
        Walk the whole export.

        With several top-level content directories each becomes a root
        folder; a single one is unwrapped so its contents land at the root.
        Markdown files next to the top-level directories become root notes.

        Returns:
            ImportResult with folders and notes in discovery order

        Raises:
            NotADirectoryError: If the export path is not a directory
        """
        if not self.export_path.is_dir():
            raise NotADirectoryError(f"Export folder not found: {self.export_path}")

        result = ImportResult()
        entries = self._sorted_entries(self.export_path)

        content_dirs = [entry for entry in entries if entry.is_dir() and self._is_content_folder(entry)]

        if len(content_dirs) > 1:
            for order, directory in enumerate(content_dirs):
                folder = result.add_folder(canonicalize_name(directory.name), None, order)
                self.walk(directory, folder.id, result)
        else:
            for directory in content_dirs:
                self.walk(directory, None, result)

        note_order = result.root_note_count()
        for entry in entries:
            if entry.is_file() and is_markdown(entry):
                if self._import_markdown(entry, None, note_order, result):
                    note_order += 1

        logging.info(f"Importer finished. Found {len(result.folders)} folders and {len(result.notes)} notes.")
        return result

    def walk(self, directory: Path, parent_folder_id: Optional[str], result: ImportResult) -> None:
        """
        Import one directory depth-first into the accumulator.

        Args:
            directory: Directory to scan
            parent_folder_id: Folder that receives the directory's entries (None for root)
            result: Accumulator receiving the created records
        """
        try:
            entries = self._sorted_entries(directory)
        except OSError as e:
            logging.warning(f"Cannot read directory: {directory} ({e})")
            return

        folder_order = 0
        note_order = 0
        sibling_folders: Dict[str, FolderRecord] = {}

        for entry in entries:
            if entry.is_dir():
                if not self._is_content_folder(entry):
                    continue
                folder = result.add_folder(canonicalize_name(entry.name), parent_folder_id, folder_order)
                folder_order += 1
                sibling_folders[entry.name] = folder
                self.walk(entry, folder.id, result)
                continue

            if not entry.is_file():
                continue

            classification = classify_file(entry, sibling_folders, self.skip_extensions)

            if classification.kind is FileKind.OVERVIEW_NOTE:
                self._import_overview(entry, classification.folder, result)
            elif classification.kind is FileKind.REGULAR_NOTE:
                if self._import_markdown(entry, parent_folder_id, note_order, result):
                    note_order += 1
            elif classification.kind is FileKind.ATTACHMENT:
                if self._import_attachment(entry, parent_folder_id, note_order, result):
                    note_order += 1
            else:
                logging.debug(f"Skipping export artifact: {entry}")

    @staticmethod
    def _sorted_entries(directory: Path) -> List[Path]:
        return sorted(directory.iterdir(), key=lambda entry: entry.name)

    @staticmethod
    def _is_content_folder(directory: Path) -> bool:
        try:
            kind = classify_directory(directory)
        except OSError as e:
            logging.warning(f"Cannot read directory: {directory} ({e})")
            return False

        if kind is DirectoryKind.ATTACHMENT_BUNDLE:
            logging.debug(f"Skipping attachment folder: {directory}")
            return False
        return True

    @staticmethod
    def _read_markdown(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logging.warning(f"Cannot read file: {path} ({e})")
            return None

    def _import_markdown(
        self,
        path: Path,
        folder_id: Optional[str],
        order: int,
        result: ImportResult
    ) -> Optional[NoteRecord]:
        text = self._read_markdown(path)
        if text is None:
            return None

        blocks = parse_blocks(strip_title_heading(text))
        return result.add_note(clean_title(path), blocks, folder_id, order)

    def _import_overview(self, path: Path, folder: FolderRecord, result: ImportResult) -> Optional[NoteRecord]:
        """
        Import a folder's own page into that folder, sorted first.

        A page holding nothing but its title heading is dropped.
        """
        text = self._read_markdown(path)
        if text is None:
            return None

        body = strip_title_heading(text)
        if not body:
            logging.debug(f"Skipping empty folder overview: {path}")
            return None

        title = f"{clean_title(path)} (overview)"
        return result.add_note(title, parse_blocks(body), folder.id, OVERVIEW_ORDER)

    def _import_attachment(
        self,
        path: Path,
        folder_id: Optional[str],
        order: int,
        result: ImportResult
    ) -> Optional[NoteRecord]:
        try:
            size = path.stat().st_size
        except OSError as e:
            logging.warning(f"Cannot read file: {path} ({e})")
            return None

        description = describe_file(path.suffix.lower(), size)
        return result.add_note(clean_title(path), attachment_blocks(path.name, description), folder_id, order)
