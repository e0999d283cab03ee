"""
SQL script generation for imported folders and notes.

Folders reference their parent folder and notes reference their folder, so
rows are emitted parents first and the whole script runs in one transaction.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from ..models import FolderRecord, ImportResult, NoteRecord

FOLDER_COLUMNS = '"Id", "Name", "ParentId", "Color", "Order", "CreatedAt", "UpdatedAt", "UserId"'
NOTE_COLUMNS = '"Id", "Title", "Content", "FolderId", "IsPinned", "IsDeleted", "Order", "CreatedAt", "UpdatedAt", "UserId"'


def escape_sql(value: Optional[str]) -> str:
    """
    Render a string as a SQL literal by doubling embedded quotes.

    Args:
        value: String to render, or None

    Returns:
        The quoted literal, or ``NULL``
    """
    if value is None:
        return "NULL"
    return "'" + value.replace("'", "''") + "'"


def order_folders(folders: List[FolderRecord]) -> List[FolderRecord]:
    """
    Order folders so that every parent precedes its children.

    Folders keep their discovery order except where an ancestor has to be
    pulled forward. A parent id that names no known folder is treated as root.

    Args:
        folders: Folders in discovery order

    Returns:
        The same folders in insertion order
    """
    by_id: Dict[str, FolderRecord] = {folder.id: folder for folder in folders}
    placed: Set[str] = set()
    ordered: List[FolderRecord] = []

    def place(folder: FolderRecord) -> None:
        if folder.id in placed:
            return
        placed.add(folder.id)
        if folder.parent_id is not None and folder.parent_id in by_id:
            place(by_id[folder.parent_id])
        ordered.append(folder)

    for folder in folders:
        place(folder)

    return ordered


class SQLScriptWriter:
    """
    Renders an ImportResult as a transactional insert script.
    """

    def __init__(
        self,
        user_id: str,
        generated_at: Optional[datetime] = None,
        title: str = "Notion export import"
    ):
        """
        Initialize the writer.

        Args:
            user_id: Owner of every imported row
            generated_at: Run start time, used for both row timestamps
            title: First line of the header comment
        """
        self.user_id = user_id
        self.generated_at = generated_at or datetime.now(timezone.utc)
        self.title = title

    @property
    def timestamp_ms(self) -> int:
        return int(self.generated_at.timestamp() * 1000)

    def folder_statement(self, folder: FolderRecord) -> str:
        ts = self.timestamp_ms
        return (
            f'INSERT INTO "Folders" ({FOLDER_COLUMNS})\n'
            f"VALUES ({escape_sql(folder.id)}, {escape_sql(folder.name)}, {escape_sql(folder.parent_id)}, "
            f"'', {folder.order}, {ts}, {ts}, {escape_sql(self.user_id)});"
        )

    def note_statement(self, note: NoteRecord) -> str:
        ts = self.timestamp_ms
        return (
            f'INSERT INTO "Notes" ({NOTE_COLUMNS})\n'
            f"VALUES ({escape_sql(note.id)}, {escape_sql(note.title)}, {escape_sql(note.content)}, "
            f"{escape_sql(note.folder_id)}, false, false, {note.order}, {ts}, {ts}, {escape_sql(self.user_id)});"
        )

    def render(self, result: ImportResult) -> str:
        """
        Build the complete script.

        Args:
            result: Folders and notes collected by an importer

        Returns:
            Header comment, ``BEGIN;``, folder inserts parents first, note
            inserts, ``COMMIT;``
        """
        lines = [
            f"-- {self.title}",
            f"-- Generated: {self.generated_at.isoformat()}",
            f"-- User ID: {self.user_id}",
            f"-- Folders: {len(result.folders)}",
            f"-- Notes: {len(result.notes)}",
            "",
            "BEGIN;",
            "",
        ]

        if result.folders:
            lines.append("-- Folders")
            lines.extend(self.folder_statement(folder) for folder in order_folders(result.folders))
            lines.append("")

        if result.notes:
            lines.append("-- Notes")
            lines.extend(self.note_statement(note) for note in result.notes)
            lines.append("")

        lines.append("COMMIT;")
        return "\n".join(lines) + "\n"

    def write(self, result: ImportResult, output_path: str) -> str:
        """
        Render the script and write it to a file.

        Raises:
            OSError: If the output file cannot be written
        """
        script = self.render(result)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(script)
        return script
