"""
Record models for the Notion importer.

FolderRecord and NoteRecord are the rows destined for the relational schema;
ImportResult is the accumulator the directory walker fills while it recurses.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .blocks import ContentBlock, new_block_id, serialize_blocks


class FolderRecord(BaseModel):
    """
    A folder reconstructed from an export directory.
    """

    id: str = Field(
        default_factory=new_block_id,
        description="Freshly generated unique identifier"
    )

    name: str = Field(
        ...,
        description="Canonicalized directory name"
    )

    parent_id: Optional[str] = Field(
        default=None,
        description="Identifier of the parent folder, or None for a root folder"
    )

    order: int = Field(
        ...,
        description="Zero-based position among sibling folders"
    )


class NoteRecord(BaseModel):
    """
    A note built from a markdown file or an attachment placeholder.
    """

    id: str = Field(
        default_factory=new_block_id,
        description="Freshly generated unique identifier"
    )

    title: str = Field(
        ...,
        description="Canonicalized title"
    )

    blocks: List[ContentBlock] = Field(
        default_factory=list,
        description="Parsed document tree"
    )

    folder_id: Optional[str] = Field(
        default=None,
        description="Identifier of the containing folder, or None for a root note"
    )

    order: int = Field(
        ...,
        description="Position among notes of the folder; -1 sorts an overview note first"
    )

    @property
    def content(self) -> str:
        """Serialized document tree as stored in the content column."""
        return serialize_blocks(self.blocks)


class ImportResult(BaseModel):
    """
    Accumulated folders and notes of one import run, in discovery order.
    """

    folders: List[FolderRecord] = Field(default_factory=list)
    notes: List[NoteRecord] = Field(default_factory=list)

    def add_folder(self, name: str, parent_id: Optional[str], order: int) -> FolderRecord:
        folder = FolderRecord(name=name, parent_id=parent_id, order=order)
        self.folders.append(folder)
        return folder

    def add_note(
        self,
        title: str,
        blocks: List[ContentBlock],
        folder_id: Optional[str],
        order: int
    ) -> NoteRecord:
        note = NoteRecord(title=title, blocks=blocks, folder_id=folder_id, order=order)
        self.notes.append(note)
        return note

    def root_note_count(self) -> int:
        return sum(1 for note in self.notes if note.folder_id is None)
