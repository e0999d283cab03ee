"""Data models for the Notion importer."""

from .blocks import (
    BlockType,
    ContentBlock,
    InlineRun,
    LinkRun,
    TableContent,
    TableRow,
    TextRun,
    TextStyles,
    serialize_blocks,
)
from .records import FolderRecord, ImportResult, NoteRecord

__all__ = [
    "BlockType",
    "ContentBlock",
    "InlineRun",
    "LinkRun",
    "TableContent",
    "TableRow",
    "TextRun",
    "TextStyles",
    "serialize_blocks",
    "FolderRecord",
    "ImportResult",
    "NoteRecord"
]
