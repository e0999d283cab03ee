"""
Document block models for the Notion importer.

This module defines the rich-text block tree that parsed markdown is converted
into. The field layout mirrors the destination editor's block JSON so that a
block can be serialized verbatim into a note's content column.
"""

import json
import uuid
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BlockType:
    """Block ``type`` values understood by the destination editor."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_ITEM = "bulletListItem"
    NUMBERED_ITEM = "numberedListItem"
    CHECK_ITEM = "checkListItem"
    CODE_BLOCK = "codeBlock"
    IMAGE = "image"
    TABLE = "table"


def new_block_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


class TextStyles(BaseModel):
    """
    Independent style flags of a text run.

    Unset flags are left as None so they disappear from the serialized form.
    """

    model_config = ConfigDict(frozen=True)

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    code: Optional[bool] = None


class TextRun(BaseModel):
    """A run of text carrying optional styles."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str
    styles: TextStyles = Field(default_factory=TextStyles)


class LinkRun(BaseModel):
    """A hyperlink whose label is a nested list of text runs."""

    model_config = ConfigDict(frozen=True)

    type: Literal["link"] = "link"
    content: List[TextRun] = Field(default_factory=list)
    href: str

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.content)


InlineRun = Union[TextRun, LinkRun]


class TableRow(BaseModel):
    """A single table row; each cell is a list of inline runs."""

    model_config = ConfigDict(frozen=True)

    cells: List[List[InlineRun]] = Field(default_factory=list)


class TableContent(BaseModel):
    """Cell matrix of a table block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["tableContent"] = "tableContent"
    rows: List[TableRow] = Field(default_factory=list)


class ContentBlock(BaseModel):
    """
    A node in a parsed document tree.

    ``content`` holds inline runs for text blocks, a TableContent for tables,
    and is None for images. ``children`` is always empty because the parser
    does not nest blocks.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_block_id,
        description="Freshly generated unique identifier"
    )

    type: str = Field(
        ...,
        description="Editor block type (see BlockType)"
    )

    props: Dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific attributes (heading level, checked, language, ...)"
    )

    content: Optional[Union[List[InlineRun], TableContent]] = Field(
        default=None,
        description="Inline runs, table cell matrix, or None for images"
    )

    children: List['ContentBlock'] = Field(
        default_factory=list,
        description="Nested blocks (unused by the markdown parser)"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Dump the block in the editor's JSON shape."""
        return self.model_dump(exclude_none=True)


# Enable forward references for self-referencing model
ContentBlock.model_rebuild()


def serialize_blocks(blocks: List[ContentBlock]) -> str:
    """
    Serialize a block list to the compact JSON stored in a note's content.

    Args:
        blocks: Parsed document blocks

    Returns:
        JSON text with non-ASCII characters kept verbatim
    """
    return json.dumps(
        [block.to_dict() for block in blocks],
        ensure_ascii=False,
        separators=(',', ':')
    )
