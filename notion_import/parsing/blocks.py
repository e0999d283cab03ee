"""
Block-level markdown parsing.

A document is consumed line by line. At each line the rules in BLOCK_RULES
are tried in order; the first rule that matches emits zero or one block and
reports how many lines it consumed. The final rule turns any non-blank line
into a paragraph, so parsing never fails.
"""

import re
from typing import Callable, List, NamedTuple, Optional

from ..models import BlockType, ContentBlock, TableContent, TableRow, TextRun
from .inline import parse_inline

IMAGE_WIDTH = 512
QUOTE_TEXT_COLOR = "gray"

HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.+)")
IMAGE_LINE_PATTERN = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")
CHECK_ITEM_PATTERN = re.compile(r"^(\s*)[-*]\s+\[([ xX])\]\s+(.*)")
BULLET_PATTERN = re.compile(r"^(\s*)([-*])\s+(.+)")
NUMBERED_PATTERN = re.compile(r"^(\s*)\d+\.\s+(.+)")
RULE_PATTERNS = (re.compile(r"^-{3,}$"), re.compile(r"^\*{3,}$"))
SEPARATOR_CELL = re.compile(r"^[-:]+$")
QUOTE_PATTERN = re.compile(r"^>\s*(.*)")
FENCE = "```"


class BlockMatch(NamedTuple):
    """Blocks emitted by a rule and the number of lines it consumed."""

    blocks: List[ContentBlock]
    consumed: int


BlockRule = Callable[[List[str], int], Optional[BlockMatch]]


def _single(block: ContentBlock) -> BlockMatch:
    return BlockMatch([block], 1)


def match_blank(lines: List[str], index: int) -> Optional[BlockMatch]:
    if lines[index].strip() == "":
        return BlockMatch([], 1)
    return None


def match_heading(lines: List[str], index: int) -> Optional[BlockMatch]:
    match = HEADING_PATTERN.match(lines[index])
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.HEADING,
        props={"level": len(match.group(1))},
        content=parse_inline(match.group(2).strip()),
    ))


def match_code_block(lines: List[str], index: int) -> Optional[BlockMatch]:
    """
    Fenced code block. Lines up to the closing fence are kept verbatim; an
    unterminated fence runs to the end of the document.
    """
    opening = lines[index].strip()
    if not opening.startswith(FENCE):
        return None

    language = opening[len(FENCE):].strip() or "plain"
    end = index + 1
    while end < len(lines) and not lines[end].strip().startswith(FENCE):
        end += 1

    code = "\n".join(lines[index + 1:end])
    block = ContentBlock(
        type=BlockType.CODE_BLOCK,
        props={"language": language},
        content=[TextRun(text=code)],
    )
    # Closing fence is consumed with the block
    consumed = min(end + 1, len(lines)) - index
    return BlockMatch([block], consumed)


def match_image(lines: List[str], index: int) -> Optional[BlockMatch]:
    match = IMAGE_LINE_PATTERN.match(lines[index].strip())
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.IMAGE,
        props={
            "url": match.group(2),
            "caption": match.group(1) or "",
            "width": IMAGE_WIDTH,
        },
    ))


def match_check_item(lines: List[str], index: int) -> Optional[BlockMatch]:
    match = CHECK_ITEM_PATTERN.match(lines[index])
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.CHECK_ITEM,
        props={"checked": match.group(2) != " "},
        content=parse_inline(match.group(3).strip()),
    ))


def match_bullet_item(lines: List[str], index: int) -> Optional[BlockMatch]:
    match = BULLET_PATTERN.match(lines[index])
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.BULLET_ITEM,
        content=parse_inline(match.group(3).strip()),
    ))


def match_numbered_item(lines: List[str], index: int) -> Optional[BlockMatch]:
    match = NUMBERED_PATTERN.match(lines[index])
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.NUMBERED_ITEM,
        content=parse_inline(match.group(2).strip()),
    ))


def match_horizontal_rule(lines: List[str], index: int) -> Optional[BlockMatch]:
    line = lines[index].strip()
    if any(pattern.match(line) for pattern in RULE_PATTERNS):
        return BlockMatch([], 1)
    return None


def split_table_row(line: str) -> List[str]:
    """
    Split a pipe-led table line into trimmed cells.

    Only the empty cells produced by the outer pipes are dropped, so an
    empty interior cell keeps its column.
    """
    cells = [cell.strip() for cell in line.strip().split("|")]
    if cells and cells[0] == "":
        cells = cells[1:]
    if cells and cells[-1] == "":
        cells = cells[:-1]
    return cells


def is_separator_row(cells: List[str]) -> bool:
    """True for a markdown alignment row such as ``|---|:--:|``."""
    return all(SEPARATOR_CELL.match(cell) for cell in cells)


def match_table(lines: List[str], index: int) -> Optional[BlockMatch]:
    if not lines[index].strip().startswith("|"):
        return None

    end = index
    rows: List[TableRow] = []
    while end < len(lines) and lines[end].strip().startswith("|"):
        cells = split_table_row(lines[end])
        if not is_separator_row(cells):
            rows.append(TableRow(cells=[parse_inline(cell) for cell in cells]))
        end += 1

    blocks = []
    if rows:
        blocks.append(ContentBlock(
            type=BlockType.TABLE,
            content=TableContent(rows=rows),
        ))
    return BlockMatch(blocks, end - index)


def match_quote(lines: List[str], index: int) -> Optional[BlockMatch]:
    """Each ``>`` line becomes its own muted paragraph."""
    match = QUOTE_PATTERN.match(lines[index])
    if not match:
        return None
    return _single(ContentBlock(
        type=BlockType.PARAGRAPH,
        props={"textColor": QUOTE_TEXT_COLOR},
        content=parse_inline(match.group(1).strip()),
    ))


def match_paragraph(lines: List[str], index: int) -> Optional[BlockMatch]:
    return _single(ContentBlock(
        type=BlockType.PARAGRAPH,
        content=parse_inline(lines[index].strip()),
    ))


# First match wins; check items must precede plain bullets.
BLOCK_RULES: List[BlockRule] = [
    match_blank,
    match_heading,
    match_code_block,
    match_image,
    match_check_item,
    match_bullet_item,
    match_numbered_item,
    match_horizontal_rule,
    match_table,
    match_quote,
    match_paragraph,
]


def parse_blocks(markdown: str) -> List[ContentBlock]:
    """
    Convert a markdown document into a flat list of content blocks.

    Args:
        markdown: Document text

    Returns:
        Blocks in document order
    """
    lines = markdown.replace("\r\n", "\n").split("\n")
    blocks: List[ContentBlock] = []
    index = 0

    while index < len(lines):
        for rule in BLOCK_RULES:
            result = rule(lines, index)
            if result:
                break
        blocks.extend(result.blocks)
        index += result.consumed

    return blocks
