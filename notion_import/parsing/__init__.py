"""Markdown and file name parsing for Notion exports."""

from .names import canonicalize_name, clean_title, strip_title_heading
from .inline import INLINE_RULES, parse_inline, plain_text
from .blocks import BLOCK_RULES, parse_blocks

__all__ = [
    "canonicalize_name",
    "clean_title",
    "strip_title_heading",
    "INLINE_RULES",
    "parse_inline",
    "plain_text",
    "BLOCK_RULES",
    "parse_blocks"
]
