"""
Inline markdown parsing.

Inline text is scanned left to right. At each position the rules in
INLINE_RULES are tried in order and the first one that matches consumes its
span and yields one run. Delimiters do not nest: the text captured by a bold
rule is taken verbatim and not re-parsed for italics.
"""

import re
from typing import Callable, List, NamedTuple, Optional

from ..models import InlineRun, LinkRun, TextRun, TextStyles


class InlineMatch(NamedTuple):
    """A run produced by a rule and the number of characters it consumed."""

    run: InlineRun
    length: int


InlineRule = Callable[[str], Optional[InlineMatch]]

BOLD_PATTERNS = (re.compile(r"^\*\*(.+?)\*\*"), re.compile(r"^__(.+?)__"))
ITALIC_PATTERNS = (re.compile(r"^\*(.+?)\*"), re.compile(r"^_(.+?)_"))
CODE_PATTERN = re.compile(r"^`(.+?)`")
LINK_PATTERN = re.compile(r"^\[([^\]]*)\]\(([^)]+)\)")
IMAGE_PATTERN = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)")
PLAIN_PATTERN = re.compile(r"^[^*_`\[\]!]+")


def _styled(patterns, styles: TextStyles) -> InlineRule:
    def rule(text: str) -> Optional[InlineMatch]:
        for pattern in patterns:
            match = pattern.match(text)
            if match:
                return InlineMatch(TextRun(text=match.group(1), styles=styles), match.end())
        return None
    return rule


match_bold = _styled(BOLD_PATTERNS, TextStyles(bold=True))
match_italic = _styled(ITALIC_PATTERNS, TextStyles(italic=True))
match_code = _styled((CODE_PATTERN,), TextStyles(code=True))


def match_link(text: str) -> Optional[InlineMatch]:
    """``[label](url)``; an empty label falls back to the URL."""
    match = LINK_PATTERN.match(text)
    if not match:
        return None
    label, href = match.group(1), match.group(2)
    run = LinkRun(content=[TextRun(text=label or href)], href=href)
    return InlineMatch(run, match.end())


def match_inline_image(text: str) -> Optional[InlineMatch]:
    """``![alt](url)`` inside text becomes an italic note, not an embed."""
    match = IMAGE_PATTERN.match(text)
    if not match:
        return None
    label = match.group(1) or match.group(2)
    run = TextRun(text=f"[Image: {label}]", styles=TextStyles(italic=True))
    return InlineMatch(run, match.end())


def match_plain_text(text: str) -> Optional[InlineMatch]:
    match = PLAIN_PATTERN.match(text)
    if not match:
        return None
    return InlineMatch(TextRun(text=match.group(0)), match.end())


# Precedence order matters: bold must be tried before italic.
INLINE_RULES: List[InlineRule] = [
    match_bold,
    match_italic,
    match_code,
    match_link,
    match_inline_image,
    match_plain_text,
]


def parse_inline(text: str) -> List[InlineRun]:
    """
    Convert a line of markdown into inline runs.

    Never fails: a special character no rule accepts becomes a plain
    single-character run.

    Args:
        text: Inline markdown

    Returns:
        Runs in source order
    """
    runs: List[InlineRun] = []
    position = 0

    while position < len(text):
        remaining = text[position:]
        for rule in INLINE_RULES:
            result = rule(remaining)
            if result:
                break
        else:
            result = InlineMatch(TextRun(text=remaining[0]), 1)

        runs.append(result.run)
        position += result.length

    return runs


def plain_text(runs: List[InlineRun]) -> str:
    """Concatenate the visible text of a run list."""
    return "".join(run.text for run in runs)
