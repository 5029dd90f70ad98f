"""
Line classification for markdown-like content.

Splits text into lines (keeping separators) and decides, per line, which
part is a structural token to keep verbatim and which part is payload to
translate.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

BLANK = "blank"
STRUCTURAL = "structural"
HEADER = "header"
BULLET = "bullet"
PLAIN = "plain"

LINE_SEPARATOR_PATTERN = re.compile(r'(\r\n|\n)')
STRUCTURAL_ONLY_PATTERN = re.compile(r'^[#*\-\d.\s]+$')
HEADER_PATTERN = re.compile(r'^(#+)\s+(.*)$', re.DOTALL)
BULLET_PATTERN = re.compile(r'^(\s*(?:[*\-+]|\d+\.)\s+)(.*)$', re.DOTALL)


@dataclass(frozen=True)
class LineTranslationPlan:
    """How one line is translated: prefix is kept, payload (if any) is translated."""
    line: str
    kind: str
    prefix: str = ""
    payload: Optional[str] = None

    def render(self, translated: Optional[str] = None) -> str:
        if self.payload is None or translated is None:
            return self.line
        if self.kind == HEADER:
            return f"{self.prefix} {translated}"
        return f"{self.prefix}{translated}"


def split_lines(content: str) -> Tuple[List[str], List[str]]:
    """
    Split content into lines and the separators between them.

    Returns:
        (lines, separators) with len(separators) == len(lines) - 1

    Example:
        >>> split_lines("a\\r\\nb\\nc")
        (['a', 'b', 'c'], ['\\r\\n', '\\n'])
    """
    parts = LINE_SEPARATOR_PATTERN.split(content)
    return parts[0::2], parts[1::2]


def join_lines(lines: List[str], separators: List[str]) -> str:
    """Inverse of split_lines."""
    pieces = []
    for index, line in enumerate(lines):
        pieces.append(line)
        if index < len(separators):
            pieces.append(separators[index])
    return "".join(pieces)


def classify_line(line: str) -> LineTranslationPlan:
    """
    Classify a single line.

    Examples:
        >>> classify_line("## Soil").payload
        'Soil'
        >>> classify_line("  - Water daily").prefix
        '  - '
        >>> classify_line("---").kind
        'structural'
    """
    stripped = line.strip()
    if not stripped:
        return LineTranslationPlan(line=line, kind=BLANK)
    if STRUCTURAL_ONLY_PATTERN.match(stripped):
        return LineTranslationPlan(line=line, kind=STRUCTURAL)

    header = HEADER_PATTERN.match(line)
    if header:
        return LineTranslationPlan(line=line, kind=HEADER, prefix=header.group(1), payload=header.group(2))

    bullet = BULLET_PATTERN.match(line)
    if bullet:
        payload = bullet.group(2)
        if not payload.strip():
            return LineTranslationPlan(line=line, kind=STRUCTURAL)
        return LineTranslationPlan(line=line, kind=BULLET, prefix=bullet.group(1), payload=payload)

    return LineTranslationPlan(line=line, kind=PLAIN, payload=line)


def plan_content(content: str) -> Tuple[List[LineTranslationPlan], List[str]]:
    """Classify every line of content; returns (plans, separators)."""
    lines, separators = split_lines(content)
    return [classify_line(line) for line in lines], separators
