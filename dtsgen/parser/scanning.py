"""Text-level helpers for brace balancing and body surgery."""

from __future__ import annotations

import bisect
import re
from typing import List, Sequence, Tuple

from .patterns import EXCISED_DECLARATION_PATTERN, LINE_COMMENT_OR_LITERAL_PATTERN

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")

Span = Tuple[int, int]


def normalize_source(content: str) -> str:
    """Drop line comments and blank literal contents; keep block comments."""

    def _replace(match: re.Match[str]) -> str:
        if match.group("block") is not None:
            return match.group("block")
        if match.group("string") is not None:
            return '""'
        if match.group("char") is not None:
            return "''"
        return ""

    return LINE_COMMENT_OR_LITERAL_PATTERN.sub(_replace, content)


def comment_spans(text: str) -> List[Span]:
    return [(match.start(), match.end()) for match in _BLOCK_COMMENT.finditer(text)]


def in_spans(position: int, spans: Sequence[Span]) -> bool:
    """Return True when ``position`` falls inside one of the sorted spans."""
    index = bisect.bisect_right(spans, (position, float("inf"))) - 1
    if index < 0:
        return False
    start, end = spans[index]
    return start <= position < end


def find_matching_brace(text: str, start: int) -> int:
    """Return the index of the brace closing the one at ``start``, or -1."""
    depth = 0
    index = start
    length = len(text)
    while index < length:
        char = text[index]
        if char == "/" and text.startswith("/*", index):
            close = text.find("*/", index + 2)
            if close == -1:
                return -1
            index = close + 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return -1


def excise_nested_declarations(body: str) -> str:
    """Remove nested interface/class/enum declarations, header included."""
    spans = comment_spans(body)
    pieces: List[str] = []
    cursor = 0
    position = 0
    while True:
        match = EXCISED_DECLARATION_PATTERN.search(body, position)
        if match is None:
            break
        if in_spans(match.start("kind"), spans):
            position = match.start("kind") + 1
            continue
        brace = match.end() - 1
        close = find_matching_brace(body, brace)
        if close == -1:
            position = match.end()
            continue
        pieces.append(body[cursor : match.start()])
        cursor = position = close + 1
    pieces.append(body[cursor:])
    return "".join(pieces)


def collapse_blocks(text: str) -> str:
    """Replace every top-level ``{...}`` block with ``;``."""
    pieces: List[str] = []
    cursor = 0
    index = 0
    length = len(text)
    while index < length:
        if text.startswith("/*", index):
            close = text.find("*/", index + 2)
            if close == -1:
                break
            index = close + 2
            continue
        if text[index] == "{":
            close = find_matching_brace(text, index)
            pieces.append(text[cursor:index])
            pieces.append(";")
            if close == -1:
                cursor = length
                break
            cursor = index = close + 1
            continue
        index += 1
    pieces.append(text[cursor:])
    return "".join(pieces)


def member_text(body: str) -> str:
    """Body text reduced to the type's own member declarations."""
    return collapse_blocks(excise_nested_declarations(body))


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` outside angle brackets, trimming each part."""
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if current:
        parts.append("".join(current).strip())
    return parts


__all__ = [
    "collapse_blocks",
    "comment_spans",
    "excise_nested_declarations",
    "find_matching_brace",
    "in_spans",
    "member_text",
    "normalize_source",
    "split_top_level",
]
