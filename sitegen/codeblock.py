"""Splitting highlighted code into lines and marking highlighted lines.

Highlighted code is a sequence of ``(style, text)`` pairs. Styles are
dataclass instances with a ``background`` field.
"""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from typing import Any, Iterable, Sequence


@dataclasses.dataclass(frozen=True, order=True)
class StyledIdx:
    """Position of a character: item index, then index within that item's text."""

    vec_idx: int
    str_idx: int


def find_line_boundaries(styled: Sequence[tuple[Any, str]]) -> list[StyledIdx]:
    """Positions of every newline, in order.

    The code holds one more line than there are boundaries.
    """
    return [
        StyledIdx(vec_idx, str_idx)
        for vec_idx, (_style, text) in enumerate(styled)
        for str_idx, character in enumerate(text)
        if character == "\n"
    ]


def perform_split(
    styled: Sequence[tuple[Any, str]], line_boundaries: Iterable[StyledIdx]
) -> list[tuple[Any, str]]:
    """Split items so that each newline ends the item that holds it."""
    splits: dict[int, list[int]] = defaultdict(list)
    for boundary in sorted(line_boundaries):
        splits[boundary.vec_idx].append(boundary.str_idx)

    result: list[tuple[Any, str]] = []
    for vec_idx, (style, text) in enumerate(styled):
        last_split = 0
        for str_idx in splits.get(vec_idx, ()):
            split_at = min(str_idx + 1, len(text))
            if split_at != last_split:
                result.append((style, text[last_split:split_at]))
                last_split = split_at
        if last_split != len(text):
            result.append((style, text[last_split:]))
    return result


def highlighted_lines(ranges: Iterable[tuple[int, int]], num_lines: int) -> set[int]:
    """Zero-based indexes of the lines covered by one-based inclusive ranges."""
    return {
        max(line - 1, 0)
        for start, end in ranges
        for line in range(start, min(end, num_lines) + 1)
    }


def color_highlighted_lines(
    styled: Sequence[tuple[Any, str]], lines: set[int], background: Any
) -> list[tuple[Any, str]]:
    """Give the items on the chosen lines the highlight background.

    Items must already be split so that newlines only end items.
    """
    if not lines:
        return list(styled)

    result: list[tuple[Any, str]] = []
    current_line = 0
    for style, text in styled:
        if current_line in lines:
            style = dataclasses.replace(style, background=background)
        result.append((style, text))
        if text.endswith("\n"):
            current_line += 1
    return result