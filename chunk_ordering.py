"""Reading order and line grouping for text chunks."""

from __future__ import annotations

import logging
from typing import Iterable, List

from models import TextBlock, TextChunk

logger = logging.getLogger(__name__)


def sort_chunks(chunks: Iterable[TextChunk]) -> List[TextChunk]:
    """
    Sort chunks into canonical reading order.

    Chunks with identical keys keep their input order, so sorting an already
    sorted list returns the same sequence.

    Args:
        chunks: Chunks in any order

    Returns:
        New list sorted by (orientation, perpendicular, parallel start)
    """
    return sorted(chunks, key=lambda chunk: chunk.sort_key)


def group_lines(chunks: Iterable[TextChunk], exact: bool = False) -> List[TextBlock]:
    """
    Group chunks into one TextBlock per text line.

    Args:
        chunks: Chunks in any order
        exact: Compare raw bottom coordinates instead of the integer
               orientation/perpendicular offsets

    Returns:
        Lines in order of first appearance in reading order; chunks within a
        line in reading order
    """
    same_line = TextChunk.same_line_exact if exact else TextChunk.same_line
    lines: List[TextBlock] = []

    for chunk in sort_chunks(chunks):
        # Most recent line first: in tolerant mode lines are contiguous
        for line in reversed(lines):
            if same_line(line.chunks[0], chunk):
                line.add(chunk)
                break
        else:
            lines.append(TextBlock([chunk]))

    logger.debug(f"Grouped chunks into {len(lines)} line(s) (exact={exact})")
    return lines


def line_text(line: TextBlock) -> str:
    """
    Join the chunk texts of a line.

    A space is inserted only where the gap to the previous chunk exceeds half
    a space glyph of the current chunk's font.
    """
    parts: List[str] = []
    previous = None
    for chunk in line.chunks:
        if previous is not None and chunk.distance_from_end_of(previous) > chunk.char_space_width / 2:
            parts.append(" ")
        parts.append(chunk.text)
        previous = chunk
    return "".join(parts)
