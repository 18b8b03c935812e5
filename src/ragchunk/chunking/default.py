"""
Paragraph/line windowing with overlap; the universal fallback strategy.
"""

from typing import List, Tuple

from ..core.config import DEFAULT_MAX_TOKENS, DEFAULT_OVERLAP_TOKENS
from .boundaries import (
    check_budgets,
    estimate_tokens,
    max_chars_for_tokens,
    normalize_newlines,
    split_into_segments,
    split_long_line,
)

PARAGRAPH_SEP = "\n\n"
LINE_OVERLAP_WINDOW = 3


def chunk_default(
    content: str,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    overlap_tokens: int = DEFAULT_OVERLAP_TOKENS,
) -> List[str]:
    """
    Chunk text into paragraph windows of at most ``max_tokens``.

    Paragraphs are packed greedily. After a flush the last paragraph seeds
    the next chunk when it is within ``overlap_tokens``. A paragraph that is
    too large on its own is re-split by lines (see ``_split_by_lines``).

    Args:
        content: Raw document text
        max_tokens: Token budget per chunk
        overlap_tokens: Largest trailing paragraph repeated as overlap

    Returns:
        Ordered list of chunk strings, empty for blank input
    """
    check_budgets(max_tokens, overlap_tokens)

    segments = split_into_segments(normalize_newlines(content))
    chunks: List[str] = []
    current: List[str] = []

    for segment in segments:
        if estimate_tokens(segment) > max_tokens:
            if current:
                chunks.append(PARAGRAPH_SEP.join(current))
                current = []

            line_chunks, remainder = _split_by_lines(
                segment, max_tokens, overlap_tokens
            )
            chunks.extend(line_chunks)
            if remainder:
                current = [remainder]
            continue

        test_text = PARAGRAPH_SEP.join(current + [segment])
        if current and estimate_tokens(test_text) > max_tokens:
            chunks.append(PARAGRAPH_SEP.join(current))
            current = _paragraph_overlap(
                current[-1], segment, max_tokens, overlap_tokens
            )

        current.append(segment)

    if current:
        chunks.append(PARAGRAPH_SEP.join(current))

    return chunks


def _paragraph_overlap(
    last: str, incoming: str, max_tokens: int, overlap_tokens: int
) -> List[str]:
    """Seed for the next buffer: the flushed tail paragraph, if small."""
    if estimate_tokens(last) > overlap_tokens:
        return []
    if estimate_tokens(last + PARAGRAPH_SEP + incoming) > max_tokens:
        return []
    return [last]


def _split_by_lines(
    segment: str, max_tokens: int, overlap_tokens: int
) -> Tuple[List[str], str]:
    """
    Split an oversized paragraph by lines.

    Lines longer than the budget are sliced first so every line fits.
    After each flush up to the last three lines are carried over, trimmed
    until they fit ``overlap_tokens`` and leave room for the next line.

    Returns:
        Tuple of (flushed chunks, pending remainder text)
    """
    max_chars = max_chars_for_tokens(max_tokens)
    lines: List[str] = []
    for line in segment.split("\n"):
        lines.extend(split_long_line(line, max_chars))

    chunks: List[str] = []
    current: List[str] = []

    for line in lines:
        test_text = "\n".join(current + [line])
        if current and estimate_tokens(test_text) > max_tokens:
            chunks.append("\n".join(current))
            current = _line_overlap(current, line, max_tokens, overlap_tokens)

        current.append(line)

    return chunks, "\n".join(current).strip()


def _line_overlap(
    flushed: List[str], incoming: str, max_tokens: int, overlap_tokens: int
) -> List[str]:
    window = flushed[-LINE_OVERLAP_WINDOW:]
    while window and (
        estimate_tokens("\n".join(window)) > overlap_tokens
        or estimate_tokens("\n".join(window + [incoming])) > max_tokens
    ):
        window = window[1:]
    return list(window)
