"""
Size estimation and line/paragraph boundary helpers shared by all strategies.
"""

import math
import re
from typing import List

CHARS_PER_TOKEN = 3.5


def estimate_tokens(text: str) -> int:
    """Character-based token estimate used for every budget comparison."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def max_chars_for_tokens(max_tokens: int) -> int:
    """Longest text length whose estimate still fits ``max_tokens``."""
    return math.floor(max_tokens * CHARS_PER_TOKEN)


def check_budgets(max_tokens: int, overlap_tokens: int = 0) -> None:
    """Reject budgets no text can satisfy."""
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")
    if overlap_tokens < 0:
        raise ValueError(
            f"overlap_tokens must be >= 0, got {overlap_tokens}"
        )


def normalize_newlines(text: str) -> str:
    """Normalize line endings CRLF/CR -> LF."""
    return re.sub(r"\r\n?", "\n", text)


def split_into_segments(text: str) -> List[str]:
    """Split text on blank-line boundaries into stripped paragraphs."""
    paragraphs = re.split(r"\n\s*\n", text)
    return [p.strip() for p in paragraphs if p.strip()]


def split_long_line(line: str, max_chars: int) -> List[str]:
    """
    Slice a single line into pieces of at most ``max_chars`` characters.

    Pieces break at whitespace; a word longer than ``max_chars`` is cut
    mid-word. Lines that already fit are returned unchanged.
    """
    if len(line) <= max_chars:
        return [line]

    max_chars = max(1, max_chars)
    pieces: List[str] = []
    current = ""

    for word in line.split():
        while len(word) > max_chars:
            if current:
                pieces.append(current)
                current = ""
            pieces.append(word[:max_chars])
            word = word[max_chars:]

        if not word:
            continue

        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_chars:
            pieces.append(current)
            current = word
        else:
            current = candidate

    if current:
        pieces.append(current)

    return pieces


def pack_lines(lines: List[str], max_chars: int) -> List[str]:
    """
    Greedily pack ``lines`` into newline-joined chunks of at most
    ``max_chars`` characters, slicing lines that are too long on their own.
    Blank chunks are dropped.
    """
    pieces: List[str] = []
    for line in lines:
        pieces.extend(split_long_line(line, max_chars))

    chunks: List[str] = []
    current: List[str] = []
    current_len = 0

    for piece in pieces:
        added = len(piece) + (1 if current else 0)
        if current and current_len + added > max_chars:
            text = "\n".join(current).strip()
            if text:
                chunks.append(text)
            current = []
            current_len = 0
            added = len(piece)

        current.append(piece)
        current_len += added

    text = "\n".join(current).strip()
    if text:
        chunks.append(text)
    return chunks


def pack_lines_under_header(
    header: str, lines: List[str], max_chars: int
) -> List[str]:
    """
    Greedily pack ``lines`` into chunks that each start with ``header``.

    Every chunk is ``header`` plus a newline-joined run of lines and stays
    within ``max_chars``. Lines that overflow the room left after the header
    are sliced first. No overlap is carried between chunks. Chunks whose
    body is blank are dropped, but a header with no body is still emitted
    on its own. When the header leaves no room for a body, header and lines
    are windowed together with ``pack_lines`` instead.

    Args:
        header: Line(s) repeated at the start of every chunk
        lines: Body lines in source order
        max_chars: Character budget per chunk

    Returns:
        List of chunk strings, empty only when header and lines are blank
    """
    room = max_chars - len(header) - 1
    if room <= 0:
        return pack_lines(header.split("\n") + lines, max_chars)

    body_lines: List[str] = []
    for line in lines:
        body_lines.extend(split_long_line(line, room))

    chunks: List[str] = []
    current: List[str] = []
    current_len = len(header)

    def flush() -> None:
        if any(line.strip() for line in current):
            chunks.append("\n".join([header] + current).rstrip())

    for line in body_lines:
        added = len(line) + 1
        if current_len + added > max_chars and current:
            flush()
            current = []
            current_len = len(header)
            # A fresh chunk never opens with blank lines
            if not line.strip():
                continue

        current.append(line)
        current_len += added

    flush()
    if not chunks and header.strip():
        chunks.append(header.rstrip())
    return chunks
