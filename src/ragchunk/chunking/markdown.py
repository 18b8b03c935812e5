"""
Heading-based markdown splitting with header-preserving subdivision.
"""

import re
from typing import List, NamedTuple

from .boundaries import (
    estimate_tokens,
    max_chars_for_tokens,
    normalize_newlines,
    pack_lines_under_header,
)
from .default import chunk_default
from .results import NO_HEADINGS, Matched, NoMatch, StrategyResult

HEADING_PATTERN = re.compile(r"^#{1,3}[ \t]+\S.*$")
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")


class Heading(NamedTuple):
    text: str
    offset: int


def find_headings(content: str) -> List[Heading]:
    """Locate level 1-3 heading lines outside fenced code blocks."""
    headings: List[Heading] = []
    fence = None
    offset = 0

    for line in content.split("\n"):
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker == fence:
                fence = None
        elif fence is None and HEADING_PATTERN.match(line):
            headings.append(Heading(line.rstrip(), offset))

        offset += len(line) + 1

    return headings


def chunk_by_sections(content: str, max_tokens: int) -> StrategyResult:
    """
    Chunk markdown by level 1-3 headings.

    Each section (heading plus body up to the next heading) becomes one
    chunk; oversized sections are subdivided with the heading repeated on
    every piece. Text before the first heading is kept as a preamble chunk.

    Args:
        content: Markdown text
        max_tokens: Token budget per chunk

    Returns:
        ``Matched`` with the chunks, or ``NoMatch`` when there is no heading
    """
    content = normalize_newlines(content)
    headings = find_headings(content)

    if not headings:
        return NoMatch(NO_HEADINGS)

    chunks: List[str] = []

    for i, heading in enumerate(headings):
        end = (
            headings[i + 1].offset if i + 1 < len(headings) else len(content)
        )
        section = content[heading.offset : end].strip()

        if estimate_tokens(section) <= max_tokens:
            chunks.append(section)
        else:
            chunks.extend(subdivide_section(section, max_tokens, heading.text))

    preamble = content[: headings[0].offset].strip()
    if preamble:
        if estimate_tokens(preamble) <= max_tokens:
            chunks.insert(0, preamble)
        else:
            chunks[0:0] = chunk_default(preamble, max_tokens, 0)

    return Matched(chunks)


def subdivide_section(section: str, max_tokens: int, header: str) -> List[str]:
    """Split an oversized section, starting every sub-chunk with ``header``."""
    body = section.split("\n")[1:]
    return pack_lines_under_header(
        header.strip(), body, max_chars_for_tokens(max_tokens)
    )
