"""
Glossary term/definition extraction.

Recognizes entries shaped like ``**Term**: definition`` or
``**Term (ACRO)**: definition`` at the start of a line. The definition runs
until the next bold term, the next heading, or the end of the document.
"""

import re
from typing import List

from .boundaries import normalize_newlines
from .results import NO_GLOSSARY_TERMS, Matched, NoMatch, StrategyResult

TERM_PATTERN = re.compile(
    r"^\*\*([^*]+)\*\*[: \t]*([\s\S]*?)"
    r"(?=\n\*\*[^*]+\*\*[:\s]|\n#{1,6}\s|\Z)",
    re.MULTILINE,
)


def chunk_glossary(content: str) -> StrategyResult:
    """
    Emit one chunk per glossary entry, rebuilt as ``**term**: definition``.

    Entries are atomic: a long definition is never split. Content without
    any entry yields ``NoMatch`` so a mislabelled source falls back to the
    default splitter.
    """
    chunks: List[str] = []

    for match in TERM_PATTERN.finditer(normalize_newlines(content)):
        term = match.group(1).strip()
        definition = match.group(2).strip()

        if term and definition:
            chunks.append(f"**{term}**: {definition}")

    if not chunks:
        return NoMatch(NO_GLOSSARY_TERMS)

    return Matched(chunks)
