"""
Ragchunk Chunking Package

Structure-aware chunking for glossaries, markdown and source code, with a
paragraph/line windowing fallback for everything else.
"""

from .boundaries import estimate_tokens, max_chars_for_tokens
from .code import chunk_by_ast, subdivide_construct
from .default import chunk_default
from .dispatch import chunk_content
from .engine import chunk_document, extract_topic, generate_chunk_context
from .glossary import chunk_glossary
from .markdown import chunk_by_sections, subdivide_section
from .results import Matched, NoMatch, StrategyResult
from .verify import find_missing_words, verify_chunks

__all__ = [
    "Matched",
    "NoMatch",
    "StrategyResult",
    "chunk_by_ast",
    "chunk_by_sections",
    "chunk_content",
    "chunk_default",
    "chunk_document",
    "chunk_glossary",
    "estimate_tokens",
    "extract_topic",
    "find_missing_words",
    "generate_chunk_context",
    "max_chars_for_tokens",
    "subdivide_construct",
    "subdivide_section",
    "verify_chunks",
]
