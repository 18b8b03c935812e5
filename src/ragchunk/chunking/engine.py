"""
Document-level chunking: wraps dispatched chunk texts into ``Chunk`` records
with token counts and a contextual prefix for the embedding step.
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

from ..core.config import DEFAULT_MAX_TOKENS, DEFAULT_OVERLAP_TOKENS
from ..core.logging import log
from ..core.models import Chunk, SourceCategory, SourceDocument
from .boundaries import estimate_tokens
from .dispatch import chunk_content, resolve_category

CATEGORY_LABELS = {
    SourceCategory.GLOSSARY: "Business glossary definition",
    SourceCategory.KNOWLEDGE: "Technical documentation",
    SourceCategory.CODE: "Source code",
    SourceCategory.CONTRACT: "API contract definition",
    SourceCategory.SCRIPT: "Shell script",
    SourceCategory.PLUGIN: "Plugin definition",
    SourceCategory.DOC: "Documentation",
}

GLOSSARY_TERM = re.compile(r"^\*\*([^*]+)\*\*")
HEADING = re.compile(r"^#{1,3}\s+(.+)$", re.MULTILINE)
CODE_NAME = re.compile(
    r"(?:export\s+)?(?:class|interface|type|function|const|def)\s+(\w+)"
)


def extract_topic(
    content: str, category: Union[SourceCategory, str, None]
) -> Optional[str]:
    """Extract the main topic of a chunk: term, heading, or declared name."""
    resolved = resolve_category(category)

    if resolved is SourceCategory.GLOSSARY:
        match = GLOSSARY_TERM.match(content)
        if match:
            return match.group(1).strip()

    heading = HEADING.search(content)
    if heading:
        return heading.group(1).strip()

    if resolved in (SourceCategory.CODE, SourceCategory.CONTRACT):
        code_match = CODE_NAME.search(content)
        if code_match:
            return code_match.group(1)

    return None


def generate_chunk_context(
    category: Union[SourceCategory, str, None],
    source_name: Optional[str],
    content: str,
) -> str:
    """
    Build the contextual prefix placed before a chunk at embedding time.

    Example: ``[Business glossary definition | from terms | about SX]\\n``
    """
    resolved = resolve_category(category)
    parts = [CATEGORY_LABELS.get(resolved, resolved.value)]

    if source_name:
        parts.append(f"from {source_name}")

    topic = extract_topic(content, resolved)
    if topic:
        parts.append(f"about {topic}")

    return f"[{' | '.join(parts)}]\n"


def chunk_document(
    document: SourceDocument,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    overlap_tokens: int = DEFAULT_OVERLAP_TOKENS,
) -> List[Chunk]:
    """
    Chunk a source document into indexed ``Chunk`` records.

    Args:
        document: Document text with its category and optional path hint
        max_tokens: Token budget per chunk
        overlap_tokens: Overlap budget for the default strategy

    Returns:
        Chunks in source order, empty for a blank document
    """
    if not document.content.strip():
        return []

    texts = chunk_content(
        document.content,
        max_tokens=max_tokens,
        overlap_tokens=overlap_tokens,
        category=document.category,
        dialect_hint=document.path,
    )

    chunks = [
        Chunk(
            index=i,
            content=text,
            token_count=estimate_tokens(text),
            context=generate_chunk_context(
                document.category, document.source_name, text
            ),
        )
        for i, text in enumerate(texts)
    ]

    log.debug(
        "chunk.document.done",
        path=document.path,
        category=document.category.value,
        chunks=len(chunks),
    )
    return chunks
