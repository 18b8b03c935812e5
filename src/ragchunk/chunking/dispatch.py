"""
Category-based routing of content to a chunking strategy.

Every specialized strategy falls through to ``chunk_default`` when it
reports ``NoMatch`` or fails unexpectedly, so any non-blank input yields a
non-empty chunk list.
"""

from __future__ import annotations

from typing import List, Optional, Union

from ..core.config import DEFAULT_MAX_TOKENS, DEFAULT_OVERLAP_TOKENS
from ..core.logging import log
from ..core.models import SourceCategory
from .boundaries import check_budgets, max_chars_for_tokens
from .code import chunk_by_ast
from .default import chunk_default
from .glossary import chunk_glossary
from .markdown import chunk_by_sections
from .results import Matched, NoMatch, StrategyResult


def resolve_category(
    category: Union[SourceCategory, str, None],
) -> SourceCategory:
    """Coerce a category tag; unknown or missing tags become ``other``."""
    if category is None:
        return SourceCategory.OTHER
    if isinstance(category, SourceCategory):
        return category
    try:
        return SourceCategory(str(category).strip().lower())
    except ValueError:
        log.debug("chunk.category.unknown", category=category)
        return SourceCategory.OTHER


def chunk_content(
    content: str,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    overlap_tokens: int = DEFAULT_OVERLAP_TOKENS,
    category: Union[SourceCategory, str, None] = None,
    dialect_hint: Optional[str] = None,
) -> List[str]:
    """
    Chunk content with the strategy registered for its category.

    Args:
        content: Document text
        max_tokens: Token budget per chunk
        overlap_tokens: Overlap budget for the default strategy
        category: Content category; omitted means category-agnostic
        dialect_hint: Path or extension used to pick a code grammar

    Returns:
        Ordered chunk strings; empty only for blank content
    """
    check_budgets(max_tokens, overlap_tokens)

    if not content or not content.strip():
        return []

    resolved = resolve_category(category)
    result = _run_strategy(resolved, content, max_tokens, dialect_hint)

    if isinstance(result, Matched) and result.chunks:
        return result.chunks

    if isinstance(result, NoMatch):
        log.debug(
            "chunk.fallback", category=resolved.value, reason=result.reason
        )

    return chunk_default(content, max_tokens, overlap_tokens)


def _run_strategy(
    category: SourceCategory,
    content: str,
    max_tokens: int,
    dialect_hint: Optional[str],
) -> Optional[StrategyResult]:
    """Run the specialized strategy for ``category``, if it has one."""
    try:
        if category is SourceCategory.GLOSSARY:
            return chunk_glossary(content)
        if category in (SourceCategory.KNOWLEDGE, SourceCategory.DOC):
            return chunk_by_sections(content, max_tokens)
        if category in (SourceCategory.CODE, SourceCategory.CONTRACT):
            max_chars = max_chars_for_tokens(max_tokens)
            return chunk_by_ast(content, dialect_hint, max_chars)
    except Exception as e:
        log.warning(
            "chunk.strategy.error",
            category=category.value,
            error=str(e),
            error_type=type(e).__name__,
        )
    return None
