"""
In-memory chunk verification: token cap compliance and text coverage.
"""

import re
import statistics
from typing import Dict, List

from .boundaries import estimate_tokens

WHITESPACE = re.compile(r"\s+")


def find_missing_words(content: str, chunks: List[str]) -> List[str]:
    """
    Words of ``content`` that appear in no chunk.

    Chunks are compared with all whitespace removed, so words re-wrapped or
    sliced across lines still count as covered.
    """
    covered = WHITESPACE.sub("", "".join(chunks))
    return [word for word in content.split() if word not in covered]


def verify_chunks(content: str, chunks: List[str], max_tokens: int) -> Dict:
    """
    Build a verification report for the chunks of one document.

    Args:
        content: Original document text
        chunks: Chunk strings produced for it
        max_tokens: Token cap the chunks were produced with

    Returns:
        Report dictionary with token stats, cap breaches and coverage
    """
    token_counts = [estimate_tokens(chunk) for chunk in chunks]
    breaches = [
        {"index": i, "tokens": tokens, "preview": chunks[i][:80]}
        for i, tokens in enumerate(token_counts)
        if tokens > max_tokens
    ]

    words = content.split()
    missing = find_missing_words(content, chunks)
    coverage_pct = (
        100.0 if not words else (len(words) - len(missing)) / len(words) * 100
    )

    if token_counts:
        sorted_counts = sorted(token_counts)
        p95_index = max(0, int(len(sorted_counts) * 0.95) - 1)
        token_stats = {
            "min": sorted_counts[0],
            "median": statistics.median(sorted_counts),
            "p95": sorted_counts[p95_index],
            "max": sorted_counts[-1],
            "total": sum(sorted_counts),
        }
    else:
        token_stats = {"min": 0, "median": 0, "p95": 0, "max": 0, "total": 0}

    return {
        "chunk_count": len(chunks),
        "max_tokens": max_tokens,
        "token_stats": token_stats,
        "breaches": {"count": len(breaches), "examples": breaches[:5]},
        "coverage": {
            "pct": round(coverage_pct, 2),
            "missing_words": len(missing),
            "examples": missing[:10],
        },
    }
