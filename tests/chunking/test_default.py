"""Tests for paragraph/line windowing with overlap."""

import pytest

from ragchunk.chunking.boundaries import estimate_tokens
from ragchunk.chunking.default import chunk_default
from ragchunk.chunking.verify import find_missing_words


class TestParagraphWindows:
    def test_blank_input_gives_no_chunks(self):
        assert chunk_default("") == []
        assert chunk_default(" \n\n\t\n") == []

    def test_single_small_paragraph_is_one_chunk(self):
        assert chunk_default("  Just one paragraph.  \n") == [
            "Just one paragraph."
        ]

    def test_small_paragraphs_packed_together(self):
        text = "First.\n\nSecond.\n\nThird."
        assert chunk_default(text, max_tokens=500) == [
            "First.\n\nSecond.\n\nThird."
        ]

    def test_small_trailing_paragraph_seeds_next_chunk(self):
        p1 = "A" * 100
        p2 = "short para"
        p3 = "C" * 100
        chunks = chunk_default(
            f"{p1}\n\n{p2}\n\n{p3}", max_tokens=40, overlap_tokens=10
        )
        assert chunks == [f"{p1}\n\n{p2}", f"{p2}\n\n{p3}"]

    def test_no_overlap_when_trailing_paragraph_too_large(self):
        p1 = "A" * 100
        p2 = "short para"
        p3 = "C" * 100
        chunks = chunk_default(
            f"{p1}\n\n{p2}\n\n{p3}", max_tokens=40, overlap_tokens=2
        )
        assert chunks == [f"{p1}\n\n{p2}", p3]

    def test_zero_overlap_never_repeats(self):
        paragraphs = [f"Paragraph number {i} has some words." for i in range(20)]
        chunks = chunk_default(
            "\n\n".join(paragraphs), max_tokens=30, overlap_tokens=0
        )
        emitted = [p for chunk in chunks for p in chunk.split("\n\n")]
        assert emitted == paragraphs

    def test_crlf_input(self):
        assert chunk_default("a\r\n\r\nb", max_tokens=1, overlap_tokens=0) == [
            "a",
            "b",
        ]

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            chunk_default("text", max_tokens=0)


class TestOversizedParagraphs:
    def test_split_by_lines_with_line_overlap(self):
        lines = [f"line {i:02d} xxxxxxxxxxxx" for i in range(10)]
        assert all(len(line) == 20 for line in lines)

        chunks = chunk_default(
            "\n".join(lines), max_tokens=20, overlap_tokens=10
        )

        assert chunks == [
            "\n".join(lines[0:3]),
            "\n".join(lines[2:5]),
            "\n".join(lines[4:7]),
            "\n".join(lines[6:9]),
            "\n".join(lines[8:10]),
        ]

    def test_pending_buffer_flushed_before_oversized_paragraph(self):
        big = "\n".join(f"row {i} " + "y" * 30 for i in range(20))
        chunks = chunk_default(f"intro\n\n{big}", max_tokens=30)
        assert chunks[0] == "intro"
        assert all(estimate_tokens(chunk) <= 30 for chunk in chunks)

    def test_long_unbroken_paragraph_within_budget(self):
        text = ("lorem ipsum dolor sit amet " * 80).strip()
        assert len(text) > 2000

        chunks = chunk_default(text, max_tokens=100, overlap_tokens=50)

        assert len(chunks) > 1
        assert all(estimate_tokens(chunk) <= 100 for chunk in chunks)
        assert find_missing_words(text, chunks) == []

    def test_overlap_only_when_tail_fits_overlap_budget(self):
        text = ("lorem ipsum dolor sit amet " * 80).strip()
        chunks = chunk_default(text, max_tokens=100, overlap_tokens=50)

        for current, following in zip(chunks, chunks[1:]):
            tail = current.split("\n")[-1]
            if following.startswith(tail):
                assert estimate_tokens(tail) <= 50

    def test_single_huge_word_makes_progress(self):
        text = "x" * 1000
        chunks = chunk_default(text, max_tokens=10)
        assert all(estimate_tokens(chunk) <= 10 for chunk in chunks)
        assert "".join(chunks) == text
