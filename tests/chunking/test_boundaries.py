"""Tests for size estimation and boundary helpers."""

import pytest

from ragchunk.chunking.boundaries import (
    check_budgets,
    estimate_tokens,
    max_chars_for_tokens,
    normalize_newlines,
    pack_lines,
    pack_lines_under_header,
    split_into_segments,
    split_long_line,
)


class TestTokenEstimate:
    def test_ceil_of_length_over_three_and_a_half(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abc") == 1
        assert estimate_tokens("a" * 7) == 2
        assert estimate_tokens("a" * 8) == 3
        assert estimate_tokens("a" * 350) == 100

    def test_max_chars_is_consistent_with_estimate(self):
        for budget in (1, 2, 3, 10, 99, 500):
            limit = max_chars_for_tokens(budget)
            assert estimate_tokens("x" * limit) <= budget
            assert estimate_tokens("x" * (limit + 1)) > budget

    def test_invalid_budgets_rejected(self):
        with pytest.raises(ValueError):
            check_budgets(0)
        with pytest.raises(ValueError):
            check_budgets(10, -1)
        check_budgets(1, 0)


class TestSegments:
    def test_blank_lines_split_paragraphs(self):
        text = "first\nstill first\n\n\nsecond\n   \t\nthird"
        assert split_into_segments(text) == [
            "first\nstill first",
            "second",
            "third",
        ]

    def test_blank_text_has_no_segments(self):
        assert split_into_segments("  \n\n \n") == []

    def test_crlf_normalized(self):
        assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"


class TestLongLines:
    def test_short_line_unchanged(self):
        assert split_long_line("  indented line", 50) == ["  indented line"]

    def test_breaks_at_whitespace(self):
        assert split_long_line("aaa bbb ccc", 7) == ["aaa bbb", "ccc"]

    def test_hard_slices_long_words(self):
        assert split_long_line("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_pieces_never_exceed_limit(self):
        line = " ".join(f"word{i}" for i in range(300)) + " " + "z" * 90
        pieces = split_long_line(line, 40)
        assert all(len(piece) <= 40 for piece in pieces)
        assert "".join(pieces).replace(" ", "") == line.replace(" ", "")


class TestPackUnderHeader:
    def test_header_repeated_on_every_chunk(self):
        lines = [f"line {i:02d} of the body" for i in range(12)]
        chunks = pack_lines_under_header("## Header", lines, 60)

        assert len(chunks) > 1
        for chunk in chunks:
            assert chunk.startswith("## Header\n")
            assert len(chunk) <= 60

    def test_each_line_emitted_once(self):
        lines = [f"line {i:02d} of the body" for i in range(12)]
        chunks = pack_lines_under_header("## Header", lines, 60)
        body = [
            line for chunk in chunks for line in chunk.split("\n")[1:]
        ]
        assert body == lines

    def test_blank_bodies_leave_header_alone(self):
        assert pack_lines_under_header("# H", ["", "   "], 50) == ["# H"]
        assert pack_lines_under_header("# H", [], 50) == ["# H"]

    def test_header_without_room_is_windowed(self):
        header = "## " + " ".join(f"word{i}" for i in range(30))
        chunks = pack_lines_under_header(header, ["body line"], 40)

        assert all(len(chunk) <= 40 for chunk in chunks)
        assert " ".join(chunks).split() == header.split() + ["body", "line"]


class TestPackLines:
    def test_lines_packed_greedily(self):
        lines = ["aaaa", "bbbb", "", "cccc"]
        assert pack_lines(lines, 9) == ["aaaa\nbbbb", "cccc"]

    def test_long_line_sliced(self):
        chunks = pack_lines(["x" * 25], 10)
        assert chunks == ["x" * 10, "x" * 10, "x" * 5]

    def test_blank_input(self):
        assert pack_lines(["", "  "], 10) == []

    def test_oversized_line_sliced_to_room(self):
        chunks = pack_lines_under_header("# H", ["word " * 40], 30)
        assert len(chunks) > 1
        assert all(len(chunk) <= 30 for chunk in chunks)
