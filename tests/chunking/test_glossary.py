"""Tests for glossary term extraction."""

from ragchunk.chunking.glossary import chunk_glossary
from ragchunk.chunking.results import NO_GLOSSARY_TERMS, Matched, NoMatch


def test_one_chunk_per_term():
    content = "**SX**: Service Execution.\n\n**WCF**: Work Completion Form."
    assert chunk_glossary(content) == Matched(
        ["**SX**: Service Execution.", "**WCF**: Work Completion Form."]
    )


def test_parenthetical_acronym_kept_in_term():
    result = chunk_glossary("**Service Execution (SX)**: Runs scheduled work.")
    assert result.chunks == ["**Service Execution (SX)**: Runs scheduled work."]


def test_multiline_definition_stays_whole():
    content = (
        "**Work Order**: A request for service.\n"
        "It carries a priority and a due date.\n\n"
        "Orders are closed by technicians.\n"
        "**Technician**: Field worker."
    )
    result = chunk_glossary(content)
    assert result.chunks == [
        "**Work Order**: A request for service.\n"
        "It carries a priority and a due date.\n\n"
        "Orders are closed by technicians.",
        "**Technician**: Field worker.",
    ]


def test_heading_ends_definition():
    content = "# Glossary\n\n**A**: alpha\n\n## More terms\n\n**B**: beta"
    assert chunk_glossary(content).chunks == ["**A**: alpha", "**B**: beta"]


def test_separator_without_colon_normalized():
    result = chunk_glossary("**Term** is defined here")
    assert result.chunks == ["**Term**: is defined here"]


def test_entries_without_definition_skipped():
    result = chunk_glossary("**Lonely**:\n**Real**: yes")
    assert result.chunks == ["**Real**: yes"]


def test_long_definition_is_atomic():
    definition = "word " * 2000
    result = chunk_glossary(f"**Big**: {definition}")
    assert len(result.chunks) == 1
    assert result.chunks[0] == f"**Big**: {definition.strip()}"


def test_crlf_content():
    result = chunk_glossary("**A**: one\r\n**B**: two\r\n")
    assert result.chunks == ["**A**: one", "**B**: two"]


def test_no_terms_is_no_match():
    result = chunk_glossary("Plain prose with **inline bold** only.")
    assert result == NoMatch(NO_GLOSSARY_TERMS)
    assert isinstance(result, NoMatch)
