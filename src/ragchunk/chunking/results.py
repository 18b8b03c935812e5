"""
Outcome of a specialized chunking strategy.

A strategy either found the structure it needs (``Matched``) or did not
(``NoMatch``); the dispatcher falls through to the default splitter on the
latter. Parse failures are reported as ``NoMatch`` with
``reason="parse_failure"``.
"""

from typing import List, NamedTuple, Union


class Matched(NamedTuple):
    chunks: List[str]


class NoMatch(NamedTuple):
    reason: str


StrategyResult = Union[Matched, NoMatch]

NO_GLOSSARY_TERMS = "no_glossary_terms"
NO_HEADINGS = "no_headings"
NO_DECLARATIONS = "no_declarations"
PARSE_FAILURE = "parse_failure"
UNSUPPORTED_DIALECT = "unsupported_dialect"
