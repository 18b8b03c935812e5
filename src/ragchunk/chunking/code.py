"""
Declaration-level chunking of source code.

TypeScript and JavaScript are parsed with tree-sitter, Python with the
standard ``ast`` module. Top-level declarations become one chunk each,
together with the comment block directly above them; imports are gathered
into a single block; any other top-level code is kept as module-level
chunks so nothing is dropped.
"""

from __future__ import annotations

import ast
import math
import re
from pathlib import PurePath
from typing import Iterator, List, NamedTuple, Optional, Set, Tuple

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from .boundaries import (
    CHARS_PER_TOKEN,
    normalize_newlines,
    pack_lines,
    pack_lines_under_header,
)
from .default import chunk_default
from .results import (
    NO_DECLARATIONS,
    PARSE_FAILURE,
    UNSUPPORTED_DIALECT,
    Matched,
    NoMatch,
    StrategyResult,
)

TYPESCRIPT = "typescript"
TSX = "tsx"
PYTHON = "python"

DIALECT_BY_EXTENSION = {
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".js": TYPESCRIPT,
    ".mjs": TYPESCRIPT,
    ".cjs": TYPESCRIPT,
    ".tsx": TSX,
    ".jsx": TSX,
    ".py": PYTHON,
    ".pyi": PYTHON,
}

TS_LANGUAGES = {
    TYPESCRIPT: Language(tsts.language_typescript()),
    TSX: Language(tsts.language_tsx()),
}

TS_DECLARATIONS = {
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "ambient_declaration",
    "module",
    "internal_module",
}
TS_VARIABLES = {"lexical_declaration", "variable_declaration"}
TS_FUNCTION_VALUES = {
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
}

HEADER_PATTERN = re.compile(
    r"^\s*(export|default|declare|abstract|async|class|interface|type|enum"
    r"|function|const|let|var|def|public|private|protected|static|readonly)\b"
)
PY_COMMENT_PREFIXES = (b"#",)

# Share of the budget a repeated construct header may take
HEADER_SHARE = 0.5

IMPORT = "import"
CONSTRUCT = "construct"
OTHER = "other"


class _Unit(NamedTuple):
    kind: str
    start: int  # byte offsets into the encoded source
    end: int


class _Parsed(NamedTuple):
    source: bytes
    units: List[_Unit]
    import_label: str
    # Exact comment spans when the parser reports them; otherwise comments
    # are recognized by line prefix.
    comments: Optional[List[Tuple[int, int]]] = None
    comment_prefixes: tuple = ()


def resolve_dialect(dialect_hint: Optional[str]) -> Optional[str]:
    """
    Map a path or extension hint to a parser dialect.

    No hint means TypeScript; an unknown extension yields ``None``.
    """
    if not dialect_hint:
        return TYPESCRIPT

    hint = dialect_hint.strip().lower()
    if hint.startswith(".") and "/" not in hint and hint.count(".") == 1:
        ext = hint
    else:
        ext = PurePath(hint).suffix
    return DIALECT_BY_EXTENSION.get(ext)


def chunk_by_ast(
    content: str, dialect_hint: Optional[str], max_chars: int
) -> StrategyResult:
    """
    Chunk source code by top-level declarations.

    Args:
        content: Source text
        dialect_hint: File path or extension selecting the grammar
        max_chars: Character budget; larger declarations are subdivided

    Returns:
        ``Matched`` with chunks in source order, or ``NoMatch`` when the
        dialect is unsupported, the source does not parse, or it holds no
        declarations (an import block alone is not useful)
    """
    dialect = resolve_dialect(dialect_hint)
    if dialect is None:
        return NoMatch(UNSUPPORTED_DIALECT)

    content = normalize_newlines(content)
    try:
        if dialect == PYTHON:
            parsed = _parse_python(content)
        else:
            parsed = _parse_typescript(content, dialect)
    except (SyntaxError, ValueError, RecursionError, RuntimeError):
        return NoMatch(PARSE_FAILURE)

    if parsed is None:
        return NoMatch(PARSE_FAILURE)

    units = _attach_leading_comments(parsed)
    if not any(unit.kind == CONSTRUCT for unit in units):
        return NoMatch(NO_DECLARATIONS)

    return Matched(_assemble(parsed.source, units, parsed.import_label, max_chars))


def subdivide_construct(chunk: str, max_chars: int) -> List[str]:
    """
    Split an oversized declaration, repeating its header on every piece.

    The header is everything up to and including the first declaration
    line, which for a documented construct is its comment block plus the
    signature line. A header may take at most ``HEADER_SHARE`` of the
    budget: comment lines beyond that are emitted once, ahead of the
    pieces, and only the lines closest to the signature are repeated. A
    signature too long to repeat at all is windowed with its body.
    """
    lines = chunk.split("\n")
    header_idx = next(
        (i for i, line in enumerate(lines) if HEADER_PATTERN.match(line)), 0
    )
    header_lines = lines[: header_idx + 1]
    lead: List[str] = []
    while (
        len(header_lines) > 1
        and len("\n".join(header_lines)) > max_chars * HEADER_SHARE
    ):
        lead.append(header_lines.pop(0))

    sub_chunks = pack_lines(lead, max_chars) + pack_lines_under_header(
        "\n".join(header_lines), lines[header_idx + 1 :], max_chars
    )
    return sub_chunks or [chunk]


def _parse_typescript(content: str, dialect: str) -> Optional[_Parsed]:
    source = content.encode("utf-8")
    alternate = TSX if dialect == TYPESCRIPT else TYPESCRIPT

    for candidate in (dialect, alternate):
        parser = Parser(TS_LANGUAGES[candidate])
        tree = parser.parse(source)
        if not tree.root_node.has_error:
            units: List[_Unit] = []
            comments: List[Tuple[int, int]] = []
            for node in tree.root_node.named_children:
                if node.type == "comment":
                    comments.append((node.start_byte, node.end_byte))
                else:
                    units.append(
                        _Unit(_classify_ts(node), node.start_byte, node.end_byte)
                    )
            return _Parsed(source, units, "// Imports", comments=comments)

    return None


def _classify_ts(node: Node) -> str:
    if node.type == "import_statement":
        return IMPORT
    if node.type in TS_DECLARATIONS:
        return CONSTRUCT
    if node.type in TS_VARIABLES:
        return CONSTRUCT if _has_function_value(node) else OTHER
    if node.type == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return CONSTRUCT
        if node.child_by_field_name("value") is not None:
            # export default <expression>
            return CONSTRUCT
    return OTHER


def _has_function_value(node: Node) -> bool:
    return any(
        child.type in TS_FUNCTION_VALUES for child in _descendants(node)
    )


def _descendants(node: Node) -> Iterator[Node]:
    stack = list(node.named_children)
    while stack:
        current = stack.pop()
        yield current
        stack.extend(current.named_children)


def _parse_python(content: str) -> _Parsed:
    tree = ast.parse(content)
    source = content.encode("utf-8")
    lines = content.split("\n")

    line_offsets = [0]
    for line in lines:
        line_offsets.append(line_offsets[-1] + len(line.encode("utf-8")) + 1)

    exported = _python_all_names(tree)
    units: List[_Unit] = []

    for node in tree.body:
        first_line = min(
            [node.lineno]
            + [d.lineno for d in getattr(node, "decorator_list", [])]
        )
        start = line_offsets[first_line - 1]
        end_lineno = node.end_lineno or node.lineno
        if node.end_col_offset is not None:
            end = line_offsets[end_lineno - 1] + node.end_col_offset
        else:
            end = line_offsets[end_lineno] - 1
        units.append(_Unit(_classify_python(node, exported), start, end))

    return _Parsed(
        source, units, "# Imports", comment_prefixes=PY_COMMENT_PREFIXES
    )


def _python_all_names(tree: ast.Module) -> Set[str]:
    names: Set[str] = set()
    for node in tree.body:
        if not isinstance(node, ast.Assign):
            continue
        if not any(
            isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets
        ):
            continue
        if isinstance(node.value, (ast.List, ast.Tuple)):
            names.update(
                elt.value
                for elt in node.value.elts
                if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
            )
    return names


def _classify_python(node: ast.stmt, exported: Set[str]) -> str:
    if isinstance(node, (ast.Import, ast.ImportFrom)):
        return IMPORT
    if isinstance(
        node, (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)
    ):
        return CONSTRUCT
    if isinstance(node, (ast.Assign, ast.AnnAssign)):
        if isinstance(node.value, ast.Lambda):
            return CONSTRUCT
        targets = (
            node.targets if isinstance(node, ast.Assign) else [node.target]
        )
        if any(isinstance(t, ast.Name) and t.id in exported for t in targets):
            return CONSTRUCT
    return OTHER


def _attach_leading_comments(parsed: _Parsed) -> List[_Unit]:
    """
    Extend each construct back over the comment block directly above it
    and turn the remaining non-blank gaps between units into OTHER units.
    """
    source = parsed.source
    result: List[_Unit] = []
    prev_end: Optional[int] = None

    for unit in sorted(parsed.units, key=lambda u: u.start):
        gap_start = 0 if prev_end is None else prev_end
        gap_start = min(gap_start, unit.start)
        start = unit.start

        if prev_end is not None and result:
            # A comment trailing the previous unit on its line stays with it
            gap_start = _absorb_trailing_comment(
                parsed, result, gap_start, unit.start
            )

        if unit.kind == CONSTRUCT:
            start = _comment_block_start(
                parsed, gap_start, unit.start, first_piece_is_line=prev_end is None
            )

        if source[gap_start:start].strip():
            result.append(_Unit(OTHER, gap_start, start))

        result.append(_Unit(unit.kind, start, unit.end))
        prev_end = max(unit.end, prev_end or 0)

    tail_start = prev_end or 0
    if result:
        tail_start = _absorb_trailing_comment(
            parsed, result, tail_start, len(source)
        )
    if source[tail_start:].strip():
        result.append(_Unit(OTHER, tail_start, len(source)))

    return result


def _gap_comments(
    parsed: _Parsed, gap_start: int, gap_end: int
) -> List[Tuple[int, int]]:
    return [
        (start, end)
        for start, end in parsed.comments or []
        if gap_start <= start and end <= gap_end
    ]


def _absorb_trailing_comment(
    parsed: _Parsed, result: List[_Unit], gap_start: int, gap_end: int
) -> int:
    source = parsed.source
    line_end = source.find(b"\n", gap_start, gap_end)
    line_stop = line_end if line_end != -1 else gap_end

    if parsed.comments is not None:
        ends = [
            end
            for start, end in _gap_comments(parsed, gap_start, gap_end)
            if start < line_stop
        ]
        if not ends:
            return gap_start
        new_end = max(ends)
    else:
        tail = source[gap_start:line_stop]
        if not tail.strip().startswith(parsed.comment_prefixes):
            return gap_start
        new_end = gap_start + len(tail.rstrip())

    result[-1] = result[-1]._replace(end=new_end)
    return new_end


def _comment_block_start(
    parsed: _Parsed, gap_start: int, unit_start: int, first_piece_is_line: bool
) -> int:
    source = parsed.source
    start = unit_start

    if parsed.comments is not None:
        # Comment nodes separated from the unit (and each other) by at most
        # a single line break form its documentation block
        for comment_start, comment_end in reversed(
            _gap_comments(parsed, gap_start, unit_start)
        ):
            between = source[comment_end:start]
            if between.strip() or between.count(b"\n") > 1:
                break
            start = comment_start
        return start

    pieces = source[gap_start:unit_start].split(b"\n")
    # The last piece is the indentation before the unit; the first one is
    # the tail of the previous unit's line unless the gap opens the file.
    full_lines = pieces[:-1] if first_piece_is_line else pieces[1:-1]

    offset = unit_start - len(pieces[-1])
    for line in reversed(full_lines):
        offset -= len(line) + 1
        stripped = line.strip()
        if not stripped or not stripped.startswith(parsed.comment_prefixes):
            break
        start = offset
    return start


def _assemble(
    source: bytes, units: List[_Unit], import_label: str, max_chars: int
) -> List[str]:
    chunks: List[str] = []
    imports: List[str] = []
    import_slot: Optional[int] = None
    run: List[_Unit] = []

    def text(start: int, end: int) -> str:
        return source[start:end].decode("utf-8").strip()

    def flush_run() -> None:
        if run:
            chunks.extend(
                _window_module_code(text(run[0].start, run[-1].end), max_chars)
            )
            run.clear()

    for unit in units:
        if unit.kind == OTHER:
            run.append(unit)
            continue

        flush_run()
        if unit.kind == IMPORT:
            imports.append(text(unit.start, unit.end))
            if import_slot is None:
                import_slot = len(chunks)
                chunks.append("")
        else:
            construct = text(unit.start, unit.end)
            if len(construct) > max_chars:
                chunks.extend(subdivide_construct(construct, max_chars))
            else:
                chunks.append(construct)

    flush_run()

    if import_slot is not None:
        chunks[import_slot] = import_label + "\n" + "\n".join(imports)

    return [chunk for chunk in chunks if chunk]


def _window_module_code(code: str, max_chars: int) -> List[str]:
    if not code:
        return []
    if len(code) <= max_chars:
        return [code]
    max_tokens = max(1, math.floor(max_chars / CHARS_PER_TOKEN))
    return chunk_default(code, max_tokens, 0)
