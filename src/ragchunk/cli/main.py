import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..chunking.engine import chunk_document
from ..chunking.verify import verify_chunks
from ..core.config import Settings
from ..core.logging import setup_logging
from ..core.models import SourceCategory, SourceDocument

app = typer.Typer(add_completion=False, help="Ragchunk CLI")


@app.callback()
def _init(
    log_format: str | None = typer.Option(
        None, "--log-format", help="Logging format: json|plain|auto"
    ),
) -> None:
    settings = Settings.load_config()
    setup_logging(log_format or settings.LOG_FORMAT)  # type: ignore[arg-type]


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def chunk(
    path: Path = typer.Argument(..., help="File to chunk"),
    category: SourceCategory = typer.Option(
        SourceCategory.OTHER, "--category", "-c", help="Content category"
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Maximum tokens per chunk"
    ),
    overlap_tokens: int | None = typer.Option(
        None, "--overlap-tokens", help="Overlap budget between chunks"
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="Config file (.ragchunk.yaml auto-discovered)"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Emit one JSON object per chunk"
    ),
    verify: bool = typer.Option(
        False, "--verify", help="Print a coverage and token cap report"
    ),
) -> None:
    """
    Chunk a single file and preview the result.

    Examples:
        ragchunk chunk docs/glossary.md --category glossary
        ragchunk chunk src/api.ts -c code --max-tokens 300 --json
    """
    settings = Settings.load_config(config_file)
    if max_tokens is None:
        max_tokens = settings.CHUNK_MAX_TOKENS
    if overlap_tokens is None:
        overlap_tokens = settings.CHUNK_OVERLAP_TOKENS

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"❌ Cannot read {path}: {e}", err=True)
        raise typer.Exit(1) from e

    document = SourceDocument(
        content=content,
        category=category,
        path=str(path),
        source_name=path.name,
    )
    try:
        chunks = chunk_document(document, max_tokens, overlap_tokens)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(2) from e

    if as_json:
        for item in chunks:
            typer.echo(json.dumps(item.model_dump(), ensure_ascii=False))
    else:
        table = Table(title=f"{path.name}: {len(chunks)} chunks")
        table.add_column("#", justify="right")
        table.add_column("Tokens", justify="right")
        table.add_column("First line")
        for item in chunks:
            first_line = item.content.split("\n", 1)[0]
            table.add_row(str(item.index), str(item.token_count), first_line[:80])
        Console().print(table)

    if verify:
        report = verify_chunks(
            content, [item.content for item in chunks], max_tokens
        )
        typer.echo(json.dumps(report, indent=2), err=True)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
