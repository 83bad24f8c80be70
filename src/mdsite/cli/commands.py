"""CLI command implementations"""

from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdsite.config import Settings, load_config
from mdsite.core.pipeline import build, commit_result
from mdsite.core.source import make_source
from mdsite.crud.database import init_db, make_engine, reset_db
from mdsite.crud.documents import get_all_documents, get_by_type, list_types
from mdsite.errors import ContentError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content directory (defaults to content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Directory for generated JSON")] = None,
    on_error: Annotated[Optional[str], typer.Option("--on-error", help="fail (abort) or skip (drop bad files)")] = None,
    theme: Annotated[Optional[str], typer.Option("--theme", help="Pygments style for code blocks")] = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Document store URL")] = None,
    no_store: Annotated[bool, typer.Option("--no-store", help="Skip writing the document store")] = False,
    ):
    """Build every content file: validate, transform, write generated output, commit."""
    settings = _settings(overrides={
        "content_dir": path, "output_dir": out, "on_error": on_error,
        "theme": theme, "db_url": db_url, "store": False if no_store else None,
    })
    try:
        source = make_source(settings)
    except ValueError as e:
        _fail(str(e))

    try:
        result = build(source)
    except ContentError as e:
        _fail("Build failed", e)

    for issue in result.errors:
        typer.echo(f"  skipped: {issue.path} [{issue.step}] {issue.message}", err=True)
    typer.echo(f"Built {len(result.documents)} document(s) into {settings.output_dir}/")

    if not settings.store:
        return
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        counts, changes = commit_result(engine, result)
    except Exception as e:
        _fail("Commit failed", e)
    for status, slug in changes:
        typer.echo(f"  {status}: {slug}")
    typer.echo(
        f"Commit complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['removed']} removed"
    )


def list_cmd(
    type_name: Annotated[Optional[str], typer.Option("--type", help="Only list documents of this type")] = None,
    ):
    """List documents in the store as '<type> <url> <title>'."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        known = list_types(session)
        if type_name and known and type_name not in known:
            _fail(f"Unknown document type '{type_name}' (known: {', '.join(known)})")
        records = get_by_type(session, type_name) if type_name else get_all_documents(session)
    if not records:
        typer.echo("No documents found in database.")
        raise typer.Exit(1)
    for r in records:
        title = (r.fields or {}).get("title", "")
        typer.echo(f"{r.type}\t{r.url}\t{title}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the document store schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
