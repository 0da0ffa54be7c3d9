"""
Note Commands.

Create, list, search, show, edit and remove notes. Encrypted note bodies
are only ever shown after a successful reveal.
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from notevault.backend.core.dependencies import note_service_scope
from notevault.backend.core.exceptions import (
    DecryptionError,
    NotFoundError,
    PersistenceError,
)
from notevault.backend.core.logging import get_logger, log_with_source
from notevault.backend.schemas.note import Note
from notevault.backend.services.note import NoteService

T = TypeVar("T")

logger = get_logger(__name__)

app = typer.Typer(help="Note commands")
console = Console()


def _resolve_passphrase() -> str:
    """Read the note passphrase from settings, or prompt for it."""
    from notevault.backend.core.config import get_settings

    secret = get_settings().note_passphrase
    if secret is not None:
        return secret.get_secret_value()
    return typer.prompt("Passphrase", hide_input=True)


def _run(operation: Callable[[NoteService], Awaitable[T]]) -> T:
    """Run an operation against the configured note store, mapping errors to exit codes."""
    passphrase = _resolve_passphrase()

    async def _with_service() -> T:
        async with note_service_scope(passphrase) as service:
            return await operation(service)

    try:
        return asyncio.run(_with_service())
    except NotFoundError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    except DecryptionError as e:
        log_with_source(logger, "cli", "warning", "Reveal failed", code=e.code)
        console.print("[red]Cannot decrypt: wrong passphrase or corrupted note[/red]")
        raise typer.Exit(1)
    except PersistenceError as e:
        log_with_source(logger, "cli", "error", "Storage unavailable", error=e.message)
        console.print(f"[red]Storage error: {e.message}[/red]")
        raise typer.Exit(1)


def _format_date(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%d.%m.%Y")


def _display_notes(notes: list[Note], empty_message: str) -> None:
    """Display notes as a table."""
    if not notes:
        console.print(f"[dim]{empty_message}[/dim]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Locked", justify="center")
    table.add_column("Updated")
    table.add_column("Tags", style="dim")

    for note in notes:
        table.add_row(
            note.id,
            Text(note.title),
            "[green]yes[/green]" if note.encrypted else "no",
            _format_date(note.updated_at),
            ", ".join(note.tags),
        )

    console.print(table)


@app.command()
def new(
    plain: bool = typer.Option(False, "--plain", "-p", help="Store the body unencrypted"),
) -> None:
    """
    Create a new empty note.

    Notes are encrypted unless --plain is given.

    Examples:
        cli.py notes new
        cli.py notes new --plain
    """
    note = _run(lambda service: service.create_note(encrypted=not plain))
    console.print(f"[green]Created note[/green] {note.id}")


@app.command("list")
def list_notes() -> None:
    """
    List all notes, most recently created first.
    """
    notes = _run(lambda service: service.list_notes())
    _display_notes(notes, "No notes yet. Create one!")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in note titles"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only notes with this tag"),
) -> None:
    """
    Search note titles (case-insensitive).

    Examples:
        cli.py notes search meeting
        cli.py notes search plan --tag work
    """
    notes = _run(lambda service: service.search_notes(query, tag=tag))
    _display_notes(notes, "No notes found")


@app.command()
def show(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """
    Show a note, decrypting its body if needed.
    """

    async def _show(service: NoteService) -> tuple[Note, str]:
        note = await service.get_note(note_id)
        return note, await service.reveal_note(note_id)

    note, body = _run(_show)
    subtitle = "encrypted" if note.encrypted else "plain"
    console.print(Panel(Text(body or "[Empty note]"), title=Text(note.title), subtitle=subtitle))


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    content: Optional[str] = typer.Option(
        None, "--content", "-c", help="New body, or - to read it from stdin"
    ),
    encrypt: Optional[bool] = typer.Option(
        None, "--encrypt/--plain", help="Change whether the body is encrypted"
    ),
    tags: Optional[list[str]] = typer.Option(None, "--tag", help="Replace tags (repeatable)"),
    clear_tags: bool = typer.Option(False, "--clear-tags", help="Remove all tags"),
) -> None:
    """
    Edit a note's title, body, encryption or tags.

    Options that are not given keep their current value.

    Examples:
        cli.py notes edit <id> --title "Groceries" --content "milk, eggs"
        cli.py notes edit <id> --clear-tags
        echo "secret" | cli.py notes edit <id> --content - --encrypt
    """
    if clear_tags and tags:
        console.print("[red]Use either --tag or --clear-tags, not both[/red]")
        raise typer.Exit(1)
    if clear_tags:
        tags = []

    if content == "-":
        content = sys.stdin.read()

    async def _edit(service: NoteService) -> Note:
        note = await service.get_note(note_id)
        body = content if content is not None else await service.reveal_note(note_id)
        return await service.save_note(
            note_id,
            title if title is not None else note.title,
            body,
            note.encrypted if encrypt is None else encrypt,
            tags=tags if tags or clear_tags else None,
        )

    note = _run(_edit)
    console.print(f"[green]Saved note[/green] {note.id}")


@app.command("rm")
def remove(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a note. This cannot be undone.
    """
    if not yes:
        typer.confirm("Are you sure? This cannot be undone.", abort=True)

    removed = _run(lambda service: service.remove_note(note_id))
    if not removed:
        console.print(f"[yellow]Note {note_id} not found[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Deleted note[/green] {note_id}")
