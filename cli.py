#!/usr/bin/env python3
"""
CLI Client.

Command-line client for the encrypted note store.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                            # Show help

    # Notes
    python cli.py notes new                         # New encrypted note
    python cli.py notes new --plain                 # New unencrypted note
    python cli.py notes list                        # List notes
    python cli.py notes search hello                # Search titles
    python cli.py notes show <id>                   # Decrypt and display
    python cli.py notes edit <id> -t Title -c Body  # Save a note
    python cli.py notes rm <id>                     # Delete a note

    # System info
    python cli.py system info                       # Show app info
    python cli.py system config                     # Show configuration

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message

The note passphrase is read from NOTE_PASSPHRASE (config/.env or the
environment) and prompted for when unset.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def _validate_project_root() -> None:
    """Validate that the project root marker is reachable."""
    from notevault.backend.core.config import find_project_root

    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


from notevault.cli.commands import notes_app, system_app

# Create main app
app = typer.Typer(
    name="cli",
    help="notevault CLI - Passphrase-encrypted notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    notevault CLI.

    Create, search, show and edit notes whose bodies are sealed with
    AES-256-GCM under a passphrase-derived key.
    """
    # Validate project root
    _validate_project_root()

    # Configure logging based on flags
    from notevault.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


if __name__ == "__main__":
    app()
