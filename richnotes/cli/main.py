#!/usr/bin/env python
"""Command line interface for richnotes."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from richnotes.cli.commands import notes
from richnotes.cli.utils import session

app = typer.Typer(help="Browse and edit rich-text notes")
console = Console()

# Add command groups
app.add_typer(notes.app, name="notes")


@app.callback()
def callback(
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="Note store base URL (default: RICHNOTES_API_URL)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logs"
    ),
):
    """Manage notes stored on a remote note store."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
    )
    if verbose:
        logging.getLogger("richnotes").setLevel(logging.DEBUG)
    session.configure(api_url=api_url, timeout=timeout)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
