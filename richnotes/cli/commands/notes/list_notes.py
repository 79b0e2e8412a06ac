"""List command for the Notes service."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from richnotes.cli.utils import session

app = typer.Typer(help="List notes")
console = Console()

PREVIEW_CHARS = 60


def _clip(text: str, limit: int = PREVIEW_CHARS) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 1] + "…"


@app.callback(invoke_without_command=True)
def main():
    """List all notes with a plain-text preview."""
    notes = session.open_session()
    if not session.run(notes.refresh_notes()):
        raise typer.Exit(1)

    summaries = notes.summaries()
    if not summaries:
        console.print("No notes found")
        return

    table = Table("Title", "Preview", "Created", "ID")
    for item in summaries:
        table.add_row(
            escape(item.title), escape(_clip(item.preview)), item.date_label, escape(item.id)
        )
    console.print(table)
