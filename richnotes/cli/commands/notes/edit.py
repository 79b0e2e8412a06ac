"""Edit command for the Notes service."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from richnotes.cli.utils import session

app = typer.Typer(help="Edit a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="ID of the note"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    text: Optional[str] = typer.Option(
        None, "--text", "-t", help="New text (one block per line)"
    ),
    style: List[str] = typer.Option(
        [], "--style", "-s", help="Toggle an inline style over the whole text"
    ),
    block_type: Optional[str] = typer.Option(
        None, "--block-type", "-b", help="Toggle a block type on every line"
    ),
):
    """Update a note's title, text or formatting."""
    if title is None and text is None and not style and not block_type:
        console.print("[yellow]Warning:[/yellow] No updates specified")
        return

    notes = session.open_session()

    async def _edit() -> bool:
        if not await notes.select_note(note_id):
            return False
        if title is not None:
            notes.edit_title(title)
        document = notes.session.draft_document
        if text is not None:
            document = session.replace_text(document, text)
        document = session.apply_formatting(document, style, block_type)
        if document != notes.session.draft_document:
            notes.edit_content(document)
        return await notes.save()

    if not session.run(_edit()):
        raise typer.Exit(1)
    console.print(f"Updated note [bold]{escape(note_id)}[/bold]")
