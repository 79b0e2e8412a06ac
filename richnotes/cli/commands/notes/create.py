"""Create command for the Notes service."""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from richnotes.cli.utils import session

app = typer.Typer(help="Create a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    title: str = typer.Argument(..., help="Title of the note"),
    text: str = typer.Option("", "--text", "-t", help="Note text (one block per line)"),
    style: List[str] = typer.Option(
        [], "--style", "-s", help="Inline style for the whole text (bold, italic, underline, red, ...)"
    ),
    block_type: Optional[str] = typer.Option(
        None, "--block-type", "-b", help="Block type for every line (e.g. center-align)"
    ),
):
    """Create a new note."""
    document = session.apply_formatting(
        session.document_from_lines(text), style, block_type
    )
    notes = session.open_session()

    async def _create() -> bool:
        notes.new_note()
        notes.edit_title(title)
        notes.edit_content(document)
        return await notes.save()

    if not session.run(_create()):
        raise typer.Exit(1)
    console.print(f"Created note [bold]{escape(str(notes.session.selected_note_id))}[/bold]")
