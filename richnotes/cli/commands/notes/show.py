"""Show command for the Notes service."""

import typer
from rich.console import Console
from rich.markup import escape

from richnotes.cli.utils import session
from richnotes.content import LIST_TYPES, BlockType

app = typer.Typer(help="Show a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="ID of the note"),
    raw: bool = typer.Option(False, "--raw", help="Print the serialized content"),
):
    """Show a note's title and text."""
    notes = session.open_session()
    if not session.run(notes.select_note(note_id)):
        raise typer.Exit(1)

    current = notes.session
    console.print(f"[bold]{escape(current.draft_title)}[/bold]")
    if raw:
        console.print(notes.serialized_draft(), markup=False, highlight=False)
        return

    number = 0
    for block in current.draft_document.blocks:
        if block.type == BlockType.ORDERED_LIST_ITEM:
            number += 1
            prefix = f"{number}. "
        else:
            number = 0
            prefix = "• " if block.type in LIST_TYPES else ""
        indent = "  " * block.depth if block.type in LIST_TYPES else ""
        console.print(f"{indent}{prefix}{block.text}", markup=False, highlight=False)
