"""Delete command for the Notes service."""

from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from richnotes.cli.utils import session

app = typer.Typer(help="Delete a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="ID of the note to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a note."""
    answers: List[bool] = []

    def confirm(message: str) -> bool:
        answer = True if force else typer.confirm(message)
        answers.append(answer)
        return answer

    notes = session.open_session(confirm=confirm)

    async def _delete() -> bool:
        if not await notes.select_note(note_id):
            return False
        return await notes.delete()

    if not session.run(_delete()):
        if answers and not answers[-1]:
            console.print("Deletion cancelled")
            return
        raise typer.Exit(1)
    console.print(f"Deleted note [bold]{escape(note_id)}[/bold]")
