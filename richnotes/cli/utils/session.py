"""Utility functions for building note sessions in CLI commands."""

import asyncio
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from richnotes.config import Settings, load_settings
from richnotes.content import (
    BlockType,
    Document,
    InlineStyle,
    Selection,
    color_style,
    document_from_text,
    insert_block_after,
    remove_block,
    set_block_text,
    toggle_block_type,
    toggle_inline_style,
)
from richnotes.services.notes import NotesApiClient, NoteSession
from richnotes.services.notes.sync import RemoteSync

console = Console()

T = TypeVar("T")

_SEVERITY_MARKUP = {
    "information": "[green]{}[/green]",
    "warning": "[yellow]Warning:[/yellow] {}",
    "error": "[bold red]Error:[/bold red] {}",
}

# Global options from the top-level callback
_overrides: Dict[str, Any] = {}


def configure(api_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
    _overrides.clear()
    _overrides.update(api_url=api_url, timeout=timeout)


def get_settings() -> Settings:
    return load_settings(
        api_url=_overrides.get("api_url"), timeout=_overrides.get("timeout")
    )


def get_store() -> RemoteSync:
    """Create the note store client from the resolved settings."""
    return NotesApiClient.from_settings(get_settings())


def notify(message: str, severity: str) -> None:
    console.print(_SEVERITY_MARKUP.get(severity, "{}").format(message))


def open_session(confirm=None) -> NoteSession:
    return NoteSession(get_store(), notify=notify, confirm=confirm)


def run(coro: Awaitable[T]) -> T:
    return asyncio.run(coro)


def parse_style(name: str) -> InlineStyle:
    """Accept ``BOLD``/``bold`` or a palette color name such as ``red``."""
    upper = name.strip().upper()
    try:
        return InlineStyle(upper)
    except ValueError:
        pass
    try:
        return color_style(name)
    except ValueError:
        console.print(f"[bold red]Error:[/bold red] Unknown style {escape(repr(name))}")
        raise typer.Exit(1)


def parse_block_type(name: str) -> BlockType:
    try:
        return BlockType(name.strip().lower())
    except ValueError:
        choices = ", ".join(t.value for t in BlockType)
        console.print(
            f"[bold red]Error:[/bold red] Unknown block type {escape(repr(name))} (choose from {choices})"
        )
        raise typer.Exit(1)


def document_from_lines(text: str) -> Document:
    """One block per line of ``text``."""
    lines = text.split("\n")
    doc = document_from_text(lines[0])
    for line in lines[1:]:
        doc = insert_block_after(doc, None, line)
    return doc


def apply_formatting(
    doc: Document, styles: List[str], block_type: Optional[str]
) -> Document:
    """Apply inline styles and a block type to the whole document."""
    for name in styles:
        doc = toggle_inline_style(doc, Selection.whole_document(doc), parse_style(name))
    if block_type:
        doc = toggle_block_type(
            doc, Selection.whole_document(doc), parse_block_type(block_type)
        )
    return doc


def replace_text(doc: Document, text: str) -> Document:
    """
    Replace the document text line by line, keeping existing blocks (and
    their formatting, clipped to the new text) where lines remain.
    """
    lines = text.split("\n")
    blocks = list(doc.blocks)
    for block, line in zip(blocks, lines):
        doc = set_block_text(doc, block.key, line)
    for block in blocks[len(lines) :]:
        doc = remove_block(doc, block.key)
    for line in lines[len(blocks) :]:
        doc = insert_block_after(doc, None, line)
    return doc
