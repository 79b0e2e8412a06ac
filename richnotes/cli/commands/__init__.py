"""Command modules for the richnotes CLI."""

from richnotes.cli.commands import notes

__all__ = ["notes"]
