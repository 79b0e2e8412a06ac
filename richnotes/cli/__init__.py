"""Command line interface for richnotes."""
