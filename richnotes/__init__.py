"""Rich-text notes backed by a remote note store."""

__version__ = "0.1.0"
