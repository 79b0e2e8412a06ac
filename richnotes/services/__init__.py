"""Remote-backed services."""
