"""Command-line interface and terminal session."""
