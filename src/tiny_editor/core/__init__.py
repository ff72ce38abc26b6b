"""Core editor state and terminal constants."""
