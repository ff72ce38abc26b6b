"""Interactive raw-mode programs."""
