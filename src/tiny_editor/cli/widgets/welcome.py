"""Centered welcome banner for the first screen row."""

from __future__ import annotations

from tiny_editor.core.constants import WELCOME_BANNER


class WelcomeWidget:
    """Banner text centered in the screen width, led by a ``~`` marker."""

    def __init__(self, banner: str = WELCOME_BANNER) -> None:
        self.banner = banner

    def render(self, width: int) -> str:
        text = self.banner[:width]
        padding = (width - len(text)) // 2
        parts: list[str] = []
        if padding:
            parts.append("~")
            padding -= 1
        parts.append(" " * padding)
        parts.append(text)
        return "".join(parts)
