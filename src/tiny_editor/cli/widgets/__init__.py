"""Screen widgets."""

from tiny_editor.cli.widgets.screen import ScreenCompositor
from tiny_editor.cli.widgets.status_bar import StatusBarWidget
from tiny_editor.cli.widgets.welcome import WelcomeWidget

__all__ = [
    "ScreenCompositor",
    "StatusBarWidget",
    "WelcomeWidget",
]
