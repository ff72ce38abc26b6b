"""Typer CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from tiny_editor.cli.core.errors import TerminalError
from tiny_editor.config import EditorConfig, configure_logging
from tiny_editor.core.constants import DEFAULT_READ_TIMEOUT

logger = logging.getLogger(__name__)

TimeoutOption = Annotated[
    int,
    typer.Option(
        "--timeout",
        "-t",
        min=1,
        max=255,
        help="Read timeout in tenths of a second",
    ),
]


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="tiny-editor",
        help="Raw-mode terminal screen with cursor navigation.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    err_console = Console(stderr=True)

    def run_session(session: Callable[[EditorConfig], int], config: EditorConfig) -> None:
        try:
            status = session(config)
        except TerminalError as exc:
            logger.error("fatal terminal error: %s", exc.describe())
            err_console.print(f"[red]{escape(exc.describe())}[/]")
            raise typer.Exit(1)
        raise typer.Exit(status)

    @app.callback()
    def main(
        log_file: Annotated[Optional[Path], typer.Option("--log-file", help="Write logs to this file")] = None,
        log_level: Annotated[str, typer.Option("--log-level", help="Log level for --log-file")] = "WARNING",
    ) -> None:
        """Raw-mode terminal screen with cursor navigation."""
        try:
            configure_logging(log_file, log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level")

    @app.command()
    def edit(timeout: TimeoutOption = DEFAULT_READ_TIMEOUT) -> None:
        """Open the editor screen. Arrows move the cursor, q or Esc quits."""
        from tiny_editor.cli.studio import editor

        run_session(editor.run_editor, EditorConfig(read_timeout=timeout))

    @app.command()
    def keys(timeout: TimeoutOption = DEFAULT_READ_TIMEOUT) -> None:
        """Print the code of every key pressed in raw mode until q."""
        from tiny_editor.cli.studio import inspector

        run_session(inspector.run_inspector, EditorConfig(read_timeout=timeout))

    return app
