"""CLI entrypoint for windeck."""

from __future__ import annotations

import typer

from ui.cli import commands

app = typer.Typer(help="On-demand window switcher engine")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    commands.configure_logging(verbose)


@app.command("list")
def list_cmd(as_json: bool = typer.Option(False, "--json", help="Emit JSON")) -> None:
    """List on-screen windows with their thumbnails."""
    commands.list_windows(as_json=as_json)


@app.command("layout")
def layout_cmd(
    width: float = typer.Option(1280.0, "--width", min=1, help="Available width in points"),
) -> None:
    """Show justified rows for the current windows."""
    commands.show_layout(width=width)


@app.command("focus")
def focus_cmd(window_id: int = typer.Argument(..., help="Compositor window id")) -> None:
    """Bring a window to the front."""
    commands.focus_window(window_id)


@app.command("close")
def close_cmd(window_id: int = typer.Argument(..., help="Compositor window id")) -> None:
    """Close a window via its close button."""
    commands.close_window(window_id)


@app.command("quit")
def quit_cmd(window_id: int = typer.Argument(..., help="Compositor window id")) -> None:
    """Quit the application owning a window."""
    commands.quit_app(window_id)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
