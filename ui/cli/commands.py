"""Typer command handlers."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer

from core.orchestrator import RuntimeBundle, build_runtime
from core.policy_runtime import load_settings
from os_controller.base_backend import BackendUnavailableError
from world_model.window_state import WindowDescriptor


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _runtime() -> RuntimeBundle:
    try:
        return build_runtime()
    except BackendUnavailableError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)


def _refreshed(bundle: RuntimeBundle) -> list[WindowDescriptor]:
    """Open a session, run one refresh and return the published windows."""
    session = bundle.orchestrator.open()
    asyncio.run(bundle.orchestrator.refresh())
    return list(session.descriptors)


def _lookup(bundle: RuntimeBundle, window_id: int) -> WindowDescriptor:
    for descriptor in bundle.enumerator.enumerate():
        if descriptor.id == window_id:
            return descriptor
    typer.echo(f"No on-screen window with id {window_id}", err=True)
    raise typer.Exit(code=1)


def list_windows(as_json: bool = False) -> None:
    """Print the current window list."""
    bundle = _runtime()
    try:
        windows = _refreshed(bundle)
    finally:
        bundle.orchestrator.shutdown()
    if as_json:
        typer.echo(json.dumps([w.to_dict() for w in windows], indent=2))
        return
    if not windows:
        typer.echo("No open windows")
        return
    for w in windows:
        thumb = "x".join(str(v) for v in w.thumbnail.size) if w.thumbnail is not None else "-"
        typer.echo(f"{w.id:>8}  {w.owner_app_name} ({w.owner_pid})  {w.display_label!r}  thumb={thumb}")


def show_layout(width: float) -> None:
    """Print justified rows for the current windows at ``width``."""
    bundle = _runtime()
    try:
        windows = _refreshed(bundle)
        result = bundle.orchestrator.layout(width)
    finally:
        bundle.orchestrator.shutdown()
    for number, row in enumerate(result.rows):
        labels = ", ".join(f"{windows[i].display_label}@{w:.0f}" for i, w in zip(row.indices, row.item_widths))
        typer.echo(f"row {number}: height={row.height:.1f} [{labels}]")
    typer.echo(f"total height: {result.total_height:.1f}")


def focus_window(window_id: int) -> None:
    bundle = _runtime()
    target = _lookup(bundle, window_id)
    matched = bundle.actions.focus(target)
    typer.echo(f"Focused {target.display_label!r}" if matched else f"Activated {target.owner_app_name}")


def close_window(window_id: int) -> None:
    bundle = _runtime()
    target = _lookup(bundle, window_id)
    closed = bundle.actions.close(target)
    typer.echo(f"Closed {target.display_label!r}" if closed else "Close had no effect")


def quit_app(window_id: int) -> None:
    bundle = _runtime()
    target = _lookup(bundle, window_id)
    bundle.actions.quit(target)
    typer.echo(f"Asked {target.owner_app_name} ({target.owner_pid}) to quit")


def config_show() -> None:
    """Show effective configuration."""
    root = Path(__file__).resolve().parents[2]
    typer.echo(json.dumps(load_settings(root).model_dump(), indent=2))
