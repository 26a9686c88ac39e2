"""Rewarder settings CLI.

This module provides a command-line front end to the settings form:
the form is rendered into an in-memory container and every edit goes
through the same bound handlers a UI would call.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer

from rewarder.errors import SettingsError
from rewarder.form import Heading, RecordingContainer, Setting, SettingsForm, Toggle
from rewarder.settings import RewarderSettings, SettingsPersister, open_store

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Task rewarder settings CLI", add_completion=False)

logger: Final = logging.getLogger(__name__)  # Will be "rewarder.cli"

DEFAULT_SETTINGS_FILE: Final = Path("rewarder.yaml")

SETTINGS_OPTION = typer.Option(
    None, "--settings", "-s", dir_okay=False, help="Settings file (.yaml or .json)"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
KEY_ARGUMENT = typer.Argument(..., help="Setting key, e.g. rewards_file or occurrence_types.0.value")
VALUE_ARGUMENT = typer.Argument(..., help="New value as typed into the form")
EDITS_ARGUMENT = typer.Argument(..., help="Edits as KEY=VALUE")
DST_ARGUMENT = typer.Argument(..., help="Output settings file")
FILE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False, help="Settings file to check")
FORCE_OPTION = typer.Option(False, "--force", "-f", help="Overwrite an existing file")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class FormSession:
    """A loaded settings file with its form rendered and ready for edits."""

    settings: RewarderSettings
    persister: SettingsPersister
    form: SettingsForm
    container: RecordingContainer


def _open_session(path: Path | None) -> FormSession:
    if path is None:
        path = RewarderSettings.locate() or DEFAULT_SETTINGS_FILE
    logger.debug("Using settings file %s", path)

    store = open_store(path)
    settings = RewarderSettings.load(store)
    persister = SettingsPersister(settings, store)
    container = RecordingContainer()
    form = SettingsForm(settings, persister.save, container)
    form.display()
    return FormSession(settings, persister, form, container)


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise typer.BadParameter(f"expected one of {sorted(_TRUE | _FALSE)}, got {value!r}")


def _find(session: FormSession, key: str) -> Setting:
    try:
        return session.container.find(key)
    except KeyError:
        keys = ", ".join(s.key for s in session.container.settings)
        raise typer.BadParameter(f"unknown setting {key!r}; choose from: {keys}") from None


def _apply_edit(session: FormSession, key: str, value: str) -> bool:
    # Rows are looked up fresh because a clamp re-renders the container
    control = _find(session, key).control
    if isinstance(control, Toggle):
        return control.on_change(_parse_bool(value))
    return control.on_change(value)


def _echo_items(container: RecordingContainer) -> None:
    for item in container.items:
        if isinstance(item, Heading):
            typer.secho(f"\n{'#' * item.level} {item.text}", bold=True)
            continue

        control = item.control
        if isinstance(control, Toggle):
            shown = "on" if control.value else "off"
        else:
            shown = repr(control.value)
        typer.echo(f"{item.key} = {shown}")
        typer.echo(f"    {item.name}")
        if item.description:
            typer.echo(f"    {item.description}")


def _report(key: str, accepted: bool, session: FormSession) -> None:
    if not accepted:
        typer.secho(f"{key}: rejected, value unchanged", fg=typer.colors.YELLOW)
        return
    # Most accepted edits leave the rendered rows stale
    session.form.display()
    shown = session.container.find(key).control.value
    typer.secho(f"{key}: {shown!r}", fg=typer.colors.GREEN)


@app.callback()
def main(debug: bool = DEBUG_OPTION) -> None:
    """Inspect and edit the rewarder plugin settings."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@app.command()
def show(settings: Path | None = SETTINGS_OPTION) -> None:
    """Render the settings form."""
    try:
        session = _open_session(settings)
    except (SettingsError, FileNotFoundError) as exc:
        raise _fail(exc) from exc
    _echo_items(session.container)


@app.command("set")
def set_value(
    key: str = KEY_ARGUMENT,
    value: str = VALUE_ARGUMENT,
    settings: Path | None = SETTINGS_OPTION,
) -> None:
    """Edit one setting the way the form would."""
    try:
        session = _open_session(settings)
        accepted = _apply_edit(session, key, value)
    except (SettingsError, FileNotFoundError) as exc:
        raise _fail(exc) from exc
    _report(key, accepted, session)


@app.command()
def reset(key: str = KEY_ARGUMENT, settings: Path | None = SETTINGS_OPTION) -> None:
    """Restore a setting's default value."""
    try:
        session = _open_session(settings)
        button = _find(session, key).reset
        if button is None:
            raise typer.BadParameter(f"{key!r} has no default to restore")
        button.on_click()
    except (SettingsError, FileNotFoundError) as exc:
        raise _fail(exc) from exc
    _report(key, True, session)


@app.command()
def apply(edits: list[str] = EDITS_ARGUMENT, settings: Path | None = SETTINGS_OPTION) -> None:
    """Apply several edits and write the settings once."""
    pairs: list[tuple[str, str]] = []
    for edit in edits:
        key, sep, value = edit.partition("=")
        if not sep:
            raise typer.BadParameter(f"expected KEY=VALUE, got {edit!r}")
        pairs.append((key.strip(), value))

    try:
        session = _open_session(settings)
        with session.persister.batch():
            results = [(key, _apply_edit(session, key, value)) for key, value in pairs]
    except (SettingsError, FileNotFoundError) as exc:
        raise _fail(exc) from exc

    for key, accepted in results:
        _report(key, accepted, session)


@app.command()
def validate(file: Path = FILE_ARGUMENT) -> None:
    """Validate a settings file."""
    try:
        RewarderSettings.load(open_store(file))
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.echo("✅ Settings valid")


@app.command()
def init(dst: Path = DST_ARGUMENT, force: bool = FORCE_OPTION) -> None:
    """Write the default settings to a new file."""
    if dst.exists() and not force:
        typer.secho(f"{dst} already exists (use --force to overwrite)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    try:
        RewarderSettings.defaults().save(open_store(dst))
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.secho(f"Settings written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
