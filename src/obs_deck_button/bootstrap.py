"""Startup sequence: connect, show current status, bind buttons, run commands."""

from __future__ import annotations

import logging
import shlex
import shutil
import sys
from pathlib import Path
from typing import Iterable

from .config import APP_NAME
from .deck import DeckClient
from .dispatcher import WATCH, Dispatcher
from .obs import ObsClient, ObsConnectionError, ObsRequestError
from .renderer import StatusRenderer
from .settings import Config
from .status import Kind, Status
from .watch import Watcher

logger = logging.getLogger(__name__)


def resolve_program() -> str:
    """Return a shell command that runs this program.

    Prefers the console script installed next to the running interpreter,
    so it works even when the venv's bin directory is not on PATH.
    """
    script = Path(sys.executable).parent / APP_NAME
    if script.exists():
        return shlex.quote(str(script))
    found = shutil.which(APP_NAME)
    if found:
        return shlex.quote(found)
    return f"{shlex.quote(sys.executable)} -m obs_deck_button"


def short_flags(config: Config) -> list[tuple[str, object]]:
    """Short option letters paired with their effective values."""
    rec, stream = config.recording, config.streaming
    return [
        ("o", rec.on_icon),
        ("f", rec.off_icon),
        ("e", rec.error_icon),
        ("p", rec.target.page),
        ("i", rec.target.button),
        ("O", stream.on_icon),
        ("F", stream.off_icon),
        ("E", stream.error_icon),
        ("P", stream.target.page),
        ("I", stream.target.button),
        ("r", config.error_icon),
        ("s", config.deck_command),
        ("H", config.obs_host),
        ("n", config.obs_port),
        ("c", config.config_path),
    ]


def build_command_line(config: Config, program: str) -> str:
    """Restate the effective configuration as a command line for ``program``.

    Unset values are omitted. The caller appends the verb to run.
    """
    parts = [program]
    for flag, value in short_flags(config):
        if value is not None:
            parts.append(f"-{flag} {shlex.quote(str(value))}")
    if config.very_verbose:
        parts.append("-w")
    elif config.verbose:
        parts.append("-v")
    return " ".join(parts)


def _render_error(renderer: StatusRenderer) -> None:
    for kind in Kind:
        renderer.render(kind, Status.ERROR)


def start(
    config: Config,
    commands: Iterable[str],
    obs: ObsClient | None = None,
    deck: DeckClient | None = None,
    program: str | None = None,
) -> int:
    """Run the requested commands and return the process exit code.

    Does not return while watching.
    """
    commands = list(commands)
    deck = deck or DeckClient(config.deck_command)
    renderer = StatusRenderer(config, deck)
    obs = obs or ObsClient(config.obs_host, config.obs_port, config.obs_password)

    try:
        obs.connect()
    except ObsConnectionError as e:
        logger.error("Error connecting to OBS: %s", e)
        _render_error(renderer)
        return 1

    known: dict[Kind, bool] = {}
    watcher: Watcher | None = None
    try:
        for kind in Kind:
            active = obs.status(kind).active
            known[kind] = active
            renderer.render(kind, Status.from_active(active))

        command_line = build_command_line(config, program or resolve_program())
        for kind in Kind:
            deck.bind_command(config.for_kind(kind).target, f"{command_line} {kind.toggle_verb}")

        dispatcher = Dispatcher(obs, renderer, known)
        for command in commands:
            if command == WATCH:
                logger.info("Executing command: %s", command)
                if watcher is None:
                    watcher = Watcher(obs, renderer, known)
                    watcher.subscribe()
                continue
            dispatcher.dispatch(command)

        if watcher is not None:
            watcher.run()
    except ObsConnectionError as e:
        logger.error("Lost connection to OBS: %s", e)
        _render_error(renderer)
        obs.disconnect()
        return 1
    except ObsRequestError as e:
        logger.error("OBS request failed: %s", e)
        obs.disconnect()
        return 1

    obs.disconnect()
    return 0
