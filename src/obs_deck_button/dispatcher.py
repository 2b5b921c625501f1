"""Run start/stop/toggle commands against OBS and reflect them on the deck."""

from __future__ import annotations

import logging
from typing import Literal

from .obs import ObsClient
from .renderer import StatusRenderer
from .status import Kind, Status

logger = logging.getLogger(__name__)

Action = Literal["start", "stop", "toggle"]

WATCH = "watch"

VERBS: dict[str, tuple[Kind, Action]] = {
    "rstart": (Kind.RECORDING, "start"),
    "rstop": (Kind.RECORDING, "stop"),
    "rtoggle": (Kind.RECORDING, "toggle"),
    "sstart": (Kind.STREAMING, "start"),
    "sstop": (Kind.STREAMING, "stop"),
    "stoggle": (Kind.STREAMING, "toggle"),
}

COMMANDS: dict[str, str] = {
    WATCH: "Watch for changes in status.",
    "rstart": "Start OBS recording.",
    "rstop": "Stop OBS recording.",
    "rtoggle": "Toggle OBS recording.",
    "sstart": "Start OBS streaming.",
    "sstop": "Stop OBS streaming.",
    "stoggle": "Toggle OBS streaming.",
}


def parse_verb(verb: str) -> tuple[Kind, Action]:
    try:
        return VERBS[verb]
    except KeyError:
        raise ValueError(f"Unknown command: {verb}") from None


class Dispatcher:
    """Executes verbs one at a time, in the order they are given.

    ``known`` is the last status seen for each kind. It is shared with the
    watch loop and updated after every command.
    """

    def __init__(self, obs: ObsClient, renderer: StatusRenderer, known: dict[Kind, bool]) -> None:
        self._obs = obs
        self._renderer = renderer
        self._known = known

    def dispatch(self, verb: str) -> None:
        kind, action = parse_verb(verb)
        logger.info("Executing command: %s", verb)

        if action == "start":
            self._obs.start(kind)
            active = True
        elif action == "stop":
            self._obs.stop(kind)
            active = False
        else:
            self._obs.toggle(kind)
            # Assumes the toggle flipped the last known state; OBS is not re-queried.
            active = not self._known.get(kind, False)
            logger.info("%s: %s", kind.value.capitalize(), "On" if active else "Off")

        self._known[kind] = active
        self._renderer.render(kind, Status.from_active(active))
