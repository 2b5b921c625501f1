"""Watch mode: follow OBS state-change events and refresh elapsed time."""

from __future__ import annotations

import logging
import queue
import time

from .config import POLL_INTERVAL
from .obs import ObsClient
from .renderer import StatusRenderer
from .status import Kind, Status

logger = logging.getLogger(__name__)


class Watcher:
    """Keeps the deck in step with OBS until the process is stopped.

    Events are delivered on the OBS event thread and only queued there;
    rendering happens on the thread that calls :meth:`run`. Events and
    polls are not ordered relative to each other: the last render wins.
    """

    def __init__(
        self,
        obs: ObsClient,
        renderer: StatusRenderer,
        known: dict[Kind, bool],
        interval: float = POLL_INTERVAL,
    ) -> None:
        self._obs = obs
        self._renderer = renderer
        self._known = known
        self._interval = interval
        self._events: queue.Queue[tuple[Kind, bool]] = queue.Queue()
        self._running = False

    def subscribe(self) -> None:
        self._obs.subscribe(self._on_state_changed)
        logger.info("Watching OBS for status changes")

    def _on_state_changed(self, kind: Kind, active: bool) -> None:
        self._events.put((kind, active))

    def handle_event(self, kind: Kind, active: bool) -> None:
        logger.debug("%s state changed: active=%s", kind.value, active)
        self._known[kind] = active
        self._renderer.render(kind, Status.from_active(active))

    def poll(self) -> None:
        """Refresh elapsed time on active outputs; recording is queried first."""
        for kind in (Kind.RECORDING, Kind.STREAMING):
            status = self._obs.status(kind)
            if status.active:
                self._renderer.render_elapsed(kind, status.timecode)

    def run(self) -> None:
        self._running = True
        next_poll = time.monotonic() + self._interval
        while self._running:
            now = time.monotonic()
            if now >= next_poll:
                self.poll()
                next_poll = now + self._interval
                continue
            try:
                kind, active = self._events.get(timeout=next_poll - now)
            except queue.Empty:
                continue
            self.handle_event(kind, active)

    def stop(self) -> None:
        self._running = False
