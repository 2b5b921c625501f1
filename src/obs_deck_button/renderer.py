"""Render output status onto the deck: one icon (and caption) per kind."""

from __future__ import annotations

import re

from .deck import DeckClient
from .settings import Config
from .status import Kind, Status

_FRACTION_RE = re.compile(r"\.\d+$")


def strip_fraction(timecode: str) -> str:
    """Drop sub-second precision: ``"00:01:02.345"`` -> ``"00:01:02"``."""
    return _FRACTION_RE.sub("", timecode)


def caption(kind: Kind) -> str:
    """Static label shown while an output is stopped."""
    return f"OBS\n{kind.caption}"


class StatusRenderer:
    def __init__(self, config: Config, deck: DeckClient) -> None:
        self._config = config
        self._deck = deck

    def render(self, kind: Kind, status: Status) -> None:
        """Set the kind's icon for ``status``.

        Stopped outputs also get their elapsed-time text reset to the
        static caption.
        """
        settings = self._config.for_kind(kind)
        if status is Status.ACTIVE:
            icon = settings.on_icon
        elif status is Status.INACTIVE:
            icon = settings.off_icon
            self._deck.set_text(settings.target, caption(kind))
        elif status is Status.ERROR:
            icon = self._config.error_icon_for(kind)
        else:
            raise ValueError(f"Unknown {kind.caption} status: {status!r}")
        self._deck.set_icon(settings.target, icon)

    def render_elapsed(self, kind: Kind, timecode: str) -> None:
        self._deck.set_text(self._config.for_kind(kind).target, strip_fraction(timecode))
