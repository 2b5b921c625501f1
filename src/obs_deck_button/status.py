"""Monitored output kinds, their status values, and deck button addresses."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Kind(enum.Enum):
    """One of the two OBS outputs mirrored on the deck."""

    RECORDING = "recording"
    STREAMING = "streaming"

    @property
    def output(self) -> str:
        """OBS output name used in request/event names ("record", "stream")."""
        return "record" if self is Kind.RECORDING else "stream"

    @property
    def caption(self) -> str:
        return "Record" if self is Kind.RECORDING else "Stream"

    @property
    def toggle_verb(self) -> str:
        return f"{self.value[0]}toggle"


class Status(enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"

    @classmethod
    def from_active(cls, active: bool | None) -> Status:
        """Map an OBS ``outputActive`` flag to a Status (None means error)."""
        if active is None:
            return cls.ERROR
        if active is True:
            return cls.ACTIVE
        if active is False:
            return cls.INACTIVE
        raise ValueError(f"Unknown output state: {active!r}")


@dataclass(frozen=True)
class ButtonTarget:
    """A deck button address, numbered from 1 as users configure it."""

    button: int
    page: int | None = None

    def __post_init__(self) -> None:
        if self.button < 1:
            raise ValueError(f"Button index must be 1 or greater, got {self.button}")
        if self.page is not None and self.page < 1:
            raise ValueError(f"Button page must be 1 or greater, got {self.page}")

    def to_args(self) -> list[str]:
        """Return deck-control arguments; the executable counts from 0."""
        args = ["--button", str(self.button - 1)]
        if self.page is not None:
            args += ["--page", str(self.page - 1)]
        return args
