"""OBS Studio control through obs-websocket v5 (obsws-python)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from obsws_python import EventClient, ReqClient, Subs
from obsws_python.error import OBSSDKError, OBSSDKRequestError
from websocket import WebSocketException

from .config import DEFAULT_OBS_HOST, DEFAULT_OBS_PORT
from .status import Kind

logger = logging.getLogger(__name__)

StateCallback = Callable[[Kind, bool], None]  # (kind, output_active) -> None

# Failures that mean the connection itself is unusable
_CONNECTION_ERRORS = (OSError, WebSocketException, OBSSDKError)


class ObsError(Exception):
    pass


class ObsConnectionError(ObsError):
    """OBS could not be reached, refused authentication, or went away."""


class ObsRequestError(ObsError):
    """OBS answered a request with a failure status."""


@dataclass(frozen=True)
class OutputStatus:
    active: bool
    timecode: str = ""


class ObsClient:
    """Requests and state-change events for the record and stream outputs."""

    def __init__(
        self,
        host: str = DEFAULT_OBS_HOST,
        port: int = DEFAULT_OBS_PORT,
        password: str = "",
    ) -> None:
        self.host = host
        self.port = port
        self._password = password
        self._req: ReqClient | None = None
        self._events: EventClient | None = None

    def connect(self) -> None:
        logger.debug("Connecting to OBS at %s:%d", self.host, self.port)
        try:
            self._req = ReqClient(host=self.host, port=self.port, password=self._password)
        except _CONNECTION_ERRORS as e:
            raise ObsConnectionError(f"{self.host}:{self.port}: {e}") from e

    def disconnect(self) -> None:
        if self._events is not None:
            self._events.disconnect()
            self._events = None
        if self._req is not None:
            self._req.disconnect()
            self._req = None

    def status(self, kind: Kind) -> OutputStatus:
        """GetRecordStatus / GetStreamStatus."""
        resp = self._call("get", kind, "status")
        return OutputStatus(
            active=bool(resp.output_active),
            timecode=getattr(resp, "output_timecode", "") or "",
        )

    def start(self, kind: Kind) -> None:
        self._call("start", kind)

    def stop(self, kind: Kind) -> None:
        self._call("stop", kind)

    def toggle(self, kind: Kind) -> None:
        self._call("toggle", kind)

    def subscribe(self, callback: StateCallback) -> None:
        """Call ``callback(kind, output_active)`` on each output state change.

        Events arrive on the event client's receiver thread.
        """
        try:
            self._events = EventClient(
                host=self.host, port=self.port, password=self._password, subs=Subs.OUTPUTS
            )
        except _CONNECTION_ERRORS as e:
            raise ObsConnectionError(f"{self.host}:{self.port}: {e}") from e

        # obsws-python dispatches on the handler's function name
        def on_record_state_changed(data) -> None:
            callback(Kind.RECORDING, bool(data.output_active))

        def on_stream_state_changed(data) -> None:
            callback(Kind.STREAMING, bool(data.output_active))

        self._events.callback.register([on_record_state_changed, on_stream_state_changed])

    def _call(self, verb: str, kind: Kind, suffix: str = ""):
        if self._req is None:
            raise ObsConnectionError("Not connected to OBS")
        name = "_".join(p for p in (verb, kind.output, suffix) if p)
        logger.debug("Calling %s", name)
        try:
            return getattr(self._req, name)()
        except OBSSDKRequestError as e:
            raise ObsRequestError(str(e)) from e
        except _CONNECTION_ERRORS as e:
            raise ObsConnectionError(str(e)) from e
