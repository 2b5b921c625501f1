"""Mirror OBS recording/streaming status onto Stream Deck buttons."""

__version__ = "0.3.0"
