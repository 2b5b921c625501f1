"""Shared constants for obs_deck_button."""

from pathlib import Path

APP_NAME = "obs-deck-button"
LOG_PATH = Path("/tmp/obs_deck_button.log")
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

POLL_INTERVAL = 1.25  # Elapsed-time refresh period in watch mode (seconds)

DEFAULT_DECK_COMMAND = "streamdeckc"
DEFAULT_RECORDING_BUTTON = 9
DEFAULT_STREAMING_BUTTON = 10

DEFAULT_OBS_HOST = "localhost"
DEFAULT_OBS_PORT = 4455

ICON_PIXEL_SIZE = (72, 72)
