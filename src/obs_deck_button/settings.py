"""User configuration: TOML file, environment and command-line overrides."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .config import (
    APP_NAME,
    DEFAULT_DECK_COMMAND,
    DEFAULT_OBS_HOST,
    DEFAULT_OBS_PORT,
    DEFAULT_RECORDING_BUTTON,
    DEFAULT_STREAMING_BUTTON,
)
from .status import ButtonTarget, Kind

logger = logging.getLogger(__name__)

_ICON_KEYS = ("on_icon", "off_icon", "error_icon")
_INDEX_KEYS = ("button_index", "button_page")


def get_config_path() -> Path:
    """Return the config file path (XDG Base Directory compliant)."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME / "config.toml"


@dataclass
class UserSettings:
    """Parsed contents of config.toml. Unset values are None."""

    error_icon: str | None = None
    deck_command: str | None = None
    # [recording] / [streaming]: on_icon, off_icon, error_icon, button_index, button_page
    recording: dict[str, Any] = field(default_factory=dict)
    streaming: dict[str, Any] = field(default_factory=dict)
    # [obs]
    obs_host: str | None = None
    obs_port: int | None = None
    obs_password: str | None = None

    def for_kind(self, kind: Kind) -> dict[str, Any]:
        return self.recording if kind is Kind.RECORDING else self.streaming


@dataclass(frozen=True)
class KindSettings:
    on_icon: str
    off_icon: str
    target: ButtonTarget
    error_icon: str | None = None


@dataclass(frozen=True)
class Config:
    """Effective configuration, built once at startup."""

    recording: KindSettings
    streaming: KindSettings
    error_icon: str
    deck_command: str = DEFAULT_DECK_COMMAND
    obs_host: str = DEFAULT_OBS_HOST
    obs_port: int = DEFAULT_OBS_PORT
    obs_password: str = field(default="", repr=False)
    config_path: Path | None = None
    verbose: bool = False
    very_verbose: bool = False

    def for_kind(self, kind: Kind) -> KindSettings:
        return self.recording if kind is Kind.RECORDING else self.streaming

    def error_icon_for(self, kind: Kind) -> str:
        """Kind-specific error icon, falling back to the shared one."""
        return self.for_kind(kind).error_icon or self.error_icon


def load_settings(path: Path | None = None) -> UserSettings:
    """Load settings from a config file. Returns defaults if missing or malformed."""
    path = path or get_config_path()
    if not path.exists():
        logger.info("No config found: %s", path)
        return UserSettings()
    logger.info("Loading: %s", path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return UserSettings()
    return _parse(data)


def _parse(data: dict) -> UserSettings:
    """Parse TOML dict into UserSettings."""
    settings = UserSettings()

    error_icon = data.get("error_icon")
    if isinstance(error_icon, str) and error_icon:
        settings.error_icon = error_icon

    deck_command = data.get("deck_command")
    if isinstance(deck_command, str) and deck_command:
        settings.deck_command = deck_command

    # [recording], [streaming]
    for kind in Kind:
        section = data.get(kind.value, {})
        if not isinstance(section, dict):
            logger.warning("Ignoring [%s]: expected a table", kind.value)
            continue
        parsed = settings.for_kind(kind)
        for key in _ICON_KEYS:
            value = section.get(key)
            if isinstance(value, str) and value:
                parsed[key] = value
        for key in _INDEX_KEYS:
            value = section.get(key)
            if value is None:
                continue
            # bool is an int subclass; reject it explicitly
            if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
                parsed[key] = value
            else:
                logger.warning("Ignoring %s.%s = %r: expected a number from 1", kind.value, key, value)

    # [obs]
    obs = data.get("obs", {})
    if isinstance(obs, dict):
        host = obs.get("host")
        if isinstance(host, str) and host:
            settings.obs_host = host
        port = obs.get("port")
        if isinstance(port, int) and not isinstance(port, bool):
            settings.obs_port = port
        password = obs.get("password")
        if isinstance(password, str):
            settings.obs_password = password

    return settings


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _expand(path: str | None) -> str | None:
    return os.path.expanduser(path) if path else path


def _env_port(env: Mapping[str, str]) -> int | None:
    raw = env.get("OBS_WS_PORT")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring OBS_WS_PORT=%r: not a number", raw)
        return None


def build_config(
    overrides: Mapping[str, Any],
    settings: UserSettings,
    default_icons: Mapping[str, str],
    env: Mapping[str, str] | None = None,
) -> Config:
    """Merge built-in defaults, the config file, environment and CLI overrides.

    ``overrides`` uses the CLI option names (``recording_on_icon``,
    ``streaming_button_page``, ...); None means "not given".
    ``default_icons`` maps ``recording-on``, ``recording-off``,
    ``streaming-on``, ``streaming-off`` and ``error`` to icon paths.

    Raises ValueError for button or page numbers below 1.
    """
    if env is None:
        env = os.environ

    default_buttons = {
        Kind.RECORDING: DEFAULT_RECORDING_BUTTON,
        Kind.STREAMING: DEFAULT_STREAMING_BUTTON,
    }

    kinds: dict[Kind, KindSettings] = {}
    for kind in Kind:
        from_file = settings.for_kind(kind)

        def pick(key: str, default=None):
            return _first(overrides.get(f"{kind.value}_{key}"), from_file.get(key), default)

        kinds[kind] = KindSettings(
            on_icon=_expand(pick("on_icon", default_icons[f"{kind.value}-on"])),
            off_icon=_expand(pick("off_icon", default_icons[f"{kind.value}-off"])),
            error_icon=_expand(pick("error_icon")),
            target=ButtonTarget(
                button=pick("button_index", default_buttons[kind]),
                page=pick("button_page"),
            ),
        )

    config_path = overrides.get("config")
    return Config(
        recording=kinds[Kind.RECORDING],
        streaming=kinds[Kind.STREAMING],
        error_icon=_expand(
            _first(overrides.get("error_icon"), settings.error_icon, default_icons["error"])
        ),
        deck_command=_first(
            overrides.get("streamdeckc"), settings.deck_command, DEFAULT_DECK_COMMAND
        ),
        obs_host=_first(
            overrides.get("obs_host"), env.get("OBS_WS_HOST") or None, settings.obs_host, DEFAULT_OBS_HOST
        ),
        obs_port=_first(overrides.get("obs_port"), _env_port(env), settings.obs_port, DEFAULT_OBS_PORT),
        obs_password=_first(env.get("OBS_WS_PASSWORD"), settings.obs_password, ""),
        config_path=Path(config_path) if config_path else None,
        verbose=bool(overrides.get("verbose")) or bool(overrides.get("very_verbose")),
        very_verbose=bool(overrides.get("very_verbose")),
    )
