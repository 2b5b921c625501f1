"""Command-line entry point: obs-deck-button [options] [command ...]."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path

from . import __version__
from .bootstrap import start
from .config import APP_NAME, LOG_FORMAT, LOG_PATH
from .dispatcher import COMMANDS, WATCH, parse_verb
from .icons import DEFAULT_ICONS, ensure_default_icons, get_icon_dir
from .settings import build_config, get_config_path, load_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    commands = "\n".join(f"  {name:<9} {help_}" for name, help_ in COMMANDS.items())
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Mirror OBS recording and streaming status on Stream Deck buttons.",
        epilog=f"commands (run in the order given):\n{commands}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("commands", nargs="*", metavar="command", help="Command to run.")

    rec = parser.add_argument_group("recording button")
    rec.add_argument("-o", "--recording-on-icon", help="Icon to use when recording.")
    rec.add_argument("-f", "--recording-off-icon", help="Icon to use when recording is stopped.")
    rec.add_argument("-e", "--recording-error-icon", help="Icon to use when something goes wrong.")
    rec.add_argument("-p", "--recording-button-page", type=int, help="Which page to put the recording button on.")
    rec.add_argument("-i", "--recording-button-index", type=int, help="Recording button position.")

    stream = parser.add_argument_group("streaming button")
    stream.add_argument("-O", "--streaming-on-icon", help="Icon to use when streaming.")
    stream.add_argument("-F", "--streaming-off-icon", help="Icon to use when streaming is stopped.")
    stream.add_argument("-E", "--streaming-error-icon", help="Icon to use when something goes wrong.")
    stream.add_argument("-P", "--streaming-button-page", type=int, help="Which page to put the streaming button on.")
    stream.add_argument("-I", "--streaming-button-index", type=int, help="Streaming button position.")

    parser.add_argument("-r", "--error-icon", help="Backup icon to use when something goes wrong.")
    parser.add_argument("-s", "--streamdeckc", help="Location of the `streamdeckc` program.")
    parser.add_argument("-H", "--obs-host", help="OBS websocket host.")
    parser.add_argument("-n", "--obs-port", type=int, help="OBS websocket port.")
    parser.add_argument("-c", "--config", help=f"Location of a TOML config file (default: {get_config_path()}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print more information.")
    parser.add_argument("-w", "--very-verbose", action="store_true", help="Print even more information.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging(verbose: bool, very_verbose: bool) -> None:
    if very_verbose:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    try:
        handlers.append(logging.FileHandler(LOG_PATH))
    except OSError as e:
        file_error = e
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    if file_error is not None:
        logger.warning("Not writing log file %s: %s", LOG_PATH, file_error)


def _setup_signals() -> None:
    signal.signal(signal.SIGTERM, _handle_signal)
    signal.signal(signal.SIGINT, _handle_signal)


def _handle_signal(signum: int, frame) -> None:
    logger.error("Received signal %d, aborting", signum)
    sys.exit(1)


def _default_icons() -> dict[str, str]:
    try:
        return ensure_default_icons()
    except OSError as e:
        logger.warning("Could not render default icons: %s", e)
        return {name: str(get_icon_dir() / f"{name}.png") for name in DEFAULT_ICONS}


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    for command in args.commands:
        if command != WATCH:
            try:
                parse_verb(command)
            except ValueError as e:
                parser.error(str(e))

    _setup_logging(args.verbose, args.very_verbose)
    _setup_signals()

    config_path = Path(args.config).expanduser() if args.config else get_config_path()
    settings = load_settings(config_path)

    overrides = vars(args) | {"config": str(config_path)}
    try:
        config = build_config(overrides, settings, _default_icons())
    except ValueError as e:
        parser.error(str(e))
    logger.debug("Effective config: %s", config)

    return start(config, args.commands)


def main() -> None:
    sys.exit(run())
