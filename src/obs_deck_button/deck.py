"""Stream Deck button programming through the external deck-control executable."""

from __future__ import annotations

import logging
import shlex
import subprocess

from .config import DEFAULT_DECK_COMMAND
from .status import ButtonTarget

logger = logging.getLogger(__name__)

# Conventional shell status for "command not found"
EXIT_NOT_FOUND = 127


class DeckClient:
    """Sets icons, text and commands on deck buttons.

    Every call blocks until the executable exits. A non-zero exit status is
    logged and returned; nothing is retried.
    """

    def __init__(self, executable: str = DEFAULT_DECK_COMMAND) -> None:
        self.executable = executable

    def set_icon(self, target: ButtonTarget, icon: str) -> int:
        return self._run("set_icon", target, "--icon", icon)

    def set_text(self, target: ButtonTarget, text: str) -> int:
        return self._run("set_text", target, "--text", text)

    def bind_command(self, target: ButtonTarget, command: str) -> int:
        """Make a button press run ``command``."""
        return self._run("set_cmd", target, "--command", command)

    def _run(self, action: str, target: ButtonTarget, *extra: str) -> int:
        args = [self.executable, "--action", action, *target.to_args(), *extra]
        logger.info("Executing: %s", shlex.join(args))
        try:
            result = subprocess.run(args, capture_output=True, text=True, errors="replace")
        except OSError as e:
            logger.error("Could not run %s: %s", self.executable, e)
            return EXIT_NOT_FOUND

        output = "\n  ".join(s.strip() for s in (result.stdout, result.stderr) if s and s.strip())
        if result.returncode != 0:
            logger.warning("Executed %s: exit %d\n  %s", action, result.returncode, output)
        elif output:
            logger.debug("Executed %s: exit 0\n  %s", action, output)
        return result.returncode
