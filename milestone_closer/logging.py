"""Root logger setup for a milestone closer run.

INFO lists closed/reopened milestones; DEBUG adds every inspected milestone
and skip decision. Set via config.yaml (logging.level, logging.format), env
(LOGGING_LEVEL, LOGGING_FORMAT), or RUNNER_DEBUG=1 when the workflow is
re-run with debug logging enabled.
"""

import logging
import os
from typing import Mapping

from milestone_closer.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names give INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def runner_debug(env: Mapping[str, str] | None = None) -> bool:
    """True when the Actions runner has step debug logging on."""
    env = os.environ if env is None else env
    return env.get("RUNNER_DEBUG") == "1"


class MilestoneLogging:
    """Applies LoggingConfig to the root logger; runner debug forces DEBUG."""

    def __init__(self, config: LoggingConfig, env: Mapping[str, str] | None = None) -> None:
        self.level = logging.DEBUG if runner_debug(env) else _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(level=self.level, format=self._format, force=True)
        # Keep urllib3 request lines out of milestone DEBUG output
        logging.getLogger("urllib3").setLevel(max(self.level, logging.INFO))
