"""Logging from config and env.

Configure via prsync.yaml (logging.level, logging.format) or env
(LOGGING_LEVEL, LOGGING_FORMAT). Supported levels are DEBUG, INFO, WARNING
and ERROR; anything else means INFO.

Avatar enrichment issues many small HTTP calls, so urllib3 connection
chatter is only shown at DEBUG.
"""

import logging

from prsync.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

NOISY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    return LEVELS.get(level.upper().strip(), logging.INFO)


class PrsyncLogging:
    """Configures the root logger from LoggingConfig."""

    def __init__(self, config: LoggingConfig) -> None:
        self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    @property
    def level(self) -> int:
        return self._level

    def setup(self) -> None:
        """Apply level and format to the root logger and quiet HTTP client loggers."""
        logging.basicConfig(
            level=self._level,
            format=self._format,
            force=True,
        )
        noisy_level = self._level if self._level == logging.DEBUG else max(self._level, logging.WARNING)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(noisy_level)

    def get_logger(self, name: str) -> logging.Logger:
        """Return a logger under the ``prsync`` namespace."""
        if name != "prsync" and not name.startswith("prsync."):
            name = f"prsync.{name}"
        return logging.getLogger(name)
