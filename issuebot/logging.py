"""Process logging for one bot run.

Levels (inclusive):
- ERROR: failed commands and fatal dispatch errors
- WARNING: skipped side effects (e.g. a reaction that could not be added)
- INFO: which actor handled the event and what it changed
- DEBUG: routing misses, plus urllib3 connection chatter

Configure via config.yaml (logging.level, logging.format) or env (LOGGING_LEVEL, LOGGING_FORMAT).
"""

import logging

from issuebot.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOGGER_NAME = "issuebot"

# HTTP client loggers, muted to WARNING unless the bot runs at DEBUG
HTTP_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    return LEVELS.get(level.strip().upper(), LEVELS[DEFAULT_LEVEL])


class IssueBotLogging:
    """Configures the root logger and returns the ``issuebot`` logger.

    Built without a config it uses the defaults, which is what ``main``
    does before the config file has been read.
    """

    def __init__(self, config: LoggingConfig | None = None) -> None:
        self._level = _resolve_level(config.level if config else DEFAULT_LEVEL)
        self._format = (config.format if config else "") or DEFAULT_FORMAT

    def setup(self) -> logging.Logger:
        logging.basicConfig(level=self._level, format=self._format, force=True)
        http_level = logging.DEBUG if self._level <= logging.DEBUG else logging.WARNING
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(http_level)
        return logging.getLogger(LOGGER_NAME)
