"""Process-wide logger used by the client.

The client never configures logging on its own. By default every call goes to
a no-op sink; applications opt in with :func:`set_logger`, either with their
own object implementing :class:`Logger` or with :func:`create_console_logger`.
"""

import logging
import sys
from typing import Any, Optional, Protocol, Union

Meta = Optional[dict[str, Any]]


class Logger(Protocol):
    """Leveled sink accepting a message and optional structured metadata."""

    def debug(self, message: str, meta: Meta = None) -> None: ...

    def info(self, message: str, meta: Meta = None) -> None: ...

    def warn(self, message: str, meta: Meta = None) -> None: ...

    def error(self, message: str, meta: Meta = None) -> None: ...


class NoOpLogger:
    """Discards everything."""

    def debug(self, message: str, meta: Meta = None) -> None:
        pass

    def info(self, message: str, meta: Meta = None) -> None:
        pass

    def warn(self, message: str, meta: Meta = None) -> None:
        pass

    def error(self, message: str, meta: Meta = None) -> None:
        pass


class StandardLogger:
    """
    Forwards to a stdlib :mod:`logging` logger.

    Metadata is appended to the message and also attached to the record as
    ``record.meta`` for handlers that want it structured.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("sikka")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: int, message: str, meta: Meta) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if meta:
            self._logger.log(level, "%s %s", message, meta, extra={"meta": meta})
        else:
            self._logger.log(level, message, extra={"meta": {}})

    def debug(self, message: str, meta: Meta = None) -> None:
        self._log(logging.DEBUG, message, meta)

    def info(self, message: str, meta: Meta = None) -> None:
        self._log(logging.INFO, message, meta)

    def warn(self, message: str, meta: Meta = None) -> None:
        self._log(logging.WARNING, message, meta)

    def error(self, message: str, meta: Meta = None) -> None:
        self._log(logging.ERROR, message, meta)


class ConsoleHandler(logging.StreamHandler):
    """Stderr handler installed by create_console_logger."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )


def create_noop_logger() -> NoOpLogger:
    """Create a logger that drops every entry."""
    return NoOpLogger()


def create_console_logger(level: Union[int, str] = logging.DEBUG) -> StandardLogger:
    """
    Create a logger writing to stderr.

    Args:
        level: Minimum level, as a ``logging`` constant or its name

    Returns:
        StandardLogger bound to the ``sikka`` stdlib logger
    """
    std_logger = logging.getLogger("sikka")
    std_logger.setLevel(level)
    if not any(isinstance(h, ConsoleHandler) for h in std_logger.handlers):
        std_logger.addHandler(ConsoleHandler())
    return StandardLogger(std_logger)


# Singleton instance
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the active logger, creating the no-op default on first access."""
    global _logger
    if _logger is None:
        _logger = NoOpLogger()
    return _logger


def set_logger(logger: Logger) -> None:
    """Replace the active logger for the whole process."""
    global _logger
    _logger = logger


def reset_logger() -> None:
    """Drop the active logger so the next access recreates the no-op default."""
    global _logger
    _logger = None
