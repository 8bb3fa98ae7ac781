"""Global participant log level."""

from __future__ import annotations

import logging
from enum import Enum


class ParticipantLogLevel(Enum):
    """
    Log level applied to every client in the network.

    The orchestrator forwards it unmodified to each launcher.
    Translating it into a client-specific verbosity flag is the launcher's job.
    """

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    @classmethod
    def parse(cls, value: str) -> ParticipantLogLevel:
        """
        Parse a log level name, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the name is not a known level.
        """
        normalized = value.strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            supported = [level.value for level in cls]
            raise ValueError(
                f"Invalid participant log level '{value}'. Supported values: {supported}"
            ) from None

    def to_logging_level(self) -> int:
        """Equivalent stdlib logging level, for in-process launchers."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS: dict[ParticipantLogLevel, int] = {
    ParticipantLogLevel.ERROR: logging.ERROR,
    ParticipantLogLevel.WARN: logging.WARNING,
    ParticipantLogLevel.INFO: logging.INFO,
    ParticipantLogLevel.DEBUG: logging.DEBUG,
    # stdlib logging has nothing below DEBUG.
    ParticipantLogLevel.TRACE: logging.DEBUG,
}
