"""Pluggable logging with a stream back end."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Optional, TextIO

_MESSAGE_LIMIT = 127


class LoggingLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    ERROR = 2
    ESP_DEBUG = 3
    ESP_INFO = 4
    ESP_ERROR = 5

    @property
    def prefix(self) -> str:
        return ("D", "I", "E", "WD", "WI", "WE")[self]


def _format(fmt: str, args: tuple) -> str:
    return (fmt % args if args else fmt)[:_MESSAGE_LIMIT]


class Logger(ABC):
    @abstractmethod
    def log(self, level: LoggingLevel, filename: str, lineno: int, fmt: str, *args) -> None:
        """Emit one record."""


class StreamLogger(Logger):
    """Writes records as 'PREFIX file:line message' lines to a text stream."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def log(self, level, filename, lineno, fmt, *args) -> None:
        slash = filename.rfind("/")
        if slash > 0:
            filename = filename[slash + 1 :]
        level = LoggingLevel(level)
        self._stream.write(f"{level.prefix} {filename}:{lineno} {_format(fmt, args)}\r\n")


class LogDispatcher:
    """Forwards records to the configured logger, dropping them when none is set."""

    def __init__(self) -> None:
        self._logger: Optional[Logger] = None

    def set_logger(self, logger: Optional[Logger]) -> None:
        self._logger = logger

    def log(self, level, filename, lineno, fmt, *args) -> None:
        if self._logger is not None:
            self._logger.log(level, filename, lineno, fmt, *args)