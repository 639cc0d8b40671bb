"""Levelled console logging with an optional copy of everything to a file."""

from __future__ import annotations

import enum
import sys
from typing import IO, Any, Optional

RESET = "\033[0m"


class LogLevel(enum.IntEnum):
    """Verbosity levels; a stream prints when the logger level is at least its own."""

    OFF = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5


_PREFIXES = {
    LogLevel.FATAL: "\033[31mFatal : ",
    LogLevel.ERROR: "\033[31mError : ",
    LogLevel.WARNING: "\033[33mWarning : ",
    LogLevel.INFO: " \033[0m",
    LogLevel.DEBUG: "Debug : \033[0m",
}


def _format(item: Any) -> str:
    """Render an item the way a default-configured text stream would."""
    if isinstance(item, bool):
        return "1" if item else "0"
    if isinstance(item, float):
        return f"{item:g}"
    return str(item)


class Logger:
    """Sink that writes to standard output and, optionally, to a log file."""

    def __init__(self, level: LogLevel | int = LogLevel.OFF) -> None:
        self.level = LogLevel(level)
        self._file: Optional[IO[str]] = None
        self._filename: Optional[str] = None

    def set_level(self, level: LogLevel | int) -> None:
        self.level = LogLevel(level)

    @property
    def output_file(self) -> Optional[str]:
        """Name of the file currently receiving a copy of the output, if any."""
        return self._filename

    def set_output(self, filename) -> None:
        """Start copying all output to ``filename``, replacing any previous file."""
        self.unset_output()
        self._file = open(filename, "w", encoding="utf-8")
        self._filename = str(filename)

    def unset_output(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._filename = None

    def write(self, item: Any) -> "Logger":
        text = _format(item)
        sys.stdout.write(text)
        if self._file is not None:
            self._file.write(text)
        return self

    def flush(self) -> None:
        sys.stdout.flush()
        if self._file is not None:
            self._file.flush()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unset_output()


class LogStream:
    """A line-oriented stream bound to a logger at a fixed level."""

    def __init__(self, logger: Logger, level: LogLevel | int) -> None:
        self.logger = logger
        self.level = LogLevel(level)
        self.prefix = _PREFIXES.get(self.level, RESET)
        self.postfix = RESET
        self._newline = True

    @property
    def enabled(self) -> bool:
        return self.logger.level >= self.level

    def write(self, *args: Any) -> "LogStream":
        """Append items to the current line, starting it with the level prefix."""
        if not self.enabled:
            return self
        for item in args:
            if self._newline:
                self.logger.write(self.prefix)
                self._newline = False
            self.logger.write(item)
        return self

    def endline(self) -> "LogStream":
        """Terminate the current line and reset the terminal colour."""
        if self.enabled:
            self.logger.write("\n")
            self.logger.flush()
            self.logger.write(self.postfix)
            self._newline = True
        return self

    def line(self, *args: Any) -> "LogStream":
        """Write a complete line."""
        return self.write(*args).endline()

    def printf(self, fmt: str, *args: Any) -> "LogStream":
        """Write a printf-style formatted line; embedded newlines are dropped."""
        text = fmt % args if args else fmt
        self.write(text.replace("\n", ""))
        return self.endline()


the_logger = Logger()
flog = LogStream(the_logger, LogLevel.FATAL)
elog = LogStream(the_logger, LogLevel.ERROR)
wlog = LogStream(the_logger, LogLevel.WARNING)
ilog = LogStream(the_logger, LogLevel.INFO)
dlog = LogStream(the_logger, LogLevel.DEBUG)