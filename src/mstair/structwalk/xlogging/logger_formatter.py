# File: src/mstair/structwalk/xlogging/logger_formatter.py

import logging
import os
import re
import sys
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Literal

import pytz
from colorama import Fore

import mstair.structwalk.base.config as cfg
from mstair.structwalk.xlogging.logger_constants import K_COLOR, K_KLASS_NAME


__all__ = ["CoreFormatter", "get_color_code", "rgb_code"]


FormatStyle = Literal["%", "{", "$"]
"""Format string style accepted by `CoreFormatter` (and `logging.Formatter`)."""

DEFAULT_TIMEZONE = "US/Eastern"


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to ANSI escape code for terminal color output.

    :param r: Red component (0-255)
    :param g: Green component (0-255)
    :param b: Blue component (0-255)
    :return str: ANSI escape code for the specified RGB color.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


RGB_CALLER_0 = rgb_code(3 << 4, 12 << 4, 10 << 4)
RGB_CALLER_1 = rgb_code(4 << 4, 8 << 4, 10 << 4)
COLOR_MAP: dict[str | None, str] = {
    "fileAndLine": RGB_CALLER_1,
    "klassAndMethod": RGB_CALLER_0,
    "TRACE": rgb_code(96, 0, 64),
    "DEBUG": rgb_code(0, 0, 0),
    "INFO": rgb_code(184, 184, 216),
    "WARNING": rgb_code(192, 176, 0),
    "ERROR": rgb_code(224, 128, 0),
    "CRITICAL": rgb_code(255, 64, 64),
    "SUPPRESS": rgb_code(0, 0, 128),
    None: Fore.RESET,
}


def get_color_code(key: str | None = None) -> str:
    """Return the ANSI color for a record field or level name, or "" outside desktop mode."""
    if not cfg.in_desktop_mode():
        return ""
    if key in {"", "RESET"} or key is None:
        return Fore.RESET
    if key in COLOR_MAP:
        return COLOR_MAP[key]
    if key.startswith("#") and len(key) == 7:
        return rgb_code(*[int(key[i : i + 2], 16) for i in (1, 3, 5)])
    return getattr(Fore, key.upper(), Fore.RESET)


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger that adds file and line information,
    class and method names, and color-coded log levels.

    Extra record fields available to format strings:
    `fileAndLine`, `klassAndMethod`, `levelName`.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        defaults: dict[str, Any] | None = None,
        timezone: str | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate, defaults=defaults)
        self.tz = pytz.timezone(timezone or os.environ.get("LOG_TZ", DEFAULT_TIMEZONE))

    def format(self, record: logging.LogRecord) -> str:
        record.fileAndLine = self.format_fileAndLine(record.pathname, record.lineno)
        record.klassAndMethod = self.format_klassAndMethod(record)
        record.levelName = get_color_code(record.levelname) + record.levelname + get_color_code()

        try:
            message_str = super().format(record)
        except Exception as exc:
            message_str = format_logging_error(record, exc)
        color_key = getattr(record, K_COLOR, record.levelname)
        message_str = get_color_code(color_key) + message_str + get_color_code()
        return self.message_filter(message_str)

    @staticmethod
    def format_file(file: str) -> str:
        """Format the file path relative to the working directory when possible."""
        if not file:
            return "<unknown file>"
        path = Path(file)
        try:
            return path.resolve().relative_to(Path.cwd()).as_posix()
        except (OSError, ValueError):
            return path.as_posix()

    def format_fileAndLine(self, file: str, lineno: int) -> str:
        fileAndLine = f"{self.format_file(file)}:{lineno}"
        return get_color_code("fileAndLine") + fileAndLine + get_color_code()

    @staticmethod
    def format_klassAndMethod(record: logging.LogRecord) -> str:
        klass_name: str = getattr(record, K_KLASS_NAME, "")
        if not klass_name:
            klassAndMethod = (
                record.funcName if record.funcName == "<module>" else f"{record.funcName}()"
            )
        elif record.funcName == "__init__":
            klassAndMethod = f"{klass_name}()"
        else:
            klassAndMethod = f"{klass_name}.{record.funcName}()"
        return get_color_code("klassAndMethod") + klassAndMethod + get_color_code()

    def formatException(
        self,
        ei: (
            tuple[type[BaseException], BaseException, TracebackType | None]
            | tuple[None, None, None]
        ),
    ) -> str:
        return self.message_filter(super().formatException(ei))

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        _datetime = datetime.fromtimestamp(record.created, self.tz)
        _result = ""
        if datefmt:
            try:
                _result = _datetime.strftime(datefmt.replace("%-", "%"))
                _result = _result.replace("AM", "am").replace("PM", "pm").lstrip("0")
            except ValueError as e:
                print(f"Invalid LOG_DATEFMT {datefmt!r}: {e}", file=sys.stderr)
        return _result or _datetime.isoformat()

    def message_filter(self, message: str, excludes: list[str] | None = None) -> str:
        """
        Drop traceback frames from virtualenvs and frozen modules and shorten the rest.

        :param message: The formatted message, possibly containing a traceback.
        :param excludes: Regex patterns for frame paths to drop.
        :return: The filtered message.
        """
        excludes = excludes or [r"[/\\]\.venv", r"[/\\]site-packages", "<frozen"]
        filtered_lines: list[str] = []
        skip_indent_lines = False

        for line in message.splitlines():
            if skip_indent_lines and line.startswith("    "):
                continue
            skip_indent_lines = False

            match = re.search(r'^  File "([^"]+)", line (\d+), in (.*?)$', line)
            if match and any(re.search(ex, match.group(1)) for ex in excludes):
                skip_indent_lines = True
                continue
            if match:
                fileAndLine = self.format_fileAndLine(match.group(1), int(match.group(2)))
                filtered_lines.append(f"  {fileAndLine} {match.group(3)}()")
            else:
                filtered_lines.append(line)

        return "\n".join(filtered_lines)


def format_logging_error(record: logging.LogRecord, exc: Exception) -> str:
    """
    Generate a formatted error message when log record formatting fails.

    :param record: The LogRecord that failed to format
    :param exc: The exception that occurred during formatting
    :return: Formatted error message string
    """
    posix_path = Path(getattr(record, "pathname", "<unknown>")).as_posix()
    message_lines = [
        "Internal error: Failed to format log record",
        f"{posix_path}:{getattr(record, 'lineno', '?')}",
        f"{type(exc).__name__}: {exc}",
        f"record.msg: {getattr(record, 'msg', None)!r}",
        f"record.args: {getattr(record, 'args', None)!r}",
    ]
    return "\n>> " + "\n>> ".join(message_lines) + "\n"


# End of file: src/mstair/structwalk/xlogging/logger_formatter.py
