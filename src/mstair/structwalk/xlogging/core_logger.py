# File: src/mstair/structwalk/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from mstair.structwalk.xlogging.logger_factory import create_logger
    >>> LOG = create_logger(__name__)
    >>> with LOG.prefix_with("[walk]"):
    ...     LOG.trace("segment %r not found", "foo")

Features:
- Custom levels: TRACE, SUPPRESS
- Caller class name recorded for the formatter
- Context-local prefix manager
- Safe rendering of non-primitive args

Design:
- Only the root logger owns handlers/formatters; CoreLogger instances propagate.
- Log levels are controlled per-logger (via environment and LogLevelConfig).
- initialize_root() is the only supported entry point for root setup.
"""

from __future__ import annotations

import contextvars
import logging
import os
import re
import reprlib
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any, ClassVar, TextIO

from mstair.structwalk.base import config as cfg
from mstair.structwalk.base.types import PRIMITIVE_TYPES
from mstair.structwalk.xlogging.logger_constants import (
    K_KLASS_NAME,
    TRACE,
    initialize_logger_constants,
)
from mstair.structwalk.xlogging.logger_formatter import CoreFormatter
from mstair.structwalk.xlogging.logger_util import LogLevelConfig


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_KWARGS_FORBIDDEN: set[str] = {"filename", "lineno", "msg", "args", "levelname", "levelno"}
_LOG_KWARGS_STANDARD: set[str] = {"exc_info", "stack_info", "stacklevel", "extra"}
_LOG_ROOT_ATTR_NAME = "_structwalk_corelogger_initialized"

_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")

_arg_repr = reprlib.Repr()
_arg_repr.maxstring = 120
_arg_repr.maxother = 120


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - Custom levels: TRACE, SUPPRESS.
    - Caller class name on every record (for `klassAndMethod`).
    - Bounded rendering of non-primitive args.
    - Prefix context manager for scoped message prefixes.
    """

    _INTERNAL_FRAME_OFFSET: ClassVar[int] = 2  # log() method + wrapper method (debug/info/etc)

    def __init__(
        self,
        name: str,
        level: int | str = logging.NOTSET,
    ) -> None:
        """
        Initialize the CoreLogger with a name and log level.

        An unset level is resolved from the environment through LogLevelConfig,
        and never drops below the root logger's effective level.
        """
        initialize_logger_constants()
        if level in {logging.NOTSET, "NOTSET", ""}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

        root_level = logging.getLogger().getEffectiveLevel()
        if self.level < root_level:
            self.setLevel(root_level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, msg: object, *args: Any, **kwargs: Any) -> None:
        """
        Emit a log record with caller context, preserving all handler/filter logic.

        Non-standard keyword arguments are moved into `extra`.
        """
        initialize_root()
        if cfg.in_analysis_mode() or not self.isEnabledFor(level):
            return

        _validate_and_move_kwargs_to_extra(kwargs)
        stacklevel: int = kwargs.pop("stacklevel", 1) + self._INTERNAL_FRAME_OFFSET
        extra: dict[str, Any] = kwargs.pop("extra", None) or {}
        if klass_name := _caller_class_name(stacklevel):
            extra.setdefault(K_KLASS_NAME, klass_name)

        if prefix := _log_prefix.get():
            msg = f"{prefix}{msg}"

        super().log(
            level,
            msg,
            *_normalize_unsupported_args(args),
            stacklevel=stacklevel,
            extra=extra,
            **kwargs,
        )

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        self.log(TRACE, msg, *args, **kwargs)

    def debug(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at CRITICAL level with a stack trace."""
        kwargs.setdefault("stack_info", True)
        self.log(logging.CRITICAL, msg, *args, **kwargs)

    def exception(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at ERROR level with exception info."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, msg, *args, **kwargs)

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Prefix all log messages emitted within the current context.

        Nested contexts stack their prefixes. Uses contextvars, so the prefix
        never leaks across threads or tasks.
        """
        current_prefix = _log_prefix.get()
        token = _log_prefix.set(f"{current_prefix}{prefix} > ")
        try:
            yield
        finally:
            _log_prefix.reset(token)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - If `force=True`, removes and recreates the stderr handler.
    - Sets root level to `level` if provided, otherwise WARNING if NOTSET.
    - Does not modify non-stderr handlers owned by the host application.

    Env overrides: LOG_FORMAT supplies the format string, LOG_DATEFMT the date
    format; a date format without '%' tokens drops the timestamp.

    :param fmt: Format string.
    :param datefmt: Date format.
    :param level: Root logger level (int or name).
    :param force: Reinitialize even if already initialized.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)

    initialize_logger_constants()

    if force:
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is sys.stderr)
        ]

    fmt = fmt or os.environ.get(
        "LOG_FORMAT",
        r"%(levelName)s %(asctime)s %(fileAndLine)s %(klassAndMethod)s %(message)s",
    )
    datefmt = os.environ.get("LOG_DATEFMT", "%-I:%M%p") if datefmt is None else datefmt
    if "%" not in datefmt:
        fmt = re.sub(r"\s*%\(asctime\)s\s*", " ", fmt)
        datefmt = None

    stderr_handlers: list[logging.StreamHandler[TextIO]] = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    if not stderr_handlers:
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)
    elif not any(isinstance(h.formatter, CoreFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(CoreFormatter(fmt, datefmt))

    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.level == logging.NOTSET:
        root.setLevel(logging.WARNING)


def _caller_class_name(stacklevel: int) -> str:
    """Return the class name of `self`/`cls` in the caller frame, or ""."""
    frame: FrameType | None = sys._getframe(1)  # CoreLogger.log()
    try:
        for _ in range(stacklevel - 1):
            if frame is None:
                return ""
            frame = frame.f_back
        if frame is None:
            return ""
        if (zelf := frame.f_locals.get("self")) is not None:
            return type(zelf).__name__
        if isinstance(cls_obj := frame.f_locals.get("cls"), type):
            return cls_obj.__name__
        return ""
    finally:
        del frame


def _validate_and_move_kwargs_to_extra(kwargs: dict[str, Any]) -> None:
    """
    Validate and mutate kwargs by moving non-standard keys into the extra dict.

    :raises ValueError: If any forbidden keys are found in kwargs.
    """
    for _key, _value in list(kwargs.items()):
        if _key in _LOG_KWARGS_FORBIDDEN:
            raise ValueError(f"Invalid keyword argument '{_key}={_value!r}'")
        if _key not in _LOG_KWARGS_STANDARD:
            kwargs.pop(_key)
            kwargs.setdefault("extra", {})[_key] = _value


def _normalize_unsupported_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    """Render non-primitive args with a bounded repr so huge graphs never flood the log."""
    arg_list: list[Any] = []
    for arg in args:
        if isinstance(arg, PRIMITIVE_TYPES):
            arg_list.append(arg)
            continue
        try:
            arg_list.append(_arg_repr.repr(arg))
        except Exception as e:
            arg_list.append(f"<unrepresentable: {type(arg).__name__}: {e}>")
    return tuple(arg_list)


# End of file: src/mstair/structwalk/xlogging/core_logger.py
