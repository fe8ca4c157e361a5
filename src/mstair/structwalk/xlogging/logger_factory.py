# File: src/mstair/structwalk/xlogging/logger_factory.py
"""
Logger factory for creating and configuring CoreLogger instances.

Loggers are created through logging.getLogger() so they take part in the
standard hierarchy (parents, propagation, caplog).
"""

import inspect
import logging
import sys
from pathlib import Path

from mstair.structwalk.xlogging.core_logger import CoreLogger


__all__ = ["create_logger"]


def create_logger(
    name: str | None,
    *,
    level: int | str | None = None,
) -> CoreLogger:
    """
    Return a CoreLogger with a consistent, context-aware name.

    Handles:
    - Normal imports (uses given name)
    - Direct script execution (__main__)
    - Anonymous loggers (uses the caller's module name)
    """
    logger_name: str = name or ""

    if logger_name == "__main__":
        arg0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        logger_name = arg0.stem if arg0 and arg0.exists() else "embedded_main"

    if not logger_name:
        logger_name = _caller_module_name()

    existing = logging.Logger.manager.loggerDict.get(logger_name)
    if isinstance(existing, CoreLogger):
        if level is not None:
            existing.setLevel(level)
        return existing

    logger = _get_core_logger_from_logging(logger_name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the new logger joins
    the logging hierarchy with a proper parent.

    :raises TypeError: If a plain Logger with this name already exists.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CoreLogger:
        logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CoreLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


def _caller_module_name() -> str:
    """Resolve a logger name from the module that called create_logger()."""
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back if frame and frame.f_back else None
        module = inspect.getmodule(caller) if caller else None
        if module and module.__name__ and module.__name__ != "__main__":
            return module.__name__
    finally:
        del frame
    executable = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return Path(executable).stem


# End of file: src/mstair/structwalk/xlogging/logger_factory.py
