# File: src/mstair/structwalk/base/config.py
"""
Execution context detection for logging output.

Thread-local flags decide whether log output is colored for an interactive
terminal (desktop mode), whether the code runs under a test runner, and
whether logging is silenced entirely (analysis mode).

Exports:
- analysis_mode_context(): context manager for analysis mode.
- in_analysis_mode(): check if analysis mode is active.
- in_test_mode(): check or override whether code is in test mode.
- in_desktop_mode(): check or override whether code is in desktop mode.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


_tls = threading.local()


@dataclass
class TLSAttrs:
    """Thread-local flags for environment context."""

    in_code_analyzer: bool = False
    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


@contextmanager
def analysis_mode_context() -> Iterator[None]:
    """
    Context manager to enable analysis mode temporarily.

    Restores the previous value on exit. Nested contexts are supported.
    """
    tls = _get_tls()
    previous_state = tls.in_code_analyzer
    tls.in_code_analyzer = True
    try:
        yield
    finally:
        tls.in_code_analyzer = previous_state


def in_analysis_mode() -> bool:
    """
    Check if analysis mode is active on this thread.

    :return: True if analysis mode is active, False otherwise.
    """
    return _get_tls().in_code_analyzer


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running in test mode, with optional override.

    Detection order:
      1. Analysis mode check (always False).
      2. Explicit override (thread-local).
      3. Presence of pytest/unittest in sys.modules.
      4. Known environment variables (e.g. PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    if in_analysis_mode():
        return False

    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(
        env.get("PYTEST_CURRENT_TEST")
        or env.get("CI") == "true"
        or env.get("APP_TEST_MODE") == "1"
    )


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if log output should be formatted for an interactive terminal.

    Rules:
      - Explicit override wins.
      - Returns True in test mode.
      - Returns False in analysis mode.
      - Otherwise True when stderr is a TTY.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if desktop mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_desktop_mode_override = None
    if override is not None:
        tls.in_desktop_mode_override = override
        return override
    if tls.in_desktop_mode_override is not None:
        return tls.in_desktop_mode_override

    if in_test_mode():
        return True
    if in_analysis_mode():
        return False
    return bool(sys.stderr and sys.stderr.isatty())


# End of file: src/mstair/structwalk/base/config.py
