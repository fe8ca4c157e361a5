# File: src/mstair/structwalk/xlogging/test_core_logger.py
"""
Tests for CoreLogger behavior vs root level, records and formatting.

Confirms that:
- Setting LOG_LEVELS (e.g., TRACE) does not lower the root logger level.
- CoreLogger raises its level to at least the root's effective level.
- Records carry the caller's function and class, scoped prefixes and extras.
- CoreFormatter renders the custom record fields.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator

import pytest

from mstair.structwalk.base import config as cfg
from mstair.structwalk.xlogging import logger_util as lu
from mstair.structwalk.xlogging.core_logger import CoreLogger, initialize_root
from mstair.structwalk.xlogging.logger_constants import K_KLASS_NAME, TRACE
from mstair.structwalk.xlogging.logger_factory import create_logger
from mstair.structwalk.xlogging.logger_formatter import CoreFormatter


_ROOT_ATTR = "_structwalk_corelogger_initialized"


# ---------- Fixtures ----------


@pytest.fixture(autouse=False)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear LOG_LEVEL* vars and reset singleton; do not read .env during tests."""
    monkeypatch.setattr(lu, "load_dotenv", lambda *a, **k: False)

    for k in [k for k in os.environ if k.startswith("LOG_LEVEL")]:
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setattr(lu, "_log_level_config_instance", None, raising=False)

    yield


@pytest.fixture(autouse=False)
def clean_logging() -> Iterator[None]:
    """Reset root logger state (handlers, level, init flag) around tests."""
    root = logging.getLogger()
    prev_level = root.level
    prev_handlers = list(root.handlers)
    prev_attr = getattr(root, _ROOT_ATTR, None)

    root.handlers = []
    root.setLevel(logging.WARNING)
    if hasattr(root, _ROOT_ATTR):
        delattr(root, _ROOT_ATTR)

    yield

    root.handlers = prev_handlers
    root.setLevel(prev_level)
    if prev_attr is not None:
        setattr(root, _ROOT_ATTR, prev_attr)
    elif hasattr(root, _ROOT_ATTR):
        delattr(root, _ROOT_ATTR)


# ---------- Levels ----------


@pytest.mark.unit
def test_env_trace_does_not_lower_root_or_logger(
    clean_env: None, clean_logging: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    """LOG_LEVELS=TRACE alone does not reduce root level or logger level below WARNING."""
    root = logging.getLogger()
    assert root.getEffectiveLevel() == logging.WARNING

    monkeypatch.setenv("LOG_LEVELS", "pkg.*:TRACE")
    log = CoreLogger("pkg.module")

    assert root.getEffectiveLevel() == logging.WARNING
    assert log.level == logging.WARNING
    assert not log.isEnabledFor(logging.DEBUG)


@pytest.mark.unit
def test_root_level_is_logger_floor(
    clean_env: None, clean_logging: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Setting root level controls logger floor; loggers track that floor."""
    monkeypatch.setenv("LOG_LEVELS", "pkg.*:TRACE")
    logging.getLogger().setLevel(logging.DEBUG)

    log = CoreLogger("pkg.module")
    assert log.level == logging.DEBUG
    assert log.isEnabledFor(logging.DEBUG)
    assert not log.isEnabledFor(TRACE)


@pytest.mark.unit
def test_initialize_root_is_idempotent(clean_env: None, clean_logging: None) -> None:
    initialize_root(level="INFO")
    initialize_root(level="DEBUG")
    root = logging.getLogger()
    stderr_handlers = [
        h for h in root.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]
    assert len(stderr_handlers) == 1
    assert isinstance(stderr_handlers[0].formatter, CoreFormatter)
    assert root.level == logging.INFO


@pytest.mark.unit
def test_initialize_root_force(clean_env: None, clean_logging: None) -> None:
    initialize_root(level="INFO")
    initialize_root(level="ERROR", force=True)
    assert logging.getLogger().level == logging.ERROR


# ---------- Records ----------


@pytest.mark.unit
class TestRecords:
    def test_caller_function_and_class(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.caller", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            log.debug("hello %s", "world")
        record = caplog.records[-1]
        assert record.getMessage() == "hello world"
        assert record.funcName == "test_caller_function_and_class"
        assert getattr(record, K_KLASS_NAME) == "TestRecords"

    def test_trace_level(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.trace", level=TRACE)
        with caplog.at_level(TRACE, logger=log.name):
            log.trace("deep detail")
        assert caplog.records[-1].levelname == "TRACE"

    def test_prefix_with_nests(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.prefix", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            with log.prefix_with("[walk]"):
                with log.prefix_with("[list]"):
                    log.debug("inner")
                log.debug("outer")
            log.debug("none")
        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["[walk] > [list] > inner", "[walk] > outer", "none"]

    def test_extra_keywords_move_to_record(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.extra", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            log.debug("colored", color="RED")
        assert getattr(caplog.records[-1], "color") == "RED"

    def test_forbidden_keyword_rejected(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.forbidden", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            with pytest.raises(ValueError, match="lineno"):
                log.debug("bad", lineno=3)

    def test_non_primitive_args_are_bounded(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.args", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            log.debug("value %s", {"a": 1})
            log.debug("big %s", list(range(1000)))
        assert caplog.records[-2].getMessage() == "value {'a': 1}"
        assert caplog.records[-1].getMessage().endswith("...]")

    def test_analysis_mode_silences(self, caplog: pytest.LogCaptureFixture) -> None:
        log = create_logger("mstair.structwalk.test.analysis", level=logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger=log.name):
            with cfg.analysis_mode_context():
                log.warning("hidden")
        assert caplog.records == []


# ---------- Formatter ----------


@pytest.fixture
def plain_output() -> Iterator[None]:
    cfg.in_desktop_mode(override=False)
    yield
    cfg.in_desktop_mode(unset_override=True)


@pytest.mark.unit
def test_formatter_fields(plain_output: None) -> None:
    formatter = CoreFormatter("%(levelName)s %(klassAndMethod)s %(message)s", timezone="UTC")
    record = logging.LogRecord("n", logging.WARNING, __file__, 10, "hello %s", ("x",), None, "fn")
    assert formatter.format(record) == "WARNING fn() hello x"

    setattr(record, K_KLASS_NAME, "Walker")
    assert formatter.format(record) == "WARNING Walker.fn() hello x"


@pytest.mark.unit
def test_formatter_file_and_line(plain_output: None) -> None:
    formatter = CoreFormatter("%(fileAndLine)s", timezone="UTC")
    record = logging.LogRecord("n", logging.INFO, __file__, 42, "m", (), None)
    assert formatter.format(record).endswith("test_core_logger.py:42")


@pytest.mark.unit
def test_formatter_reports_bad_records(plain_output: None) -> None:
    formatter = CoreFormatter("%(message)s", timezone="UTC")
    record = logging.LogRecord("n", logging.INFO, __file__, 7, "%d items", ("many",), None)
    output = formatter.format(record)
    assert "Internal error: Failed to format log record" in output
    assert "record.args: ('many',)" in output


@pytest.mark.unit
def test_message_filter_drops_site_packages_frames(plain_output: None) -> None:
    formatter = CoreFormatter("%(message)s", timezone="UTC")
    message = "\n".join(
        [
            "Traceback (most recent call last):",
            '  File "/venv/lib/site-packages/lib.py", line 3, in helper',
            "    helper()",
            '  File "/work/app.py", line 9, in main',
            "    main()",
            "ValueError: bad",
        ]
    )
    filtered = formatter.message_filter(message)
    assert "site-packages" not in filtered
    assert "app.py:9 main()" in filtered
    assert filtered.endswith("ValueError: bad")


# End of file: src/mstair/structwalk/xlogging/test_core_logger.py
