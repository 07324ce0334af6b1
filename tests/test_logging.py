# tests/test_logging.py

import json
import logging

from core.logging.context import context, get_context
from core.logging.formatter import ConsoleFormatter, ContextFilter, JSONFormatter
from core.logging.levels import LogLevel, register_levels, to_level
from core.logging.logger import get_logger


def _record(msg="scan-complete found=2", **extra):
    record = logging.LogRecord("practice.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestContext:
    def test_context_is_restored_after_block(self):
        with context(scan_id="abc123"):
            assert get_context()["scan_id"] == "abc123"
            with context(player="Alpha"):
                assert get_context() == {"scan_id": "abc123", "player": "Alpha"}
        assert "scan_id" not in get_context()

    def test_filter_captures_context_at_emit_time(self):
        record = _record()
        with context(scan_id="abc123"):
            ContextFilter().filter(record)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["scan_id"] == "abc123"
        assert payload["message"] == "scan-complete found=2"


class TestFormatters:
    def test_console_appends_key_values(self):
        record = _record(service="practice-scan", context={"scan_id": "abc123"})

        line = ConsoleFormatter(color=False).format(record)

        assert "practice-scan" in line
        assert line.endswith("scan-complete found=2 scan_id=abc123")

    def test_json_includes_service(self):
        payload = json.loads(JSONFormatter().format(_record(service="pool-promoter")))

        assert payload["service"] == "pool-promoter"
        assert payload["level"] == "INFO"


class TestLevels:
    def test_custom_levels(self):
        register_levels()

        assert logging.getLevelName(int(LogLevel.SUCCESS)) == "SUCCESS"
        assert to_level("trace") == 5
        assert to_level("nonsense") == logging.INFO
        assert to_level(None, default=logging.WARNING) == logging.WARNING

    def test_lazy_messages_skip_disabled_levels(self, caplog):
        calls = []
        log = get_logger("practice.lazy", service="test")

        with caplog.at_level(logging.INFO, logger="practice.lazy"):
            log.debug(lambda: calls.append("debug") or "never")
            log.info(lambda: calls.append("info") or "scan-start players=3")

        assert calls == ["info"]
        assert caplog.records[-1].getMessage() == "scan-start players=3"
        assert caplog.records[-1].service == "test"
