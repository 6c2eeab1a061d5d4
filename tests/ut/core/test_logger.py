"""日志配置测试"""

from __future__ import annotations

import io
import json
import logging

import pytest

from tfscm.utils.logger import HANDLER_NAME, JSONFormatter, reset_logging, setup_logging


def _record(msg: str, *args, **attrs) -> logging.LogRecord:
    record = logging.LogRecord("tfscm.x", logging.INFO, __file__, 10, msg, args, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_fields(self):
        data = json.loads(JSONFormatter().format(_record("hello %s", "tf")))
        assert data["level"] == "INFO"
        assert data["logger"] == "tfscm.x"
        assert data["message"] == "hello tf"
        assert "job" not in data
        assert "exception" not in data

    def test_job_extra(self):
        data = json.loads(JSONFormatter().format(_record("检出", job="nightly")))
        assert data["job"] == "nightly"
        assert data["message"] == "检出"


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def _restore_root(self):
        level = logging.getLogger().level
        yield
        reset_logging()
        logging.getLogger().setLevel(level)

    def _ours(self):
        return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]

    def test_replaces_own_handler_only(self):
        foreign = logging.NullHandler()
        root = logging.getLogger()
        root.addHandler(foreign)
        try:
            setup_logging("DEBUG")
            setup_logging("WARNING", json_output=True)
            assert len(self._ours()) == 1
            assert isinstance(self._ours()[0].formatter, JSONFormatter)
            assert foreign in root.handlers
            assert root.level == logging.WARNING
        finally:
            root.removeHandler(foreign)

    def test_writes_to_stream(self):
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)
        logging.getLogger("tfscm.test").info("同步完成")
        assert "同步完成" in stream.getvalue()

    def test_unknown_level_defaults_to_info(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_reset(self):
        setup_logging()
        reset_logging()
        assert self._ours() == []
