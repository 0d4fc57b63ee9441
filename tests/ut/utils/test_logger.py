"""日志配置测试"""

from __future__ import annotations

import json
import logging

import pytest

from cargo_update_installed.utils.logger import JSONFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_no_duplicate_handlers(self) -> None:
        setup_logging("INFO")
        setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_unknown_level_falls_back(self) -> None:
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_json_formatter(self) -> None:
        record = logging.LogRecord("pkg", logging.ERROR, __file__, 1, "安装失败 %s", ("bat",), None)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "ERROR"
        assert entry["logger"] == "pkg"
        assert entry["message"] == "安装失败 bat"
