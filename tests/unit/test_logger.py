"""日志系统单元测试"""

import logging

import pytest
from rich.logging import RichHandler

from nextpager.common import logger as logger_module
from nextpager.common.logger import (
    get_log_level,
    get_logger,
    remove_file_logging,
    setup_file_logging,
)


@pytest.fixture(autouse=True)
def _detach_file_handlers():
    yield
    for handler in list(logger_module._file_handlers):
        remove_file_logging(handler)


class TestGetLogLevel:
    """日志级别测试"""

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("NEXTPAGER_LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.parametrize("value,expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING)])
    def test_from_env(self, monkeypatch, value, expected):
        monkeypatch.delenv("NEXTPAGER_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", value)
        assert get_log_level() == expected

    def test_project_variable_takes_precedence(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("NEXTPAGER_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.delenv("NEXTPAGER_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
        assert get_log_level() == logging.INFO


class TestGetLogger:
    """日志器配置测试"""

    def test_rich_handler_attached_once(self):
        logger = get_logger("nextpager.tests.single")
        get_logger("nextpager.tests.single")

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.propagate is False


class TestFileLogging:
    """文件日志测试"""

    def test_existing_loggers_write_to_file(self, tmp_path):
        logger = get_logger("nextpager.tests.file")
        log_file = tmp_path / "run.log"

        handler = setup_file_logging(str(log_file))
        logger.warning("翻页失败")
        remove_file_logging(handler)

        assert "翻页失败" in log_file.read_text(encoding="utf-8")
        assert handler not in logger.handlers

    def test_loggers_created_later_are_attached(self, tmp_path):
        handler = setup_file_logging(str(tmp_path / "late.log"))

        logger = get_logger("nextpager.tests.late")

        assert handler in logger.handlers

    def test_removed_handler_is_not_reattached(self, tmp_path):
        handler = setup_file_logging(str(tmp_path / "once.log"))
        remove_file_logging(handler)

        assert handler not in get_logger("nextpager.tests.after_remove").handlers
        assert handler not in get_logger("nextpager.locator").handlers
