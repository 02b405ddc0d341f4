import logging

import pytest
from loguru import logger

from snowutil.core.config import LogConfig, LogLevel
from snowutil.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """测试结束后移除日志输出，关闭日志文件"""
    yield
    logger.remove()


# 测试用例
def test_file_sink(tmp_path):
    """测试日志写入文件，目录不存在时自动创建"""
    log_file = tmp_path / "logs" / "snow.log"
    setup_logging(LogConfig(level=LogLevel.DEBUG, file_path=str(log_file)))

    get_logger("snowutil.test").info("写入日志文件")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "写入日志文件" in content
    assert "日志系统已初始化" in content


def test_file_sink_respects_level(tmp_path):
    """测试低于配置级别的日志不写入文件"""
    log_file = tmp_path / "snow.log"
    setup_logging(LogConfig(level=LogLevel.ERROR, file_path=str(log_file)))

    logger.info("不应写入")
    logger.error("应当写入")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "应当写入" in content
    assert "不应写入" not in content


def test_stdlib_logging_intercepted(tmp_path):
    """测试标准库日志转发给loguru"""
    log_file = tmp_path / "snow.log"
    setup_logging(LogConfig(level=LogLevel.INFO, file_path=str(log_file)))

    logging.getLogger("snowutil.core.config").info("来自标准库的日志")
    logger.remove()

    assert "来自标准库的日志" in log_file.read_text(encoding="utf-8")
