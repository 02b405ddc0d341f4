"""
核心模块

提供配置、日志和异常处理等基础功能。
"""

from snowutil.core.config import (
    LogConfig,
    LogLevel,
    SnowflakeSettings,
    load_settings,
)
from snowutil.core.exceptions import (
    InvalidEpochError,
    InvalidPartsError,
    InvalidRadixError,
    InvalidSnowflakeError,
    SnowflakeError,
    UnknownLayoutError,
)
from snowutil.core.logging import get_logger, setup_logging

__all__ = [
    "LogConfig",
    "LogLevel",
    "SnowflakeSettings",
    "load_settings",
    "SnowflakeError",
    "InvalidSnowflakeError",
    "InvalidEpochError",
    "InvalidPartsError",
    "InvalidRadixError",
    "UnknownLayoutError",
    "get_logger",
    "setup_logging",
]
