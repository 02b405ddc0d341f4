"""
雪花ID编解码库

提供64位雪花ID的构造与解码，ID由相对纪元的时间戳、工作机器ID和序列号组成。

主要功能：
----------
* 从原始值或组成部分构造雪花ID
* 通用布局、Discord布局（拆分进程ID）和Twitter布局
* 线程安全的默认序列号计数器
* 基于loguru的日志、基于pydantic-settings的配置
* 命令行解码与生成工具

使用方法：
----------
::

    from snowutil import TWITTER_LAYOUT, Snowflake

    flake = Snowflake.from_raw(1288834974657, "1382350606914797568")
    flake.timestamp, flake.worker_id, flake.increment

    TWITTER_LAYOUT.from_parts(timestamp=0).timestamp  # 1288834974657
"""

import importlib.util

if importlib.util.find_spec("snowutil._version") is not None:
    from ._version import __version__  # type: ignore
else:
    __version__ = "0.0.0.dev0"

from snowutil.core.exceptions import (
    InvalidEpochError,
    InvalidPartsError,
    InvalidRadixError,
    InvalidSnowflakeError,
    SnowflakeError,
    UnknownLayoutError,
)
from snowutil.snowflake import (
    DISCORD_EPOCH,
    DISCORD_LAYOUT,
    GENERIC_LAYOUT,
    TWITTER_EPOCH,
    TWITTER_LAYOUT,
    IncrementCounter,
    Snowflake,
    SnowflakeLayout,
    SnowflakeParts,
    default_counter,
    get_layout,
)

__all__ = [
    "__version__",
    "DISCORD_EPOCH",
    "DISCORD_LAYOUT",
    "GENERIC_LAYOUT",
    "TWITTER_EPOCH",
    "TWITTER_LAYOUT",
    "IncrementCounter",
    "Snowflake",
    "SnowflakeLayout",
    "SnowflakeParts",
    "default_counter",
    "get_layout",
    "SnowflakeError",
    "InvalidSnowflakeError",
    "InvalidEpochError",
    "InvalidPartsError",
    "InvalidRadixError",
    "UnknownLayoutError",
]
