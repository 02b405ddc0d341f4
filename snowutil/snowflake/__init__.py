"""
雪花ID模块

提供64位雪花ID的编解码、位布局配置和默认序列号计数器。

使用方法：
----------
::

    from snowutil.snowflake import DISCORD_LAYOUT, Snowflake

    flake = Snowflake.from_parts(1420070400000, timestamp=1000, worker_id=3)
    flake.timestamp  # 1420070401000

    discord = DISCORD_LAYOUT.from_parts(worker_id=3, process_id=7)
    discord.worker_id, discord.process_id  # (3, 7)
"""

from snowutil.snowflake.counter import IncrementCounter, default_counter
from snowutil.snowflake.layout import (
    DISCORD_EPOCH,
    DISCORD_LAYOUT,
    GENERIC_LAYOUT,
    LAYOUTS,
    TWITTER_EPOCH,
    TWITTER_LAYOUT,
    SnowflakeLayout,
    get_layout,
)
from snowutil.snowflake.parts import SnowflakeParts
from snowutil.snowflake.snowflake import Snowflake, SnowflakeLike

__all__ = [
    "DISCORD_EPOCH",
    "DISCORD_LAYOUT",
    "GENERIC_LAYOUT",
    "LAYOUTS",
    "TWITTER_EPOCH",
    "TWITTER_LAYOUT",
    "IncrementCounter",
    "Snowflake",
    "SnowflakeLayout",
    "SnowflakeLike",
    "SnowflakeParts",
    "default_counter",
    "get_layout",
]
