"""
工具模块

提供纪元时间转换、日期时间格式化和JSON序列化等实用函数。
"""

from snowutil.utils.time import (
    EpochLike,
    JSONTimeEncoder,
    datetime_to_millis,
    format_datetime,
    json_dumps,
    millis_to_datetime,
    parse_datetime,
    to_epoch_millis,
)

__all__ = [
    "EpochLike",
    "JSONTimeEncoder",
    "datetime_to_millis",
    "format_datetime",
    "json_dumps",
    "millis_to_datetime",
    "parse_datetime",
    "to_epoch_millis",
]
