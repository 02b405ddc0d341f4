"""
时间处理模块

提供纪元时间与毫秒时间戳之间的转换、日期时间格式化和解析功能，以及JSON时间编码器。
"""

import datetime
import json
from typing import Any, Optional, Union

from snowutil.core.exceptions import InvalidEpochError

EpochLike = Union[int, float, str, datetime.datetime, datetime.date]

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_ONE_MILLISECOND = datetime.timedelta(milliseconds=1)


class JSONTimeEncoder(json.JSONEncoder):
    """
    JSON时间编码器

    扩展JSON编码器，支持datetime和date类型的序列化。
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date)):
            return format_datetime(obj)
        return super().default(obj)


def format_datetime(
    dt: Union[datetime.datetime, datetime.date],
    format_str: Optional[str] = None,
) -> str:
    """
    格式化日期时间

    Args:
        dt: 日期时间对象
        format_str: 格式化字符串，默认为ISO 8601格式

    Returns:
        str: 格式化后的字符串
    """
    if format_str:
        return dt.strftime(format_str)

    if isinstance(dt, (datetime.datetime, datetime.date)):
        return dt.isoformat()
    raise TypeError(f"不支持的类型: {type(dt)}")


def parse_datetime(
    dt_str: str,
    format_str: Optional[str] = None,
) -> datetime.datetime:
    """
    解析日期时间字符串

    Args:
        dt_str: 日期时间字符串
        format_str: 格式化字符串，如果为None则尝试自动解析

    Returns:
        datetime.datetime: 解析后的日期时间对象

    Raises:
        ValueError: 无法解析时抛出
    """
    if format_str:
        return datetime.datetime.strptime(dt_str, format_str)

    try:
        return datetime.datetime.fromisoformat(dt_str)
    except ValueError:
        pass

    formats = [
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d",
        "%Y/%m/%d %H:%M:%S",
        "%Y/%m/%d %H:%M",
        "%Y/%m/%d",
    ]
    for fmt in formats:
        try:
            return datetime.datetime.strptime(dt_str, fmt)
        except ValueError:
            continue
    raise ValueError(f"无法解析日期时间字符串: {dt_str}")


def datetime_to_millis(dt: Union[datetime.datetime, datetime.date]) -> int:
    """
    将日期时间转换为Unix毫秒时间戳

    不带时区的日期时间按UTC处理，日期按UTC零点处理。

    Args:
        dt: 日期时间或日期对象

    Returns:
        int: 毫秒时间戳
    """
    if not isinstance(dt, datetime.datetime):
        dt = datetime.datetime(dt.year, dt.month, dt.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return (dt - UNIX_EPOCH) // _ONE_MILLISECOND


def millis_to_datetime(millis: int) -> datetime.datetime:
    """
    将Unix毫秒时间戳转换为UTC日期时间

    Args:
        millis: 毫秒时间戳

    Returns:
        datetime.datetime: 带UTC时区的日期时间
    """
    return UNIX_EPOCH + datetime.timedelta(milliseconds=millis)


def to_epoch_millis(epoch: EpochLike) -> int:
    """
    将纪元时间规范化为毫秒整数

    Args:
        epoch: 毫秒整数、整数值浮点数、数字字符串、日期字符串、datetime或date

    Returns:
        int: 毫秒时间戳

    Raises:
        InvalidEpochError: 无法转换时抛出
    """
    if isinstance(epoch, bool):
        raise InvalidEpochError(details={"epoch": epoch})

    if isinstance(epoch, int):
        return epoch

    if isinstance(epoch, float):
        if not epoch.is_integer():
            raise InvalidEpochError(
                f"纪元时间必须是整数毫秒: {epoch}", details={"epoch": epoch}
            )
        return int(epoch)

    if isinstance(epoch, (datetime.datetime, datetime.date)):
        return datetime_to_millis(epoch)

    if isinstance(epoch, str):
        text = epoch.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return datetime_to_millis(parse_datetime(text))
        except ValueError as e:
            raise InvalidEpochError(
                f"无法解析纪元时间: {epoch!r}", details={"epoch": epoch}
            ) from e

    raise InvalidEpochError(
        f"不支持的纪元时间类型: {type(epoch).__name__}",
        details={"epoch": repr(epoch)},
    )


def json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    使用时间编码器将对象序列化为JSON字符串

    Args:
        obj: 要序列化的对象
        **kwargs: 传递给json.dumps的其他参数

    Returns:
        str: JSON字符串
    """
    return json.dumps(obj, cls=JSONTimeEncoder, **kwargs)
