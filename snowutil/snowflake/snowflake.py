"""
雪花ID值类型

提供64位雪花ID的构造（从原始值或从组成部分）与解码。
"""

import datetime
import functools
from typing import Any, Dict, Optional, Union

from snowutil.core.exceptions import InvalidRadixError, InvalidSnowflakeError
from snowutil.snowflake.counter import IncrementCounter, default_counter
from snowutil.snowflake.layout import (
    GENERIC_LAYOUT,
    INCREMENT_MASK,
    TIMESTAMP_SHIFT,
    UINT64_MASK,
    WORKER_ID_SHIFT,
    SnowflakeLayout,
)
from snowutil.snowflake.parts import PartsLike, coerce_parts
from snowutil.utils.time import EpochLike, millis_to_datetime

SnowflakeLike = Union[int, float, str]

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def parse_raw(raw: SnowflakeLike) -> int:
    """
    将原始值解析为整数

    支持整数、整数值浮点数，以及十进制或带 ``0x``/``0o``/``0b`` 前缀的数字字符串。

    Raises:
        InvalidSnowflakeError: 无法解析时抛出
    """
    if isinstance(raw, bool):
        raise InvalidSnowflakeError(details={"raw": raw})

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidSnowflakeError(
                f"雪花ID必须是整数: {raw}", details={"raw": raw}
            )
        return int(raw)

    if isinstance(raw, str):
        text = raw.strip()
        if text and "_" not in text:
            try:
                return int(text, 10)
            except ValueError:
                pass
            try:
                return int(text, 0)
            except ValueError:
                pass
        raise InvalidSnowflakeError(
            f"无法解析雪花ID: {raw!r}", details={"raw": raw}
        )

    raise InvalidSnowflakeError(
        f"不支持的雪花ID类型: {type(raw).__name__}", details={"raw": repr(raw)}
    )


def int_to_base(value: int, radix: int = 10) -> str:
    """
    按指定进制将整数转换为字符串，使用小写字母表示大于9的数字

    Args:
        value: 整数
        radix: 进制（2-36）

    Returns:
        str: 字符串表示

    Raises:
        InvalidRadixError: 进制超出范围
    """
    if isinstance(radix, bool) or not isinstance(radix, int) or not 2 <= radix <= 36:
        raise InvalidRadixError(details={"radix": radix})

    if radix == 10:
        return str(value)

    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, remainder = divmod(value, radix)
        digits.append(_DIGITS[remainder])
    return sign + "".join(reversed(digits))


@functools.total_ordering
class Snowflake:
    """
    雪花ID

    不可变的值类型，内部保存打包后的64位无符号整数、纪元以及解码所用的布局。
    时间戳、工作机器ID和序列号均在读取时从打包值中计算。

    构造时所有值都会被截断到64位，负数按二进制补码解释，不会抛出异常。
    """

    __slots__ = ("_inner", "_epoch", "_layout")

    def __init__(
        self,
        inner: int,
        epoch: int,
        layout: SnowflakeLayout = GENERIC_LAYOUT,
    ):
        object.__setattr__(self, "_inner", inner & UINT64_MASK)
        object.__setattr__(self, "_epoch", epoch)
        object.__setattr__(self, "_layout", layout)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} 是不可变对象")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} 是不可变对象")

    @classmethod
    def from_raw(
        cls,
        epoch: Optional[EpochLike],
        raw: SnowflakeLike,
        *,
        layout: SnowflakeLayout = GENERIC_LAYOUT,
    ) -> "Snowflake":
        """
        从原始打包值构造雪花ID

        Args:
            epoch: 纪元，为None时使用布局默认纪元
            raw: 原始64位值
            layout: 解码使用的布局

        Returns:
            Snowflake: 雪花ID
        """
        return cls(parse_raw(raw), layout.resolve_epoch(epoch), layout)

    @classmethod
    def from_parts(
        cls,
        epoch: Optional[EpochLike],
        parts: PartsLike = None,
        *,
        layout: SnowflakeLayout = GENERIC_LAYOUT,
        counter: Optional[IncrementCounter] = None,
        **fields: Any,
    ) -> "Snowflake":
        """
        从组成部分构造雪花ID

        ``timestamp`` 必须是已减去纪元的相对值；未指定的 ``timestamp`` 和
        ``worker_id`` 默认为0，未指定的 ``increment`` 取自计数器。

        Args:
            epoch: 纪元，为None时使用布局默认纪元
            parts: 组成部分，可以是 :class:`SnowflakeParts` 或映射
            layout: 位布局
            counter: 提供默认序列号的计数器，默认为进程级共享计数器
            **fields: 覆盖字段

        Returns:
            Snowflake: 雪花ID
        """
        resolved_epoch = layout.resolve_epoch(epoch)
        values = coerce_parts(parts, **fields)

        timestamp = values.timestamp if values.timestamp is not None else 0
        worker_id = values.worker_id if values.worker_id is not None else 0
        if values.increment is not None:
            increment = values.increment
        else:
            increment = (counter or default_counter).next()

        worker, worker_mask = layout.pack_worker(worker_id, values.process_id)
        inner = (
            (timestamp << TIMESTAMP_SHIFT)
            | ((worker & worker_mask) << WORKER_ID_SHIFT)
            | (increment & INCREMENT_MASK)
        )
        return cls(inner, resolved_epoch, layout)

    @staticmethod
    def current_increment() -> int:
        """进程级共享计数器的当前值"""
        return default_counter.current

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def layout(self) -> SnowflakeLayout:
        return self._layout

    @property
    def timestamp(self) -> int:
        """包含纪元的毫秒时间戳"""
        return (self._inner >> TIMESTAMP_SHIFT) + self._epoch

    @property
    def worker_id(self) -> int:
        return self._layout.read_worker_id(self._inner)

    @property
    def process_id(self) -> Optional[int]:
        """进程ID，布局未拆分工作机器ID字段时为None"""
        return self._layout.read_process_id(self._inner)

    @property
    def increment(self) -> int:
        return self._inner & INCREMENT_MASK

    @property
    def created_at(self) -> Optional[datetime.datetime]:
        """创建时间（UTC），超出datetime可表示范围时为None"""
        try:
            return millis_to_datetime(self.timestamp)
        except OverflowError:
            return None

    def to_integer(self) -> int:
        return self._inner

    def to_string(self, radix: int = 10) -> str:
        """
        按指定进制返回打包值的字符串表示

        Args:
            radix: 进制（2-36），默认为10
        """
        return int_to_base(self._inner, radix)

    def to_dict(self) -> Dict[str, Any]:
        """
        返回解码后的各字段

        Returns:
            Dict[str, Any]: 字段字典
        """
        data: Dict[str, Any] = {
            "id": self.to_string(),
            "layout": self._layout.name,
            "epoch": self._epoch,
            "timestamp": self.timestamp,
            "created_at": self.created_at,
            "worker_id": self.worker_id,
            "increment": self.increment,
        }
        if self._layout.process_id_bits:
            data["process_id"] = self.process_id
        return data

    def __int__(self) -> int:
        return self.to_integer()

    def __index__(self) -> int:
        return self.to_integer()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"Snowflake({self._inner}, epoch={self._epoch}, "
            f"layout={self._layout.name!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snowflake):
            return NotImplemented
        return self._inner == other._inner and self._epoch == other._epoch

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Snowflake):
            return NotImplemented
        return (self._inner, self._epoch) < (other._inner, other._epoch)

    def __hash__(self) -> int:
        return hash((self._inner, self._epoch))

    def __reduce__(self):
        return (type(self), (self._inner, self._epoch, self._layout))
