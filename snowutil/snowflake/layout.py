"""
位布局模块

雪花ID的64位整数按以下方式划分（第0位为最低位）::

    63..22  相对时间戳（42位）
    21..12  工作机器ID（10位）
    11..0   序列号（12位）

不同厂商的格式仅在纪元和工作机器ID字段的拆分方式上有所区别，
因此每种格式用一个 :class:`SnowflakeLayout` 配置值表示，而不是子类。
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from snowutil.core.exceptions import InvalidEpochError, UnknownLayoutError
from snowutil.utils.time import EpochLike, to_epoch_millis

if TYPE_CHECKING:
    from snowutil.snowflake.counter import IncrementCounter
    from snowutil.snowflake.parts import PartsLike
    from snowutil.snowflake.snowflake import Snowflake, SnowflakeLike

UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF

TIMESTAMP_SHIFT = 22
WORKER_ID_SHIFT = 12
WORKER_ID_BITS = 10
WORKER_ID_MASK = 0x3FF000
INCREMENT_MASK = 0xFFF

# 通用打包路径只接受5位工作机器ID，读取时却按10位读取
WORKER_ID_WRITE_MASK = 0x1F

DISCORD_EPOCH = 1420070400000
TWITTER_EPOCH = 1288834974657


class SnowflakeLayout(BaseModel):
    """
    雪花ID位布局

    Attributes:
        name: 布局名称
        epoch: 默认纪元（毫秒），为None时必须由调用方提供
        process_id_bits: 工作机器ID字段低位中进程ID所占位数，0表示不拆分
    """

    model_config = ConfigDict(frozen=True)

    name: str
    epoch: Optional[int] = None
    process_id_bits: int = Field(default=0, ge=0, le=WORKER_ID_BITS)

    def resolve_epoch(self, epoch: Optional[EpochLike] = None) -> int:
        """
        确定实际使用的纪元

        Args:
            epoch: 调用方指定的纪元，优先于布局默认值

        Returns:
            int: 毫秒纪元

        Raises:
            InvalidEpochError: 既未指定纪元，布局也没有默认纪元
        """
        if epoch is not None:
            return to_epoch_millis(epoch)
        if self.epoch is None:
            raise InvalidEpochError(
                f"布局 {self.name} 没有默认纪元，必须显式指定",
                details={"layout": self.name},
            )
        return self.epoch

    def pack_worker(
        self, worker_id: int, process_id: Optional[int] = None
    ) -> Tuple[int, int]:
        """
        计算写入工作机器ID字段的值及其掩码

        布局拆分了进程ID且调用方提供了进程ID时，先组合为
        ``(worker_id << process_id_bits) | process_id`` 并按完整10位写入；
        否则按通用路径的5位掩码写入。

        Returns:
            Tuple[int, int]: (字段值, 掩码)
        """
        if self.process_id_bits and process_id is not None:
            combined = (worker_id << self.process_id_bits) | process_id
            return combined, WORKER_ID_MASK >> WORKER_ID_SHIFT
        return worker_id, WORKER_ID_WRITE_MASK

    def read_worker_id(self, inner: int) -> int:
        """从打包值中读取工作机器ID"""
        shift = WORKER_ID_SHIFT + self.process_id_bits
        return (inner >> shift) & ((1 << (WORKER_ID_BITS - self.process_id_bits)) - 1)

    def read_process_id(self, inner: int) -> Optional[int]:
        """从打包值中读取进程ID，布局未拆分时返回None"""
        if not self.process_id_bits:
            return None
        return (inner >> WORKER_ID_SHIFT) & ((1 << self.process_id_bits) - 1)

    def from_raw(
        self, raw: "SnowflakeLike", epoch: Optional[EpochLike] = None
    ) -> "Snowflake":
        """
        使用本布局从原始值构造雪花ID

        Args:
            raw: 原始64位值
            epoch: 纪元，默认使用布局纪元
        """
        from snowutil.snowflake.snowflake import Snowflake

        return Snowflake.from_raw(epoch, raw, layout=self)

    def from_parts(
        self,
        parts: "PartsLike" = None,
        *,
        epoch: Optional[EpochLike] = None,
        counter: Optional["IncrementCounter"] = None,
        **fields: Any,
    ) -> "Snowflake":
        """
        使用本布局从组成部分构造雪花ID

        Args:
            parts: 组成部分
            epoch: 纪元，默认使用布局纪元
            counter: 提供默认序列号的计数器
            **fields: 覆盖字段
        """
        from snowutil.snowflake.snowflake import Snowflake

        return Snowflake.from_parts(
            epoch, parts, layout=self, counter=counter, **fields
        )


GENERIC_LAYOUT = SnowflakeLayout(name="generic")
DISCORD_LAYOUT = SnowflakeLayout(name="discord", epoch=DISCORD_EPOCH, process_id_bits=5)
TWITTER_LAYOUT = SnowflakeLayout(name="twitter", epoch=TWITTER_EPOCH)

LAYOUTS: Dict[str, SnowflakeLayout] = {
    layout.name: layout for layout in (GENERIC_LAYOUT, DISCORD_LAYOUT, TWITTER_LAYOUT)
}


def get_layout(name: str) -> SnowflakeLayout:
    """
    按名称获取布局（不区分大小写）

    Args:
        name: 布局名称

    Returns:
        SnowflakeLayout: 布局

    Raises:
        UnknownLayoutError: 名称未注册
    """
    layout = LAYOUTS.get(name.strip().lower())
    if layout is None:
        raise UnknownLayoutError(
            f"未知的雪花ID布局: {name}",
            details={"layout": name, "available": sorted(LAYOUTS)},
        )
    return layout
