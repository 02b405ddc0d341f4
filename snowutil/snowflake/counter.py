"""
自增计数器模块

提供线程安全的自增计数器，用于在未显式指定序列号时为雪花ID提供默认值。
"""

import threading

from snowutil.core.logging import get_logger

logger = get_logger(__name__)

# 打包进雪花ID的序列号字段宽度为12位
INCREMENT_PERIOD = 1 << 12


class IncrementCounter:
    """
    自增计数器

    每次调用 :meth:`next` 返回当前值并加一，读取与递增在同一把锁内完成，
    保证并发调用者获得互不相同且严格递增的值。计数器本身没有上限，
    只有打包进雪花ID时才会被截断为低12位。
    """

    def __init__(self, start: int = 0):
        """
        初始化计数器

        Args:
            start: 起始值
        """
        self._value = start
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        """下一次 :meth:`next` 将返回的值"""
        with self._lock:
            return self._value

    def next(self) -> int:
        """
        获取当前值并递增

        Returns:
            int: 递增前的值
        """
        with self._lock:
            value = self._value
            self._value += 1

        if value and value % INCREMENT_PERIOD == 0:
            logger.debug(f"自增计数器达到 {value}，打包后的序列号字段已回绕")
        return value

    def reset(self, value: int = 0) -> None:
        """
        重置计数器

        Args:
            value: 重置后的值
        """
        with self._lock:
            self._value = value

    def __repr__(self) -> str:
        return f"IncrementCounter(current={self.current})"


# 进程级共享计数器，所有布局和纪元共用
default_counter = IncrementCounter()
