"""
异常处理模块

定义编解码过程中使用的自定义异常类。

位字段打包本身是宽松的：超出范围或负数的字段值会被静默截断，不会抛出异常。
只有无法解释的输入（非数字字符串、未知字段、非法进制等）才会触发下列异常。
"""

from typing import Any, Dict, Optional


class SnowflakeError(ValueError):
    """雪花ID基础异常类"""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        初始化异常

        Args:
            code: 错误代码
            message: 错误消息
            details: 错误详情
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidSnowflakeError(SnowflakeError):
    """原始雪花ID值无法解析"""

    def __init__(
        self,
        message: str = "无效的雪花ID",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code="INVALID_SNOWFLAKE", message=message, details=details)


class InvalidEpochError(SnowflakeError):
    """纪元时间无效或缺失"""

    def __init__(
        self,
        message: str = "无效的纪元时间",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code="INVALID_EPOCH", message=message, details=details)


class InvalidPartsError(SnowflakeError):
    """雪花ID组成部分无效"""

    def __init__(
        self,
        message: str = "无效的雪花ID组成部分",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code="INVALID_PARTS", message=message, details=details)


class InvalidRadixError(SnowflakeError):
    """进制超出2-36范围"""

    def __init__(
        self,
        message: str = "进制必须在2到36之间",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code="INVALID_RADIX", message=message, details=details)


class UnknownLayoutError(SnowflakeError):
    """未知的位布局名称"""

    def __init__(
        self,
        message: str = "未知的雪花ID布局",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code="UNKNOWN_LAYOUT", message=message, details=details)
