"""
雪花ID组成部分模型
"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError
from pydantic.alias_generators import to_camel

from snowutil.core.exceptions import InvalidPartsError


class SnowflakeParts(BaseModel):
    """
    构造雪花ID时可覆盖的字段

    所有字段均可省略。``timestamp`` 是相对纪元的时间偏移，调用方需自行减去纪元。
    字段必须是整数（不接受布尔值和数字字符串），但不做范围检查，打包时按位截断。
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    timestamp: Optional[StrictInt] = None
    worker_id: Optional[StrictInt] = None
    increment: Optional[StrictInt] = None
    process_id: Optional[StrictInt] = None


PartsLike = Union[SnowflakeParts, Mapping[str, Any], None]

# 驼峰别名到字段名的映射，如 workerId -> worker_id
_FIELD_NAMES = {to_camel(name): name for name in SnowflakeParts.model_fields}


def coerce_parts(parts: PartsLike = None, **fields: Any) -> SnowflakeParts:
    """
    将输入规范化为 :class:`SnowflakeParts`，关键字参数优先

    不会修改调用方传入的对象。

    Args:
        parts: 组成部分模型、映射或None
        **fields: 覆盖字段

    Returns:
        SnowflakeParts: 新的组成部分实例

    Raises:
        InvalidPartsError: 存在未知字段或字段值不是整数
    """
    if isinstance(parts, SnowflakeParts):
        data = parts.model_dump(exclude_unset=True)
    elif parts is None:
        data = {}
    elif isinstance(parts, Mapping):
        data = dict(parts)
    else:
        raise InvalidPartsError(
            f"不支持的组成部分类型: {type(parts).__name__}",
            details={"parts": repr(parts)},
        )

    data.update(fields)
    data = {_FIELD_NAMES.get(key, key): value for key, value in data.items()}

    try:
        return SnowflakeParts.model_validate(data)
    except ValidationError as e:
        raise InvalidPartsError(
            details={"errors": e.errors(include_url=False)}
        ) from e
