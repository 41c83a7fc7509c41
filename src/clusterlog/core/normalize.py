"""消息与错误的归一化。

两个纯函数：
- `parse_message`：把一组任意值归并成一条字符串
- `parse_errors`：把异常/字符串转换成可展示的文本，优先使用完整堆栈
"""

from __future__ import annotations

import json
import traceback
from typing import Any, Callable, List, Optional, Sequence

from clusterlog.utils.log import logger

from .errors import SerializationFailure


# 序列化失败时的返回值
UNSERIALIZABLE = "<unserializable>"

ErrorCallback = Callable[[SerializationFailure], Any]


def parse_message(
    values: Sequence[Any],
    *,
    delimiter: str = "|",
    on_error: Optional[ErrorCallback] = None,
    unserializable: str = UNSERIALIZABLE,
) -> str:
    """把 values 归并为一条消息。

    - 单个字符串原样返回
    - 多个值各自 `str()` 后用 delimiter 连接
    - 单个非字符串值做 JSON 序列化，非 JSON 类型（Path、datetime 等）取 `str()`；
      循环引用等失败时不抛出，构造 SerializationFailure
      交给 on_error，并返回 unserializable 标记
    """
    if len(values) != 1:
        return delimiter.join(str(value) for value in values)

    value = values[0]
    if isinstance(value, str):
        return value

    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except Exception as exc:
        failure = SerializationFailure(
            f"cannot serialize {type(value).__name__}: {exc}",
            value_type=type(value),
        )
        failure.__cause__ = exc
        logger.opt(exception=exc).debug("message serialization failed")
        if on_error is not None:
            on_error(failure)
        return unserializable


def describe_error(value: Any) -> str:
    if isinstance(value, BaseException):
        lines = traceback.format_exception(type(value), value, value.__traceback__)
        return "".join(lines).rstrip("\n")
    return str(value)


def parse_errors(values: Sequence[Any]) -> List[str]:
    """逐个转换错误值，保持顺序；异常取堆栈文本，其它取 `str()`。"""
    return [describe_error(value) for value in values]


__all__ = ["UNSERIALIZABLE", "parse_message", "parse_errors", "describe_error"]
