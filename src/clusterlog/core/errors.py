from __future__ import annotations

from typing import Any, Mapping, Optional


class ClusterLogError(Exception):
    """clusterlog 通用错误类型。"""


class SerializationFailure(ClusterLogError):
    """单个非字符串参数无法被 JSON 序列化。

    只会被上报给 error 路径，不会抛给调用方。
    """

    def __init__(self, message: str, *, value_type: Optional[type] = None) -> None:
        super().__init__(message)
        self.value_type = value_type


class ForwardingFailure(ClusterLogError):
    """子进程无法把日志转发给主进程（通道缺失或发送失败）。"""

    def __init__(
        self, message: str, *, payload: Optional[Mapping[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.payload = payload
