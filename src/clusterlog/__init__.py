"""clusterlog：进程感知的日志门面。

主进程直接写出带彩色时间戳的日志行；子进程把日志封装成
``{"type": "logging", "data": {...}}`` 负载转发给主进程。

模块级的 success/info/warn/error/fatal/log 使用一个惰性创建的默认 logger，
可以通过 `setup()` 显式替换（例如在子进程里传入通道）。
"""

from __future__ import annotations

from typing import Any, Optional

from .config import Settings, get_settings
from .core import (
    Channel,
    ClusterLogError,
    ClusterLogger,
    Dispatcher,
    ForwardingFailure,
    ForwardPayload,
    ForwardReceiver,
    PipeChannel,
    ProcessContext,
    QueueChannel,
    SerializationFailure,
    Sink,
    StreamSink,
)

__version__ = "0.1.0"

_DEFAULT: Optional[ClusterLogger] = None


def setup(
    context: Optional[ProcessContext] = None,
    *,
    channel: Optional[Channel] = None,
    settings: Optional[Settings] = None,
    sink: Optional[Sink] = None,
) -> ClusterLogger:
    """创建并登记默认 logger。

    未传入 context 时通过 `ProcessContext.detect()` 推断进程角色。
    """
    global _DEFAULT
    if settings is None:
        settings = get_settings()
    if context is None:
        context = ProcessContext.detect(worker_id=settings.worker_id)
    _DEFAULT = ClusterLogger.from_settings(
        context, channel=channel, settings=settings, sink=sink
    )
    return _DEFAULT


def get_cluster_logger() -> ClusterLogger:
    """返回默认 logger，首次调用时按环境自动创建。"""
    if _DEFAULT is None:
        return setup()
    return _DEFAULT


def reset() -> None:
    """丢弃默认 logger，下次使用时重新创建。"""
    global _DEFAULT
    _DEFAULT = None


def success(*values: Any) -> None:
    get_cluster_logger().success(*values)


def info(*values: Any) -> None:
    get_cluster_logger().info(*values)


def warn(*values: Any) -> None:
    get_cluster_logger().warn(*values)


def error(*values: Any) -> None:
    get_cluster_logger().error(*values)


def fatal(*values: Any) -> None:
    get_cluster_logger().fatal(*values)


def log(*values: Any) -> None:
    get_cluster_logger().log(*values)


__all__ = [
    "Channel",
    "ClusterLogError",
    "ClusterLogger",
    "Dispatcher",
    "ForwardingFailure",
    "ForwardPayload",
    "ForwardReceiver",
    "PipeChannel",
    "ProcessContext",
    "QueueChannel",
    "SerializationFailure",
    "Settings",
    "Sink",
    "StreamSink",
    "get_cluster_logger",
    "get_settings",
    "reset",
    "setup",
    "success",
    "info",
    "warn",
    "error",
    "fatal",
    "log",
]
