"""子进程到主进程的通道。

任何带 `send(payload)` 的对象都可以作为通道；这里给出 multiprocessing 队列与管道的适配。
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Channel(Protocol):
    def send(self, payload: Mapping[str, Any]) -> None: ...


class QueueChannel:
    """包装 `multiprocessing.Queue`（或同接口的队列），非阻塞投递。"""

    def __init__(self, queue: Any) -> None:
        self.queue = queue

    def send(self, payload: Mapping[str, Any]) -> None:
        self.queue.put_nowait(payload)


class PipeChannel:
    """包装 `multiprocessing.connection.Connection`，例如 `Pipe()` 的一端。"""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def send(self, payload: Mapping[str, Any]) -> None:
        self.connection.send(payload)


__all__ = ["Channel", "QueueChannel", "PipeChannel"]
