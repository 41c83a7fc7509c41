"""按进程角色分发日志。

- 主进程：加时间戳后直接写 sink
- 子进程：构造 `{type: "logging", data: {...}}` 负载经通道发给主进程，从不写 sink

`ForwardReceiver` 是主进程一侧的配套：把收到的转发负载重新交给主进程的 Dispatcher。
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from clusterlog.config.settings import DEFAULT_TIMESTAMP_FORMAT
from clusterlog.utils.log import logger

from .channel import Channel
from .context import ProcessContext
from .errors import ForwardingFailure
from .format import format_line
from .sink import Sink, StreamSink
from .types import LOGGING_TYPE, ForwardPayload


class Dispatcher:
    def __init__(
        self,
        context: ProcessContext,
        *,
        sink: Optional[Sink] = None,
        channel: Optional[Channel] = None,
        colorize: bool = True,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self.context = context
        self.sink = sink if sink is not None else StreamSink()
        self.channel = channel
        self.colorize = colorize
        self.timestamp_format = timestamp_format

    def dispatch(self, message: str) -> None:
        if self.context.is_primary:
            self.write(message)
        else:
            self.forward(message)

    def write(self, message: str) -> None:
        """加上时间戳后写入 sink（仅主进程）。"""
        line = format_line(
            message,
            colorize_output=self.colorize,
            timestamp_format=self.timestamp_format,
        )
        self.sink.write_line(line)

    def forward(self, message: str) -> None:
        """把消息转发给主进程；不等待确认，失败时抛出 ForwardingFailure。"""
        payload = ForwardPayload.build(
            message, self.context.worker_id, self.context.pid
        ).to_wire()

        if self.channel is None:
            raise ForwardingFailure(
                "no channel to the primary process", payload=payload
            )

        try:
            self.channel.send(payload)
        except Exception as exc:
            logger.opt(exception=exc).warning(
                "forwarding to primary failed (worker={}, pid={})",
                self.context.worker_id,
                self.context.pid,
            )
            raise ForwardingFailure(
                f"failed to forward log message: {exc}", payload=payload
            ) from exc
        logger.trace("forwarded message from worker {}", self.context.worker_id)


class ForwardReceiver:
    """主进程侧：把子进程转发来的 logging 负载写入主进程的 sink。"""

    def __init__(self, dispatcher: Dispatcher) -> None:
        if not dispatcher.context.is_primary:
            raise ValueError("ForwardReceiver requires a primary-process dispatcher")
        self.dispatcher = dispatcher

    def handle(self, payload: Any) -> bool:
        """处理一条负载；不是 logging 类型或 data 不是映射时返回 False。"""
        if not isinstance(payload, Mapping) or payload.get("type") != LOGGING_TYPE:
            return False
        data = payload.get("data")
        if not isinstance(data, Mapping):
            logger.debug("logging payload without data mapping: {!r}", payload)
            return False
        self.dispatcher.write(str(data.get("message", "")))
        return True

    def drain(self, queue: Any, sentinel: Any = None) -> int:
        """从队列阻塞读取并处理负载，直到读到 sentinel；返回处理的 logging 条数。"""
        handled = 0
        while True:
            payload = queue.get()
            if payload is sentinel or payload == sentinel:
                break
            if self.handle(payload):
                handled += 1
            else:
                logger.debug("ignoring non-logging payload: {!r}", payload)
        return handled


__all__ = ["Dispatcher", "ForwardReceiver"]
