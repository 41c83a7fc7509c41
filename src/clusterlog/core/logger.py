"""分级日志门面。

`ClusterLogger` 提供六个入口：success / info / warn / error / fatal / log。
每个入口把参数归一化为一条消息，套上级别颜色与前缀，再交给 `Dispatcher`
按进程角色写出或转发。
"""

from __future__ import annotations

import traceback
from typing import Any, Optional, Sequence

from clusterlog.config.log import (
    build_output_sink,
    map_settings_to_dispatcher_kwargs,
    map_settings_to_facade_kwargs,
)
from clusterlog.config.settings import Settings, get_settings

from .channel import Channel
from .context import ProcessContext
from .dispatch import Dispatcher
from .errors import SerializationFailure
from .format import style_message
from .normalize import UNSERIALIZABLE, parse_errors, parse_message
from .sink import Sink, StderrSink
from .types import Level


class ClusterLogger:
    """进程感知的分级日志门面。

    Examples:
        >>> log = ClusterLogger(Dispatcher(ProcessContext.primary()))
        >>> log.info("server started")  # doctest: +SKIP
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        delimiter: str = "|",
        colorize: bool = True,
        fallback: Optional[Sink] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.delimiter = delimiter
        self.colorize = colorize
        # error 路径自身出错时的最后兜底，不经过 Dispatcher
        self.fallback = fallback if fallback is not None else StderrSink()

    @classmethod
    def from_settings(
        cls,
        context: ProcessContext,
        *,
        channel: Optional[Channel] = None,
        settings: Optional[Settings] = None,
        sink: Optional[Sink] = None,
    ) -> "ClusterLogger":
        """按 Settings 组装 Dispatcher 与 ClusterLogger。"""
        if settings is None:
            settings = get_settings()
        if sink is None:
            sink = build_output_sink(settings)
        dispatcher = Dispatcher(
            context,
            sink=sink,
            channel=channel,
            **map_settings_to_dispatcher_kwargs(settings),
        )
        return cls(dispatcher, **map_settings_to_facade_kwargs(settings))

    @property
    def context(self) -> ProcessContext:
        return self.dispatcher.context

    def _report_serialization(self, failure: SerializationFailure) -> None:
        self.error(failure)

    def _message(self, values: Sequence[Any]) -> str:
        return parse_message(
            values,
            delimiter=self.delimiter,
            on_error=self._report_serialization,
            unserializable=UNSERIALIZABLE,
        )

    def _emit(self, level: Level, values: Sequence[Any]) -> None:
        message = self._message(values)
        self.dispatcher.dispatch(style_message(level, message, enabled=self.colorize))

    def success(self, *values: Any) -> None:
        self._emit(Level.SUCCESS, values)

    def info(self, *values: Any) -> None:
        self._emit(Level.INFO, values)

    def warn(self, *values: Any) -> None:
        self._emit(Level.WARN, values)

    def error(self, *values: Any) -> None:
        """记录错误：异常取完整堆栈，红色输出，不加前缀。

        本方法不会抛出异常；内部任何失败都把堆栈写到 fallback sink。
        """
        try:
            errors = parse_errors(values)
            message = self._message(errors)
            self.dispatcher.dispatch(
                style_message(Level.ERROR, message, enabled=self.colorize)
            )
        except Exception:
            self.fallback.write_line(traceback.format_exc().rstrip("\n"))

    def fatal(self, *values: Any) -> None:
        self._emit(Level.FATAL, values)

    def log(self, *values: Any) -> None:
        self._emit(Level.LOG, values)


__all__ = ["ClusterLogger"]
