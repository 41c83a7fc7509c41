"""主进程的输出 sink。"""

from __future__ import annotations

import sys
from typing import Any, Optional, Protocol, TextIO, runtime_checkable

from clusterlog.utils.log import OUTPUT_KEY, add_output_target, logger


@runtime_checkable
class Sink(Protocol):
    def write_line(self, line: str) -> None: ...


class StreamSink:
    """按行写入文本流并立即 flush。

    未指定 stream 时在写入时才解析 `sys.stdout`，以便测试或重定向替换标准输出。
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write_line(self, line: str) -> None:
        stream = self.stream
        stream.write(line + "\n")
        stream.flush()


class StderrSink(StreamSink):
    """写到 `sys.stderr`，用作 error 路径的兜底输出。"""

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr


class LoguruSink:
    """把整行交给 loguru，由专门的输出 handler 原样写出。

    输出 handler 只接收带 `extra[OUTPUT_KEY]` 标记的记录，诊断 handler 则排除它们，
    因此诊断的级别配置（例如 WARNING）不会吞掉日志行。target 可以是任何 loguru
    支持的 sink（文本流、文件路径等），默认是 `sys.stdout`。

    clusterlog 命名空间默认被 disable，这里单独开启本模块，保证日志行不被丢弃。
    """

    def __init__(self, target: Any = None) -> None:
        self.target = target if target is not None else sys.stdout
        add_output_target(self.target)
        logger.enable(__name__)
        self.logger = logger.bind(**{OUTPUT_KEY: True})

    def write_line(self, line: str) -> None:
        self.logger.opt(raw=True).info(line + "\n")


__all__ = ["Sink", "StreamSink", "StderrSink", "LoguruSink"]
