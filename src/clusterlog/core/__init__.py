"""clusterlog.core 包：归一化、格式化、分发与日志门面。"""

from .channel import Channel, PipeChannel, QueueChannel
from .context import ProcessContext
from .dispatch import Dispatcher, ForwardReceiver
from .errors import ClusterLogError, ForwardingFailure, SerializationFailure
from .format import LEVEL_STYLES, colorize, format_line, style_message
from .logger import ClusterLogger
from .normalize import UNSERIALIZABLE, parse_errors, parse_message
from .sink import LoguruSink, Sink, StderrSink, StreamSink
from .types import LOGGING_TYPE, ForwardData, ForwardPayload, Level

__all__ = [
    "Channel",
    "PipeChannel",
    "QueueChannel",
    "ProcessContext",
    "Dispatcher",
    "ForwardReceiver",
    "ClusterLogError",
    "ForwardingFailure",
    "SerializationFailure",
    "LEVEL_STYLES",
    "colorize",
    "format_line",
    "style_message",
    "ClusterLogger",
    "UNSERIALIZABLE",
    "parse_errors",
    "parse_message",
    "LoguruSink",
    "Sink",
    "StderrSink",
    "StreamSink",
    "LOGGING_TYPE",
    "ForwardData",
    "ForwardPayload",
    "Level",
]
