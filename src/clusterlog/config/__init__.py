"""clusterlog.config 包：运行时配置与诊断日志适配。"""

from .settings import DEFAULT_TIMESTAMP_FORMAT, Settings, get_settings
from .log import (
    apply_logging_from_settings,
    build_output_sink,
    map_settings_to_dispatcher_kwargs,
    map_settings_to_facade_kwargs,
    map_settings_to_logger_kwargs,
)

__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "Settings",
    "get_settings",
    "apply_logging_from_settings",
    "build_output_sink",
    "map_settings_to_dispatcher_kwargs",
    "map_settings_to_facade_kwargs",
    "map_settings_to_logger_kwargs",
]
