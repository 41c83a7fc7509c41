"""日志配置适配器。

本模块把 `Settings` 拆成两组参数：
- 门面参数：`ClusterLogger` / `Dispatcher` 的关键字参数，以及按 `sink` 选择的输出 sink
- 诊断参数：`log_*` 字段，传给 `clusterlog.utils.log.configure_logger`

`apply_logging_from_settings` 做一次性或幂等的诊断配置调用。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from clusterlog.config.settings import Settings, get_settings


def map_settings_to_dispatcher_kwargs(settings: Settings) -> Dict[str, Any]:
    """Dispatcher 需要的格式化参数（是否着色、时间戳格式）。"""
    return {
        "colorize": settings.colorize,
        "timestamp_format": settings.timestamp_format,
    }


def map_settings_to_facade_kwargs(settings: Settings) -> Dict[str, Any]:
    """ClusterLogger 需要的归一化与着色参数。"""
    return {
        "delimiter": settings.delimiter,
        "colorize": settings.colorize,
    }


def build_output_sink(settings: Settings) -> Any:
    """按 settings.sink 创建主进程的输出 sink。"""
    # 延迟导入，core 依赖本模块
    from clusterlog.core.sink import LoguruSink, StreamSink

    if settings.sink == "loguru":
        return LoguruSink()
    return StreamSink()


def map_settings_to_logger_kwargs(settings: Settings) -> Dict[str, Any]:
    """把 Settings 映射为传给 configure_logger 的关键字参数字典。"""
    return {
        "name": settings.log_name,
        "console_level": settings.log_console_level,
        "file_level": settings.log_file_level,
        "log_dir": settings.log_dir,
        "rotation": settings.log_rotation,
        "retention": settings.log_retention,
        "compression": settings.log_compression,
        "backtrace": settings.log_backtrace,
        "diagnose": settings.log_diagnose,
        "serialize": settings.log_serialize,
    }


def apply_logging_from_settings(settings: Optional[Settings] = None) -> None:
    """从 settings 加载并应用诊断日志配置。

    如果未传入 settings，会使用 `get_settings()` 获取单例。已挂载的 `LoguruSink`
    输出 handler 会被保留。
    """
    if settings is None:
        settings = get_settings()

    kwargs = map_settings_to_logger_kwargs(settings)

    # 延迟导入日志模块以避免循环依赖
    from clusterlog.utils.log import configure_logger

    configure_logger(**kwargs)


__all__ = [
    "map_settings_to_dispatcher_kwargs",
    "map_settings_to_facade_kwargs",
    "build_output_sink",
    "map_settings_to_logger_kwargs",
    "apply_logging_from_settings",
]
