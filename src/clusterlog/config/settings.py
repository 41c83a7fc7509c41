"""应用配置（基于 pydantic-settings）。

包含日志门面的运行时配置（环境变量优先），以及内部诊断日志（loguru）相关字段。
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# 与 JavaScript Date#toString 输出形状一致
DEFAULT_TIMESTAMP_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z (%Z)"


class Settings(BaseSettings):
    """应用配置模型（可通过环境变量注入）。

    环境变量前缀：CLUSTERLOG_
    例如 CLUSTERLOG_COLORIZE=false
    """

    # 门面行为
    delimiter: str = "|"
    colorize: bool = True
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    sink: Literal["stdout", "loguru"] = "stdout"
    worker_id: Optional[str] = None

    # 内部诊断日志
    log_name: str = "clusterlog"
    log_console_level: str = "WARNING"
    log_file_level: str = "DEBUG"
    log_dir: Optional[str] = None
    log_rotation: str = "10 MB"
    log_retention: str = "14 days"
    log_compression: str = "zip"
    log_backtrace: bool = True
    log_diagnose: bool = False
    log_serialize: bool = False

    model_config = SettingsConfigDict(env_prefix="CLUSTERLOG_")


# module-level cached settings
_SETTINGS: Optional[Settings] = None


def get_settings(force_reload: bool = False) -> Settings:
    """返回全局 Settings 单例（按需从环境加载）。

    如果 force_reload=True，会从环境/来源重新创建实例。
    """

    global _SETTINGS
    if _SETTINGS is None or force_reload:
        _SETTINGS = Settings()
    return _SETTINGS


__all__ = ["DEFAULT_TIMESTAMP_FORMAT", "Settings", "get_settings"]
