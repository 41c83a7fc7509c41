"""clusterlog 的内部诊断日志模块。

提供基于 loguru 的 logger，特性包括：
- 默认静默，显式配置后开启
- 彩色 stderr 输出
- 日志文件轮转、压缩与保留策略
- 与诊断隔离的日志行输出 handler（供 `LoguruSink` 使用）
"""

from .logger import (
    OUTPUT_KEY,
    add_output_target,
    configure_logger,
    logger,
    remove_output_targets,
)

__all__ = [
    "OUTPUT_KEY",
    "add_output_target",
    "configure_logger",
    "logger",
    "remove_output_targets",
]
