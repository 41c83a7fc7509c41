"""基于 loguru 的内部诊断日志与日志行输出 handler。

loguru 上有两类 handler：
- 诊断 handler：记录 clusterlog 自身的运行细节（转发失败、序列化失败等）
- 输出 handler：`LoguruSink` 写出的日志行，带 `extra[OUTPUT_KEY]` 标记

两类 handler 用 filter 互相隔离，诊断级别不会过滤掉输出行。

设计目标：
- 作为库默认静默（`logger.disable("clusterlog")`），由应用显式开启
- 彩色的 stderr 输出，不污染 stdout
- 可选的文件 sink，支持轮转、压缩与保留策略
"""

from __future__ import annotations

from typing import Any, Dict, List
import sys
import os

from loguru import logger as _logger


_PACKAGE = "clusterlog"

# 日志行记录上的 extra 键
OUTPUT_KEY = "clusterlog_output"

# 输出目标 -> handler id；configure_logger 移除全部 handler 后据此重新挂载
_OUTPUT_TARGETS: List[Any] = []
_OUTPUT_HANDLERS: List[int] = []


def _is_output(record: Dict[str, Any]) -> bool:
    return bool(record["extra"].get(OUTPUT_KEY))


def _is_diagnostic(record: Dict[str, Any]) -> bool:
    return not _is_output(record)


def _ensure_log_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _add_output_handler(target: Any) -> int:
    # 日志行自带换行与颜色，按原样写出
    return _logger.add(
        target,
        format="{message}",
        level=0,
        filter=_is_output,
        colorize=False,
    )


def add_output_target(target: Any) -> None:
    """挂载一个输出 handler（同一目标只挂一次）。"""
    if any(existing is target for existing in _OUTPUT_TARGETS):
        return
    try:
        # loguru 自带的 stderr handler 没有 filter，会把日志行重复写一遍
        _logger.remove(0)
    except ValueError:
        pass
    _OUTPUT_TARGETS.append(target)
    _OUTPUT_HANDLERS.append(_add_output_handler(target))


def remove_output_targets() -> None:
    """卸载全部输出 handler。"""
    for handler_id in _OUTPUT_HANDLERS:
        try:
            _logger.remove(handler_id)
        except ValueError:
            pass
    _OUTPUT_HANDLERS.clear()
    _OUTPUT_TARGETS.clear()


def configure_logger(
    *,
    name: str = _PACKAGE,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    log_dir: str | None = None,
    rotation: str = "10 MB",
    retention: str = "14 days",
    compression: str = "zip",
    backtrace: bool = True,
    diagnose: bool = False,
    serialize: bool = False,
) -> Any:
    """配置并返回一个已设置好的 loguru logger 实例。

    会移除 loguru 上已有的处理器，重新挂载诊断 handler 与已登记的输出 handler，
    然后开启 clusterlog 命名空间的输出。
    """

    # 移除已存在的处理器以避免重复输出
    _logger.remove()
    _OUTPUT_HANDLERS[:] = [_add_output_handler(target) for target in _OUTPUT_TARGETS]

    # 控制台 sink：写到 stderr，stdout 留给主进程的日志输出
    _logger.add(
        sys.stderr,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=console_level,
        filter=_is_diagnostic,
        enqueue=True,
        backtrace=backtrace,
        diagnose=diagnose,
    )

    if log_dir:
        _ensure_log_dir(log_dir)
        file_path = os.path.join(log_dir, f"{name}.log")
        _logger.add(
            file_path,
            rotation=rotation,
            retention=retention,
            compression=compression,
            level=file_level,
            filter=_is_diagnostic,
            serialize=serialize,
            enqueue=True,
            backtrace=backtrace,
            diagnose=diagnose,
        )

    _logger.enable(_PACKAGE)
    return _logger


# 库默认静默，直到应用调用 configure_logger
_logger.disable(_PACKAGE)
logger = _logger
