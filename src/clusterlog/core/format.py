"""着色与时间戳格式化。

颜色使用 colorama 的 ANSI 常量；级别颜色与前缀集中在 `LEVEL_STYLES`，
由 `ClusterLogger` 在格式化之前套用，格式化器本身只给时间戳上色。
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, NamedTuple, Optional

from colorama import Fore, Style

from clusterlog.config.settings import DEFAULT_TIMESTAMP_FORMAT

from .types import Level


class LevelStyle(NamedTuple):
    color: Optional[str]
    prefix: str


LEVEL_STYLES: Dict[Level, LevelStyle] = {
    Level.SUCCESS: LevelStyle(Fore.GREEN, "Success: "),
    Level.INFO: LevelStyle(Fore.BLUE, "Info: "),
    Level.WARN: LevelStyle(Fore.YELLOW, "Warn: "),
    # error 不加前缀，堆栈本身已带异常类型
    Level.ERROR: LevelStyle(Fore.RED, ""),
    Level.FATAL: LevelStyle(Fore.RED, "Fatal: "),
    Level.LOG: LevelStyle(None, ""),
}

TIMESTAMP_COLOR = Fore.CYAN


def colorize(text: str, color: Optional[str], enabled: bool = True) -> str:
    if not enabled or not color:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def style_message(level: Level, message: str, *, enabled: bool = True) -> str:
    """给消息加上级别前缀并按级别上色。"""
    style = LEVEL_STYLES[level]
    return colorize(f"{style.prefix}{message}", style.color, enabled)


def timestamp(
    fmt: str = DEFAULT_TIMESTAMP_FORMAT, now: Optional[datetime] = None
) -> str:
    # 本地时区的墙上时间
    moment = now if now is not None else datetime.now()
    return moment.astimezone().strftime(fmt)


def format_line(
    message: str,
    *,
    colorize_output: bool = True,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    now: Optional[datetime] = None,
) -> str:
    """返回 `[<彩色时间戳>] <message>`，时间戳在调用时取得。"""
    stamp = colorize(timestamp(timestamp_format, now), TIMESTAMP_COLOR, colorize_output)
    return f"[{stamp}] {message}"


__all__ = [
    "LEVEL_STYLES",
    "LevelStyle",
    "TIMESTAMP_COLOR",
    "colorize",
    "style_message",
    "timestamp",
    "format_line",
]
