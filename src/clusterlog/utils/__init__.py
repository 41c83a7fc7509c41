"""
clusterlog.utils 包

通用工具集合，目前只有内部诊断日志。
"""

# 便捷导出
from .log import logger as logger

__all__ = ["logger"]
