from __future__ import annotations

import multiprocessing
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import WorkerID


WORKER_ID_ENV = "CLUSTERLOG_WORKER_ID"


class ProcessContext(BaseModel):
    """当前进程的角色与身份。

    启动时构造一次并传给 `ClusterLogger`，日志门面不再自行读取全局进程状态。

    Examples:
        >>> ProcessContext.primary().is_primary
        True
        >>> ProcessContext.worker(3, pid=4471).worker_id
        3
    """

    model_config = ConfigDict(frozen=True)

    is_primary: bool = Field(..., description="是否为负责实际写出的主进程")
    worker_id: WorkerID = Field(default=None, description="子进程的逻辑编号")
    pid: int = Field(default_factory=os.getpid, description="操作系统进程号")

    @classmethod
    def primary(cls, pid: Optional[int] = None) -> "ProcessContext":
        if pid is None:
            return cls(is_primary=True)
        return cls(is_primary=True, pid=pid)

    @classmethod
    def worker(cls, worker_id: WorkerID, pid: Optional[int] = None) -> "ProcessContext":
        if pid is None:
            return cls(is_primary=False, worker_id=worker_id)
        return cls(is_primary=False, worker_id=worker_id, pid=pid)

    @classmethod
    def detect(cls, worker_id: WorkerID = None) -> "ProcessContext":
        """根据 multiprocessing 推断当前进程角色。

        没有父进程（`parent_process()` 为 None）即为主进程。子进程的 worker_id
        依次取参数、环境变量 CLUSTERLOG_WORKER_ID、进程名（如 "Process-3"）。
        """
        if multiprocessing.parent_process() is None:
            return cls.primary()

        if worker_id is None:
            worker_id = os.environ.get(WORKER_ID_ENV)
        if worker_id is None:
            worker_id = multiprocessing.current_process().name
        return cls.worker(worker_id)


__all__ = ["WORKER_ID_ENV", "ProcessContext"]
