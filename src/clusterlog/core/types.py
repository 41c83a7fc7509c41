from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# 跨进程消息的类型标识，接收端按它分流
LOGGING_TYPE = "logging"

WorkerID = Union[int, str, None]


class Level(str, Enum):
    """门面支持的日志级别。"""

    SUCCESS = "success"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    LOG = "log"


class ForwardData(BaseModel):
    """转发负载中的 data 部分。

    字段名 `workerID` 必须保持原样，接收端按这个键读取。
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    message: str
    worker_id: WorkerID = Field(default=None, alias="workerID")
    pid: int


class ForwardPayload(BaseModel):
    """子进程发给主进程的一条日志：`{type: "logging", data: {...}}`。"""

    model_config = ConfigDict(frozen=True)

    type: Literal["logging"] = LOGGING_TYPE
    data: ForwardData

    @classmethod
    def build(cls, message: str, worker_id: WorkerID, pid: int) -> "ForwardPayload":
        return cls(data=ForwardData(message=message, worker_id=worker_id, pid=pid))

    def to_wire(self) -> Dict[str, Any]:
        """导出为通道上传输的普通 dict（使用别名 workerID）。"""
        return self.model_dump(by_alias=True)
