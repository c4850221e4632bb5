"""pm2 dump 记录数据模型，约束恢复所需的六个字段。"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pm2_recover.domain.models import ProcessDescriptor

REQUIRED_KEYS: tuple[str, ...] = ("name", "pm_cwd", "pm_exec_path", "status", "args", "watch")


class DumpRecord(BaseModel):
    """dump.pm2 中单个进程记录；其余 pm2 字段（env、日志路径等）直接忽略。"""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    pm_cwd: str
    pm_exec_path: str
    status: str
    args: list[str] | None
    watch: bool

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> Any:
        # pm2 对无参数进程可能写入单个字符串。
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("watch", mode="before")
    @classmethod
    def _coerce_watch(cls, value: Any) -> Any:
        # watch 也可以是被监听路径列表，非空即视为开启。
        if isinstance(value, list):
            return bool(value)
        return value

    def to_descriptor(self) -> ProcessDescriptor:
        return ProcessDescriptor(
            name=self.name,
            working_directory=self.pm_cwd,
            executable_path=self.pm_exec_path,
            status=self.status,
            arguments=tuple(self.args or ()),
            watch=self.watch,
        )
