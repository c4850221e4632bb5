"""领域数据结构定义：进程描述与恢复计划等核心值对象。"""

from __future__ import annotations

from dataclasses import dataclass

from pm2_recover.domain.enums import InvocationVariant, ProcessStatus


@dataclass(frozen=True, slots=True)
class ProcessDescriptor:
    """快照中的单个进程记录，加载后不可变。"""
    name: str
    working_directory: str
    executable_path: str
    status: str
    arguments: tuple[str, ...]
    watch: bool

    @property
    def is_stopped(self) -> bool:
        return self.status == ProcessStatus.stopped.value


@dataclass(frozen=True, slots=True)
class RecoveryPlan:
    """单个进程的恢复命令序列：cd、pm2 start，以及可选的 pm2 stop。"""
    process_name: str
    variant: InvocationVariant
    lines: tuple[str, ...]

    def render(self) -> str:
        return "\n".join(self.lines)
