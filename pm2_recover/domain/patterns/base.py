"""调用形态抽象基类，约束识别规则与启动目标/透传参数的推导接口。"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.errors import ReconstructionError
from pm2_recover.domain.models import ProcessDescriptor


class BasePattern(ABC):
    """调用形态抽象基类，每种形态负责识别自身并给出启动命令的组成部分。"""
    variant: InvocationVariant
    name: str

    @abstractmethod
    def matches(self, descriptor: ProcessDescriptor) -> bool:
        """判断进程记录是否由该调用形态启动。"""

    @abstractmethod
    def launch_target(self, descriptor: ProcessDescriptor) -> str | None:
        """返回 pm2 start 的启动目标（未加引号）；None 表示命令全部放在 -- 之后。"""

    @abstractmethod
    def passthrough_arguments(self, descriptor: ProcessDescriptor) -> Sequence[str]:
        """返回 -- 之后逐个加引号的参数。"""

    @staticmethod
    def _require_argument(descriptor: ProcessDescriptor, index: int, reason: str | None = None) -> str:
        """读取 args[index]，缺失时抛出 ReconstructionError。"""
        if index >= len(descriptor.arguments):
            raise ReconstructionError(descriptor.name, f"args[{index}]", reason)
        return descriptor.arguments[index]
