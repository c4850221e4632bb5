"""Shell 包装形态：进程由 `sh -c "<command>"` 启动，整条命令作为单个参数重放。"""

from __future__ import annotations

from collections.abc import Sequence

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.models import ProcessDescriptor
from pm2_recover.domain.patterns.base import BasePattern
from pm2_recover.domain.shell import SHELL_INLINE_FLAG


class ShellWrappedPattern(BasePattern):
    """args[0] 为 -c 时命中；可执行路径被忽略。"""
    variant = InvocationVariant.shell_wrapped
    name = "Shell Wrapped"

    def matches(self, descriptor: ProcessDescriptor) -> bool:
        return bool(descriptor.arguments) and descriptor.arguments[0] == SHELL_INLINE_FLAG

    def launch_target(self, descriptor: ProcessDescriptor) -> str | None:
        return None

    def passthrough_arguments(self, descriptor: ProcessDescriptor) -> Sequence[str]:
        command = self._require_argument(descriptor, 1, "shell inline command after -c")
        return [command]
