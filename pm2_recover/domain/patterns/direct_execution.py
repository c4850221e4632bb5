"""直接执行形态：可执行路径即启动目标，作为兜底形态。"""

from __future__ import annotations

from collections.abc import Sequence

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.models import ProcessDescriptor
from pm2_recover.domain.patterns.base import BasePattern
from pm2_recover.domain.shell import display_path


class DirectExecutionPattern(BasePattern):
    """兜底形态：对任何记录都命中，全部参数原样透传。"""
    variant = InvocationVariant.direct_execution
    name = "Direct Execution"

    def matches(self, descriptor: ProcessDescriptor) -> bool:
        return True

    def launch_target(self, descriptor: ProcessDescriptor) -> str | None:
        return display_path(descriptor.executable_path, descriptor.working_directory)

    def passthrough_arguments(self, descriptor: ProcessDescriptor) -> Sequence[str]:
        return descriptor.arguments
