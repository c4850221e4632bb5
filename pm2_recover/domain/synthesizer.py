"""恢复命令生成：将进程记录与调用形态转换为 cd / pm2 start / pm2 stop 命令序列。"""

from __future__ import annotations

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.models import ProcessDescriptor, RecoveryPlan
from pm2_recover.domain.patterns.registry import PatternRegistry
from pm2_recover.domain.shell import double_quote, quote_all, single_quote


class CommandSynthesizer:
    """恢复命令生成器；相同输入总是得到相同的命令序列。"""
    def __init__(self, registry: PatternRegistry) -> None:
        self._registry = registry

    def synthesize(self, descriptor: ProcessDescriptor, variant: InvocationVariant) -> RecoveryPlan:
        """生成单个进程的恢复计划；所选形态缺少必需参数时抛出 ReconstructionError。"""
        lines = [
            f"cd {double_quote(descriptor.working_directory)}",
            self.build_start_line(descriptor, variant),
        ]
        # pm2 start 总是以运行态注册进程，需要再补一条 stop 还原停止状态。
        if descriptor.is_stopped:
            lines.append(f"pm2 stop {descriptor.name}")
        return RecoveryPlan(process_name=descriptor.name, variant=variant, lines=tuple(lines))

    def build_start_line(self, descriptor: ProcessDescriptor, variant: InvocationVariant) -> str:
        pattern = self._registry.get(variant)
        target = pattern.launch_target(descriptor)
        passthrough = pattern.passthrough_arguments(descriptor)

        parts = ["pm2 start", "--name", descriptor.name]
        if descriptor.watch:
            parts.append("--watch")
        if target is not None:
            parts.append(single_quote(target))
        if passthrough:
            parts.append("--")
            parts.append(quote_all(passthrough))
        return " ".join(parts)


def synthesize(
    descriptor: ProcessDescriptor,
    variant: InvocationVariant,
    registry: PatternRegistry | None = None,
) -> RecoveryPlan:
    return CommandSynthesizer(registry or PatternRegistry()).synthesize(descriptor, variant)
