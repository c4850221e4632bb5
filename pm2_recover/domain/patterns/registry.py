"""调用形态注册中心：按识别优先级管理形态实例。"""

from __future__ import annotations

from collections.abc import Iterable

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.patterns.base import BasePattern
from pm2_recover.domain.patterns.direct_execution import DirectExecutionPattern
from pm2_recover.domain.patterns.shell_wrapped import ShellWrappedPattern
from pm2_recover.domain.patterns.version_managed import VersionManagedRuntimePattern


class PatternRegistry:
    """调用形态注册中心；注册顺序即识别顺序，兜底形态最后注册。"""
    def __init__(self, runtime_path_markers: Iterable[str] | None = None) -> None:
        self._patterns: dict[InvocationVariant, BasePattern] = {}
        self.register(ShellWrappedPattern())
        self.register(VersionManagedRuntimePattern(runtime_path_markers))
        self.register(DirectExecutionPattern())

    def register(self, pattern: BasePattern) -> None:
        """注册形态实例；同一形态重复注册时替换旧实例并保留原有顺序。"""
        self._patterns[pattern.variant] = pattern

    def get(self, variant: InvocationVariant) -> BasePattern:
        try:
            return self._patterns[variant]
        except KeyError as exc:
            raise KeyError(f"unknown invocation variant: {variant}") from exc

    def all(self) -> list[BasePattern]:
        return list(self._patterns.values())
