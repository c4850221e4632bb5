"""调用形态识别：按注册顺序逐个匹配，首个命中者胜出，直接执行形态兜底。"""

from __future__ import annotations

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.models import ProcessDescriptor
from pm2_recover.domain.patterns.base import BasePattern
from pm2_recover.domain.patterns.registry import PatternRegistry


class PatternClassifier:
    """调用形态识别器，不做任何 I/O，对任意合法记录都能给出结果。"""
    def __init__(self, registry: PatternRegistry) -> None:
        self._registry = registry

    def select(self, descriptor: ProcessDescriptor) -> BasePattern:
        """返回第一个命中的形态实例。"""
        for pattern in self._registry.all():
            if pattern.variant is InvocationVariant.direct_execution:
                continue
            if pattern.matches(descriptor):
                return pattern
        return self._registry.get(InvocationVariant.direct_execution)

    def classify(self, descriptor: ProcessDescriptor) -> InvocationVariant:
        return self.select(descriptor).variant


def classify(descriptor: ProcessDescriptor, registry: PatternRegistry | None = None) -> InvocationVariant:
    """使用默认版本管理器路径片段识别调用形态。"""
    return PatternClassifier(registry or PatternRegistry()).classify(descriptor)
