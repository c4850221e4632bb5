"""恢复编排服务：逐个进程执行识别与命令生成，并按策略处理单进程失败。"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from pm2_recover.domain.classifier import PatternClassifier
from pm2_recover.domain.errors import ReconstructionError
from pm2_recover.domain.models import ProcessDescriptor, RecoveryPlan
from pm2_recover.domain.patterns.registry import PatternRegistry
from pm2_recover.domain.synthesizer import CommandSynthesizer
from pm2_recover.infra.logging.context import bind_log_context

logger = logging.getLogger(__name__)

ErrorPolicy = Literal["abort", "skip"]


@dataclass(slots=True)
class RecoveryResult:
    """一次恢复运行的结果：按输入顺序排列的计划与被跳过的失败记录。"""
    plans: list[RecoveryPlan] = field(default_factory=list)
    failures: list[ReconstructionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class RecoveryService:
    """恢复编排服务，进程之间互不共享状态。"""
    def __init__(self, registry: PatternRegistry) -> None:
        self._classifier = PatternClassifier(registry)
        self._synthesizer = CommandSynthesizer(registry)

    def plan(self, descriptor: ProcessDescriptor) -> RecoveryPlan:
        with bind_log_context(process_name=descriptor.name):
            pattern = self._classifier.select(descriptor)
            variant = pattern.variant
            logger.debug(
                "classified process as %s",
                pattern.name,
                extra={"event": "process.classified", "variant": variant.value},
            )
            return self._synthesizer.synthesize(descriptor, variant)

    def build_plans(
        self,
        descriptors: Iterable[ProcessDescriptor],
        on_error: ErrorPolicy = "abort",
    ) -> RecoveryResult:
        """abort 策略下首个失败直接抛出；skip 策略下记录失败并继续处理后续进程。"""
        result = RecoveryResult()
        for descriptor in descriptors:
            try:
                result.plans.append(self.plan(descriptor))
            except ReconstructionError as exc:
                if on_error == "abort":
                    raise
                logger.error(
                    "skipping process %s: %s",
                    descriptor.name,
                    exc,
                    extra={
                        "event": "process.skipped",
                        "process_name": descriptor.name,
                        "error_type": type(exc).__name__,
                    },
                )
                result.failures.append(exc)
        return result
