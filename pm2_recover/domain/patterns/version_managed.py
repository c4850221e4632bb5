"""版本管理器形态：解释器来自 nvm/pyenv 等用户级安装，重放时改用短命令名。"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pm2_recover.domain.enums import InvocationVariant
from pm2_recover.domain.models import ProcessDescriptor
from pm2_recover.domain.patterns.base import BasePattern
from pm2_recover.domain.shell import normalize_separators

DEFAULT_RUNTIME_PATH_MARKERS: tuple[str, ...] = (
    "nvm/versions/node",
    "nvm/versions/io.js",
    "n/versions/node",
    "fnm/node-versions",
    "pyenv/versions",
)


def _segments(path: str) -> list[str]:
    return [segment for segment in normalize_separators(path).split("/") if segment]


class VersionManagedRuntimePattern(BasePattern):
    """可执行路径包含版本管理器安装目录片段时命中；按路径段整段比较。"""
    variant = InvocationVariant.version_managed_runtime
    name = "Version Managed Runtime"

    def __init__(self, markers: Iterable[str] | None = None) -> None:
        source = DEFAULT_RUNTIME_PATH_MARKERS if markers is None else markers
        self._markers = tuple(tuple(_segments(item)) for item in source if item.strip("/\\ "))

    @property
    def markers(self) -> tuple[str, ...]:
        return tuple("/".join(marker) for marker in self._markers)

    def matches(self, descriptor: ProcessDescriptor) -> bool:
        segments = _segments(descriptor.executable_path)
        return any(self._contains(segments, marker) for marker in self._markers)

    @staticmethod
    def _contains(segments: list[str], marker: tuple[str, ...]) -> bool:
        """首段允许带点前缀（nvm 对应 .nvm）；片段之后至少还要有一段路径。"""
        head, rest = marker[0], list(marker[1:])
        width = len(marker)
        for start in range(len(segments) - width):
            if segments[start] not in (head, f".{head}"):
                continue
            if segments[start + 1 : start + width] == rest:
                return True
        return False

    def launch_target(self, descriptor: ProcessDescriptor) -> str | None:
        return self._require_argument(descriptor, 0, "runtime command name")

    def passthrough_arguments(self, descriptor: ProcessDescriptor) -> Sequence[str]:
        return descriptor.arguments[1:]
