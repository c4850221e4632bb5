"""领域枚举定义：统一调用形态与 pm2 进程状态取值。"""

from __future__ import annotations

from enum import Enum


class InvocationVariant(str, Enum):
    """进程原始启动方式枚举。"""
    shell_wrapped = "shell_wrapped"
    version_managed_runtime = "version_managed_runtime"
    direct_execution = "direct_execution"


class ProcessStatus(str, Enum):
    """pm2 进程状态枚举；快照中可能出现其他取值，按字符串保存。"""
    online = "online"
    stopping = "stopping"
    stopped = "stopped"
    launching = "launching"
    errored = "errored"
    one_launch_status = "one-launch-status"
