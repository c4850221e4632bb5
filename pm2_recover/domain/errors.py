"""异常定义：快照加载失败与单进程命令重建失败。"""

from __future__ import annotations

from pathlib import Path


class RecoveryError(RuntimeError):
    pass


class SnapshotError(RecoveryError):
    """快照文件层面的错误，整体运行随之终止。"""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)


class SnapshotNotFoundError(SnapshotError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(path, f"File not found: {path}")


class SnapshotFormatError(SnapshotError):
    def __init__(self, path: Path | str, detail: str) -> None:
        super().__init__(path, f"Error processing file {path}: {detail}")
        self.detail = detail


class MissingKeyError(SnapshotFormatError):
    """进程记录缺少必需字段。"""

    def __init__(self, path: Path | str, index: int, process_name: str | None, key: str) -> None:
        label = process_name or "?"
        super().__init__(path, f"process #{index} ({label}) is missing required key '{key}'")
        self.index = index
        self.process_name = process_name
        self.key = key


class ReconstructionError(RecoveryError):
    """进程记录缺少当前调用形态所需的数据，只影响这一个进程。"""

    def __init__(self, process_name: str, field: str, reason: str | None = None) -> None:
        message = f"cannot rebuild start command for '{process_name}': missing {field}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.process_name = process_name
        self.field = field
