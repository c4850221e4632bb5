"""日志上下文：基于 contextvars 透传快照文件与当前进程名。"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Iterator

_UNSET = object()

_dump_file_var: ContextVar[str | None] = ContextVar("log_dump_file", default=None)
_process_name_var: ContextVar[str | None] = ContextVar("log_process_name", default=None)


def get_log_context() -> dict[str, str | None]:
    """返回当前上下文下的日志字段。"""
    return {
        "dump_file": _dump_file_var.get(),
        "process_name": _process_name_var.get(),
    }


@contextmanager
def bind_log_context(
    *,
    dump_file: str | None | object = _UNSET,
    process_name: str | None | object = _UNSET,
) -> Iterator[None]:
    """在上下文范围内绑定日志字段，并在退出时自动恢复。"""
    tokens: list[tuple[ContextVar[Any], Token[Any]]] = []
    if dump_file is not _UNSET:
        tokens.append((_dump_file_var, _dump_file_var.set(dump_file)))
    if process_name is not _UNSET:
        tokens.append((_process_name_var, _process_name_var.set(process_name)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
