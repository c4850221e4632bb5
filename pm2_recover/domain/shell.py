"""Shell token helpers shared by the patterns and the synthesizer.

Quoting is a plain single-quote wrap without escaping; dump content is
trusted. Path handling is purely lexical since the original filesystem
layout may be gone by the time a snapshot is replayed.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import PurePath

SHELL_INLINE_FLAG = "-c"


def single_quote(token: str) -> str:
    return f"'{token}'"


def double_quote(value: str) -> str:
    return f'"{value}"'


def quote_all(tokens: Iterable[str]) -> str:
    """Quote every token separately and join them with spaces."""
    return " ".join(single_quote(token) for token in tokens)


def normalize_separators(path: str) -> str:
    return path.replace("\\", "/")


def display_path(
    executable_path: str,
    working_directory: str,
    *,
    path_type: type[PurePath] = PurePath,
    sep: str = os.sep,
) -> str:
    """Render ``executable_path`` as ``./<relative>`` when it lies under ``working_directory``.

    Anything outside the working directory, or the working directory itself,
    is returned unchanged.
    """
    target = path_type(executable_path)
    root = path_type(working_directory)
    if target == root or not target.is_relative_to(root):
        return executable_path
    relative = target.relative_to(root)
    return f".{sep}{sep.join(relative.parts)}"
