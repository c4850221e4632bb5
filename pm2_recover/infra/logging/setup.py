"""日志初始化：stderr 文本/JSON 输出、可选滚动文件与按进程名放行 DEBUG。"""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any

from pm2_recover.config import Settings
from pm2_recover.infra.logging.context import get_log_context

SERVICE_NAME = "pm2-recover"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handlers: list[logging.Handler] = []


class DebugRoutingFilter(logging.Filter):
    """控制默认日志级别，并允许指定进程名放行 DEBUG。"""

    def __init__(self, *, min_level: int, debug_processes: set[str]) -> None:
        super().__init__()
        self._min_level = min_level
        self._debug_processes = debug_processes

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= self._min_level:
            return True
        if record.levelno != logging.DEBUG:
            return False
        process_name = getattr(record, "process_name", None) or get_log_context().get("process_name")
        return bool(process_name and process_name in self._debug_processes)


class ContextInjectionFilter(logging.Filter):
    """将 contextvars 中的字段写入 record，便于格式化器直接读取。"""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_log_context()
        for key in ("dump_file", "process_name"):
            if getattr(record, key, None) is None and ctx.get(key) is not None:
                setattr(record, key, ctx[key])
        return True


class StructuredJsonFormatter(logging.Formatter):
    """将 LogRecord 规整为统一 JSON 行格式。"""

    def __init__(self, *, service: str) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_log_context()
        error_text = getattr(record, "error", None)
        if error_text is None and record.exc_info:
            error_text = self.formatException(record.exc_info)

        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self._service,
            "module": record.name,
            "event": getattr(record, "event", None),
            "dump_file": getattr(record, "dump_file", None) or ctx.get("dump_file"),
            "process_name": getattr(record, "process_name", None) or ctx.get("process_name"),
            "variant": getattr(record, "variant", None),
            "message": record.getMessage(),
            "error_type": getattr(record, "error_type", None),
            "error": str(error_text) if error_text is not None else None,
        }
        return json.dumps(entry, ensure_ascii=False)


def _parse_level(level_text: str) -> int:
    return getattr(logging, str(level_text).upper(), logging.INFO)


def _build_formatter(settings: Settings) -> logging.Formatter:
    if settings.log_format == "json":
        return StructuredJsonFormatter(service=SERVICE_NAME)
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def configure_logging(settings: Settings) -> None:
    """初始化全局日志输出：诊断信息写 stderr，stdout 只保留恢复命令。"""
    global _handlers
    shutdown_logging()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": "DEBUG", "handlers": []},
        }
    )

    routing = DebugRoutingFilter(
        min_level=_parse_level(settings.log_level),
        debug_processes=set(settings.log_debug_processes_list()),
    )
    formatter = _build_formatter(settings)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stderr_handler]

    if settings.log_file is not None:
        log_file = settings.log_file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_file),
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        # 文件日志固定使用 JSON 行，便于事后检索。
        file_handler.setFormatter(StructuredJsonFormatter(service=SERVICE_NAME))
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    for handler in handlers:
        handler.addFilter(ContextInjectionFilter())
        handler.addFilter(routing)
        root_logger.addHandler(handler)
    _handlers = handlers


def shutdown_logging() -> None:
    """移除并关闭本模块安装的日志句柄。"""
    global _handlers
    root_logger = logging.getLogger()
    try:
        for handler in _handlers:
            root_logger.removeHandler(handler)
            handler.close()
    finally:
        _handlers = []
