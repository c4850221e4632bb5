"""全局配置加载模块：从环境变量构建运行参数并提供缓存访问。"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pm2_recover.domain.patterns.version_managed import DEFAULT_RUNTIME_PATH_MARKERS

DUMP_FILE_NAME = "dump.pm2"
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _csv_to_list(value: str) -> list[str]:
    """将逗号分隔字符串转换为去空白列表。"""
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """运行配置对象，从 PM2_RECOVER_* 环境变量读取并提供类型化访问。"""
    model_config = SettingsConfigDict(
        env_prefix="PM2_RECOVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # 与 pm2 自身保持一致：PM2_HOME 未设置时使用 ~/.pm2。
    pm2_home: Path = Field(
        default=Path("~/.pm2"),
        validation_alias=AliasChoices("PM2_HOME", "PM2_RECOVER_PM2_HOME"),
    )
    dump_file: Path | None = None
    runtime_path_markers: str = ",".join(DEFAULT_RUNTIME_PATH_MARKERS)
    on_error: Literal["abort", "skip"] = "abort"

    log_level: LogLevel = "WARNING"
    log_format: Literal["text", "json"] = "text"
    log_file: Path | None = None
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 3
    log_debug_processes: str = ""

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        # 环境变量常写成小写，先统一大写再做取值校验。
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def dump_path(self) -> Path:
        if self.dump_file is not None:
            return self.dump_file.expanduser()
        return self.pm2_home.expanduser() / DUMP_FILE_NAME

    def runtime_path_markers_list(self) -> list[str]:
        return _csv_to_list(self.runtime_path_markers)

    def log_debug_processes_list(self) -> list[str]:
        return _csv_to_list(self.log_debug_processes)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
