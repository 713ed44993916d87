"""querycoder - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与当前目录 `.env`(可选)读取配置.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from querycoder.constants import LogFormat, LogLevel

APP_VERSION = "0.3.0"

DEFAULT_LOG_LEVEL = LogLevel.INFO
DEFAULT_LOG_FORMAT = LogFormat.CONSOLE


class Settings(BaseSettings):
    """运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    log_level: LogLevel = Field(default=DEFAULT_LOG_LEVEL, validation_alias="QUERYCODER_LOG_LEVEL")
    log_format: LogFormat = Field(default=DEFAULT_LOG_FORMAT, validation_alias="QUERYCODER_LOG_FORMAT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings."""
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path=dotenv_path, override=False)
        return cls()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """返回进程级缓存的 Settings."""
    return Settings.load()


__all__ = ["APP_VERSION", "Settings", "get_settings"]
