"""QueryHandler 构造参数 schema.

目标:
- 将 handler 参数的默认值/边界处理下沉到 schema 单入口
- 构造阶段即暴露非法参数, 避免在 encode/decode 时才出现难以定位的错误
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import field_validator

from querycoder.constants import ErrorMessages, ValueType
from querycoder.schemas.base import OptionsSchema
from querycoder.schemas.validation import SchemaMessageKeyError


class QueryHandlerParams(OptionsSchema):
    """QueryHandler 构造参数 schema."""

    query: str
    decode_type: ValueType = ValueType.STRING
    decode_condition: dict[str, Any] | None = None
    aliases: dict[Any, str] | None = None
    encodable: bool = True
    decode_empty_value: bool = False
    accept_empty_value: bool = False
    separator: str | None = None

    @field_validator("query", mode="before")
    @classmethod
    def _validate_query(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise SchemaMessageKeyError(ErrorMessages.HANDLER_QUERY_REQUIRED, message_key="HANDLER_QUERY_REQUIRED")
        return value

    @field_validator("decode_condition", mode="before")
    @classmethod
    def _validate_condition(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise SchemaMessageKeyError(
                ErrorMessages.HANDLER_CONDITION_INVALID,
                message_key="HANDLER_CONDITION_INVALID",
            )
        return dict(value)

    @field_validator("aliases", mode="before")
    @classmethod
    def _validate_aliases(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, Mapping) or not all(isinstance(alias, str) for alias in value.values()):
            raise SchemaMessageKeyError(ErrorMessages.HANDLER_ALIASES_INVALID, message_key="HANDLER_ALIASES_INVALID")
        return dict(value)

    @field_validator("separator", mode="before")
    @classmethod
    def _validate_separator(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str) or not value:
            raise SchemaMessageKeyError(
                ErrorMessages.HANDLER_SEPARATOR_INVALID,
                message_key="HANDLER_SEPARATOR_INVALID",
            )
        return value


__all__ = ["QueryHandlerParams"]
