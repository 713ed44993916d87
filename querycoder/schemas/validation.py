"""Schema 校验与错误映射."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from querycoder.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_FALLBACK_MESSAGE = "参数校验失败"


class SchemaMessageKeyError(ValueError):
    """用于从 schema validator 透传 message_key 的错误类型."""

    def __init__(self, message: str, *, message_key: str) -> None:
        super().__init__(message)
        self.message_key = message_key


@dataclass(frozen=True, slots=True)
class _FirstError:
    message: str
    field: str | None = None
    message_key: str | None = None


def validate_or_raise(
    model: type[ModelT],
    payload: object,
    *,
    message_key: str | None = None,
    message_key_by_field: Mapping[str, str] | None = None,
) -> ModelT:
    """执行 schema 校验并抛出项目的 ValidationError.

    Args:
        model: pydantic model.
        payload: 待校验的数据, 例如 QueryHandler 构造参数或 decode 得到的嵌套字典.
        message_key: 默认 message_key, 当无法按字段映射时使用.
        message_key_by_field: 按字段(点分路径)映射 message_key 的字典.

    Raises:
        ValidationError: 只携带第一条错误, ``extra["field"]`` 为出错字段的点分路径.

    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        first = _first_error(exc)
        resolved_key = first.message_key or message_key
        if first.field and message_key_by_field:
            resolved_key = message_key_by_field.get(first.field, resolved_key)
        raise ValidationError(first.message, message_key=resolved_key, extra={"field": first.field}) from None


def _first_error(exc: PydanticValidationError) -> _FirstError:
    errors = exc.errors()
    if not errors:
        return _FirstError(_FALLBACK_MESSAGE)

    first = errors[0]
    loc = first.get("loc") or ()
    # decode 结果是嵌套字典, 字段用点分路径定位, 例如 filters.wow.rating
    field = ".".join(str(part) for part in loc) or None

    raw_error = (first.get("ctx") or {}).get("error")
    if isinstance(raw_error, SchemaMessageKeyError):
        return _FirstError(str(raw_error), field, raw_error.message_key)
    if isinstance(raw_error, BaseException):
        return _FirstError(str(raw_error), field)

    msg = first.get("msg")
    if isinstance(msg, str) and msg.strip():
        return _FirstError(msg, field)
    return _FirstError(_FALLBACK_MESSAGE, field)
