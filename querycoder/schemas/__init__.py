"""构造参数 schema 与校验入口."""

from .handler_params import QueryHandlerParams
from .validation import SchemaMessageKeyError, validate_or_raise

__all__ = ["QueryHandlerParams", "SchemaMessageKeyError", "validate_or_raise"]
