"""常量模块.

集中管理值类型、错误分类与错误消息等常量.

主要常量:
- ValueType: 字段解码类型
- DEFAULT_SEPARATOR: 数组默认分隔符
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogFormat,
    LogLevel,
    SchemaIssueCode,
)
from .value_types import DEFAULT_SEPARATOR, ValueType

__all__ = [
    "DEFAULT_SEPARATOR",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpStatus",
    "LogFormat",
    "LogLevel",
    "SchemaIssueCode",
    "ValueType",
]
