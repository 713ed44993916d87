"""querycoder - 系统常量定义.

统一管理错误分类、严重度与错误文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(Enum):
    """日志输出格式."""

    CONSOLE = "console"
    JSON = "json"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    SCHEMA = "schema"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "内部错误"
    VALIDATION_ERROR = "数据验证失败"

    # schema 相关
    SCHEMA_UNEXPECTED_TYPE = "schema 节点类型非法: 只允许嵌套映射或 QueryHandler"
    SCHEMA_ROOT_NOT_MAPPING = "schema 根节点必须是映射"
    SCHEMA_CONDITION_CYCLE = "decode_condition 之间存在循环依赖"

    # handler 参数相关
    HANDLER_QUERY_REQUIRED = "query 不能为空"
    HANDLER_SEPARATOR_INVALID = "separator 不能为空字符串"
    HANDLER_CONDITION_INVALID = "decode_condition 必须是映射"
    HANDLER_ALIASES_INVALID = "aliases 的值必须是字符串"

    # 编解码相关
    ENCODE_DATA_NOT_MAPPING = "encode 的数据必须是映射、pydantic 模型或 dataclass 实例"


class SchemaIssueCode(Enum):
    """非致命 schema 问题代码."""

    UNCONDITIONAL_SHARED_KEY = "unconditional_shared_key"
    DUPLICATE_ALIAS_VALUE = "duplicate_alias_value"
