"""字段值类型与数组分隔符常量."""

from enum import Enum

# 数组元素在 query 中的默认分隔符, 元素本身经过转义后不会包含未转义的逗号
DEFAULT_SEPARATOR = ","


class ValueType(Enum):
    """QueryHandler 的解码目标类型.

    query 中的 "123" 本身无法区分字符串与数字, 需要显式声明 NUMBER 才会解码为 123.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
