"""querycoder 类型定义."""

from .structures import (
    AliasKey,
    AliasTable,
    ConditionValue,
    DataPath,
    DecodeCondition,
    DecodedValue,
    JsonDict,
    JsonValue,
    LoggerExtra,
    QueryPairs,
    ScalarValue,
    StructlogEventDict,
)

__all__ = [
    "AliasKey",
    "AliasTable",
    "ConditionValue",
    "DataPath",
    "DecodeCondition",
    "DecodedValue",
    "JsonDict",
    "JsonValue",
    "LoggerExtra",
    "QueryPairs",
    "ScalarValue",
    "StructlogEventDict",
]
