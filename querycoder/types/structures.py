"""通用结构化数据类型别名.

统一 query/JSON 风格的类型,方便在 codec、工具函数等模块中共享定义,避免重复声明.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from enum import Enum
from typing import TypeAlias

ScalarValue: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = ScalarValue | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
JsonDict: TypeAlias = dict[str, JsonValue]
StructlogEventDict: TypeAlias = MutableMapping[str, JsonValue]
LoggerExtra: TypeAlias = Mapping[str, JsonValue]

# 可以参与别名查找的原始值
AliasKey: TypeAlias = str | int | float | Enum
AliasTable: TypeAlias = Mapping[AliasKey, str]

# QueryHandler 能够解码出的值
DecodedValue: TypeAlias = str | int | float | bool | list[str] | AliasKey | None

# 条件是嵌套映射, 叶子为待比较的值
ConditionValue: TypeAlias = ScalarValue | Enum | Mapping[str, "ConditionValue"]
DecodeCondition: TypeAlias = Mapping[str, ConditionValue]

# 数据路径, 例如 ("filter", "wow", "dungeon")
DataPath: TypeAlias = tuple[str, ...]

# 编码结果: query key -> 已转义的值
QueryPairs: TypeAlias = dict[str, str]
