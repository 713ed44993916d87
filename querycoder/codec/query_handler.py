"""单个 query 字段的编码/解码规则."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from querycoder.constants import DEFAULT_SEPARATOR, ValueType
from querycoder.schemas import QueryHandlerParams, validate_or_raise
from querycoder.utils.query_string import as_multidict, escape, unescape

if TYPE_CHECKING:
    from querycoder.types import AliasKey, AliasTable, DecodeCondition, DecodedValue

_ALIAS_PRIMITIVES = (str, int, float, Enum)

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_NUMBER = re.compile(r"0([xXoObB])([0-9a-fA-F]+)", re.ASCII)
_RADIX = {"x": 16, "o": 8, "b": 2}
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


class QueryHandler:
    """schema 树的叶子, 负责一个字段在 query 中的表示.

    Attributes:
        query: query 中的字段名, 不要求在整棵 schema 树中唯一.
            ``{"game_title": QueryHandler(query="g")}`` 编码为 ``g=Wow``, 解码后仍写回 ``game_title``.
        type: 解码目标类型, query 中的 "123" 只有声明为 NUMBER 才会解码成数字.
        decode_condition: 多个 handler 共用同一个 query 时用于选择 handler 的条件.
            例如魔兽与失落方舟的副本都写成 ``dungeon``, 分别以 ``{"game": "Wow"}``、
            ``{"game": "LostArk"}`` 区分.
        aliases: 逻辑值到 query 值的映射, ``{"WowMythicPlus": "mplus"}`` 编码为 ``mode=mplus``.
        reverse_aliases: 构造时预先生成的反向映射, wire 值重复时以最后声明的为准.
        encodable: 为 False 时 encode 阶段跳过该字段, decode 不受影响.
        separator: 数组元素分隔符, 缺省使用 ``DEFAULT_SEPARATOR``.
        decode_empty_value: 空字符串是否按类型解码而不是视为缺失.
        accept_empty_value: 仅凭 key 出现即表达取值(布尔开关), 编码真值时输出空字符串.

    """

    def __init__(
        self,
        *,
        query: str,
        decode_type: ValueType = ValueType.STRING,
        decode_condition: DecodeCondition | None = None,
        aliases: AliasTable | None = None,
        encodable: bool = True,
        decode_empty_value: bool = False,
        accept_empty_value: bool = False,
        separator: str | None = None,
    ) -> None:
        params = validate_or_raise(
            QueryHandlerParams,
            {
                "query": query,
                "decode_type": decode_type,
                "decode_condition": decode_condition,
                "aliases": aliases,
                "encodable": encodable,
                "decode_empty_value": decode_empty_value,
                "accept_empty_value": accept_empty_value,
                "separator": separator,
            },
        )
        self.query = params.query
        self.type = params.decode_type
        self.decode_condition = params.decode_condition
        self.encodable = params.encodable
        self.decode_empty_value = params.decode_empty_value
        self.accept_empty_value = params.accept_empty_value
        self.separator = params.separator
        self.aliases = params.aliases
        self.reverse_aliases: dict[str, AliasKey] | None = None
        self.duplicate_alias_values: tuple[str, ...] = ()
        if self.aliases is not None:
            self.reverse_aliases, self.duplicate_alias_values = self._reverse_map(self.aliases)

    def __repr__(self) -> str:
        return f"QueryHandler(query={self.query!r}, type={self.type.value}, condition={self.decode_condition!r})"

    @property
    def effective_separator(self) -> str:
        return self.separator or DEFAULT_SEPARATOR

    def clone(self, decode_condition: DecodeCondition | None) -> QueryHandler:
        """复制 handler 并替换 decode_condition.

        用于让多个 handler 共享同一个 query, 在不同条件下生效.
        """
        return QueryHandler(
            query=self.query,
            decode_type=self.type,
            decode_condition=decode_condition,
            aliases=self.aliases,
            encodable=self.encodable,
            decode_empty_value=self.decode_empty_value,
            accept_empty_value=self.accept_empty_value,
            separator=self.separator,
        )

    def encode(self, value: Any) -> str:
        """将字段值编码为 query 值, 按需应用别名."""
        if value and self.accept_empty_value:
            return ""

        if self.aliases is not None and isinstance(value, _ALIAS_PRIMITIVES):
            alias = self.aliases.get(value)
            return escape(alias or _stringify(value))

        if isinstance(value, (list, tuple)):
            return self.effective_separator.join(escape(_stringify(item)) for item in value)

        return escape(_stringify(value))

    def decode(self, raw: str) -> DecodedValue:
        """将 query 值(如 ``Dungeon%231``)解码为字段值.

        Returns:
            解码结果; 空值未被接受或别名未命中时返回 None, 表示字段缺失.

        """
        data_str = unescape(raw)

        if data_str == "" and not self.decode_empty_value and not self.accept_empty_value:
            return None

        if self.reverse_aliases is not None:
            return self.reverse_aliases.get(data_str)

        if self.type is ValueType.BOOLEAN:
            if self.accept_empty_value:
                return True
            # 非空字符串一律为真, "false" 也会解码为 True
            return bool(data_str)
        if self.type is ValueType.NUMBER:
            return _parse_number(data_str)
        if self.type is ValueType.ARRAY:
            # 元素各自转义过, 先按原始值切分, 元素内的分隔符保持为 %2C 之类的转义形式
            return [unescape(item) for item in raw.split(self.effective_separator)]
        return data_str

    def get_from_query(self, queryish: str | Mapping[str, Any]) -> DecodedValue:
        """从原始 query 中取出本字段并解码, 字段不存在时返回 None."""
        params = as_multidict(queryish)
        raw = params.get(self.query)
        if raw is None:
            return None
        return self.decode(raw)

    @staticmethod
    def _reverse_map(aliases: AliasTable) -> tuple[dict[str, AliasKey], tuple[str, ...]]:
        reverse: dict[str, AliasKey] = {}
        duplicates: list[str] = []
        for logical, wire in aliases.items():
            if wire in reverse and wire not in duplicates:
                duplicates.append(wire)
            reverse[wire] = logical
        return reverse, tuple(duplicates)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _stringify(value.value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def _parse_number(text: str) -> int | float:
    """按 URL 生成方的数字语法解析: 十进制、0x/0o/0b 前缀与 Infinity, 其余为 NaN."""
    stripped = text.strip()
    if not stripped:
        return 0
    if stripped in _INFINITY:
        return _INFINITY[stripped]

    prefixed = _PREFIXED_NUMBER.fullmatch(stripped)
    if prefixed is not None:
        try:
            return int(prefixed.group(2), _RADIX[prefixed.group(1).lower()])
        except ValueError:
            return math.nan

    # int()/float() 还接受 "1_000"、"inf" 与非 ASCII 数字, 这里一律不视为数字
    if _INTEGER.fullmatch(stripped):
        return int(stripped, 10)
    if _DECIMAL.fullmatch(stripped):
        return float(stripped)
    return math.nan


__all__ = ["QueryHandler"]
