"""Query 字符串转义/解析/序列化工具.

约束:
- 仅保留纯函数, 不依赖 Flask app_context
- 转义规则与浏览器 ``encodeURIComponent`` 保持一致, 便于与前端生成的 URL 互通
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, quote, unquote, urlencode

from werkzeug.datastructures import MultiDict

_URI_COMPONENT_SAFE = "-_.!~*'()"


def escape(text: str) -> str:
    """按 URI component 规则转义单个字符串."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def unescape(text: str) -> str:
    """还原 ``escape`` 的结果."""
    return unquote(text)


def parse_query(text: str) -> MultiDict[str, str]:
    """将原始 query 字符串解析为保序的多值字典.

    Args:
        text: ``a=1&b=2`` 形式的字符串, 允许带前导 ``?``.

    Returns:
        MultiDict: 保留重复 key 与出现顺序, 空值会被保留.

    """
    raw = text[1:] if text.startswith("?") else text
    return MultiDict(parse_qsl(raw, keep_blank_values=True))


def serialize_query(pairs: Mapping[str, str]) -> str:
    """将有序的 key -> value 映射序列化为 query 字符串."""
    return urlencode(list(pairs.items()))


def as_multidict(queryish: str | Mapping[str, Any]) -> MultiDict[str, str]:
    """将多种 query 表示统一为 MultiDict.

    支持原始字符串、``parse_qs`` 风格的映射(值为列表)以及 Flask 的 ``request.args``.

    Raises:
        TypeError: 输入既不是字符串也不是映射.

    """
    if isinstance(queryish, str):
        return parse_query(queryish)
    if isinstance(queryish, MultiDict):
        return queryish
    if not isinstance(queryish, Mapping):
        raise TypeError(f"不支持的 query 类型: {type(queryish).__name__}")

    result: MultiDict[str, str] = MultiDict()
    for key, value in queryish.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            result.add(str(key), str(item))
    return result


__all__ = ["as_multidict", "escape", "parse_query", "serialize_query", "unescape"]
