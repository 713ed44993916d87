"""decode_condition 匹配与嵌套路径读写工具."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from querycoder.types import DataPath, DecodeCondition

_MISSING = object()


def condition_leaf_paths(condition: DecodeCondition, prefix: DataPath = ()) -> list[DataPath]:
    """列出条件中所有叶子字段的相对路径.

    Example:
        >>> condition_leaf_paths({"game": "Wow", "meta": {"season": 3}})
        [('game',), ('meta', 'season')]

    """
    paths: list[DataPath] = []
    for key, expected in condition.items():
        path = (*prefix, str(key))
        if isinstance(expected, Mapping) and expected:
            paths.extend(condition_leaf_paths(expected, path))
        else:
            paths.append(path)
    return paths


def condition_scopes(entry_path: DataPath) -> list[DataPath]:
    """返回条件的求值作用域, 由近及远: 父节点、各级祖先、根."""
    parent = entry_path[:-1]
    return [parent[:depth] for depth in range(len(parent), -1, -1)]


def matches_condition(target: Any, condition: DecodeCondition) -> bool:
    """判断 condition 是否为 target 的深层子集."""
    if not isinstance(target, Mapping):
        return False
    for key, expected in condition.items():
        actual = target.get(key, _MISSING)
        if actual is _MISSING:
            return False
        if isinstance(expected, Mapping):
            if not matches_condition(actual, expected):
                return False
        elif not _values_equal(actual, expected):
            return False
    return True


def get_path(data: Mapping[str, Any], path: DataPath) -> Any:
    """按路径读取嵌套值, 不存在时返回内部哨兵 ``_MISSING``, 可直接交给 matches_condition."""
    current: Any = data
    for segment in path:
        if not isinstance(current, Mapping) or segment not in current:
            return _MISSING
        current = current[segment]
    return current


def set_path(data: dict[str, Any], path: DataPath, value: Any) -> None:
    """按路径写入值, 自动创建中间层字典."""
    current = data
    for segment in path[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child
    current[path[-1]] = value


def _values_equal(actual: Any, expected: Any) -> bool:
    if actual == expected:
        return True
    # 别名解码可能得到 Enum, 条件里则常写原始值
    if isinstance(actual, Enum) and not isinstance(expected, Enum):
        return actual.value == expected
    if isinstance(expected, Enum) and not isinstance(actual, Enum):
        return expected.value == actual
    return False


__all__ = [
    "condition_leaf_paths",
    "condition_scopes",
    "get_path",
    "matches_condition",
    "set_path",
]
