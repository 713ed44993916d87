"""Schema 树的分类与 handler 索引.

约束:
- schema 树只允许两种节点: 嵌套映射(分支)与 QueryHandler(叶子)
- 分类在构造时一次完成, 任何其他类型的值都会立即抛出 SchemaError
- 叶子路径记录在索引条目上, 不回写到 handler 对象
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from querycoder.codec.query_handler import QueryHandler
from querycoder.constants import ErrorMessages, SchemaIssueCode
from querycoder.errors import SchemaError

if TYPE_CHECKING:
    from querycoder.types import DataPath


@dataclass(frozen=True, slots=True)
class SchemaLeaf:
    """叶子节点: 路径 + handler."""

    path: DataPath
    handler: QueryHandler


@dataclass(frozen=True, slots=True)
class SchemaBranch:
    """分支节点: 保序的子节点映射."""

    path: DataPath
    children: Mapping[str, SchemaNode] = field(default_factory=dict)


SchemaNode: TypeAlias = SchemaLeaf | SchemaBranch


@dataclass(frozen=True, slots=True)
class HandlerEntry:
    """handler 索引条目, 路径在 coder 生命周期内固定."""

    path: DataPath
    handler: QueryHandler

    @property
    def query(self) -> str:
        return self.handler.query

    @property
    def dotted_path(self) -> str:
        """点分路径, 例如 ``filter.wow.dungeon``."""
        return ".".join(self.path)


@dataclass(frozen=True, slots=True)
class SchemaIssue:
    """非致命的 schema 问题, 由 QueryCoder.issues 返回给调用方."""

    code: SchemaIssueCode
    query: str
    path: str
    detail: str = ""


HandlerIndex: TypeAlias = Mapping[str, tuple[HandlerEntry, ...]]


def build_schema_tree(schema: Any) -> SchemaBranch:
    """将调用方的嵌套字面量分类为 SchemaBranch/SchemaLeaf.

    Args:
        schema: 调用方编写的 schema 树, 根必须是映射.

    Returns:
        SchemaBranch: 根分支.

    Raises:
        SchemaError: 根不是映射, 或任一节点既不是映射也不是 QueryHandler.

    """
    if not isinstance(schema, Mapping):
        raise SchemaError(
            message_key="SCHEMA_ROOT_NOT_MAPPING",
            extra={"value_type": type(schema).__name__},
        )
    return _build_branch(schema, ())


def _build_branch(node: Mapping[Any, Any], path: DataPath) -> SchemaBranch:
    children: dict[str, SchemaNode] = {}
    for raw_key, value in node.items():
        key = str(raw_key)
        child_path = (*path, key)
        if isinstance(value, QueryHandler):
            children[key] = SchemaLeaf(path=child_path, handler=value)
        elif isinstance(value, Mapping):
            children[key] = _build_branch(value, child_path)
        else:
            raise SchemaError(
                ErrorMessages.SCHEMA_UNEXPECTED_TYPE,
                message_key="SCHEMA_UNEXPECTED_TYPE",
                extra={"path": ".".join(child_path), "value_type": type(value).__name__},
            )
    return SchemaBranch(path=path, children=MappingProxyType(children))


def iter_leaves(branch: SchemaBranch):
    """按深度优先顺序遍历所有叶子."""
    for child in branch.children.values():
        if isinstance(child, SchemaLeaf):
            yield child
        else:
            yield from iter_leaves(child)


def build_handler_index(root: SchemaBranch) -> HandlerIndex:
    """构建 query key -> 有序 HandlerEntry 元组的索引, 顺序即深度优先遍历顺序."""
    buckets: dict[str, list[HandlerEntry]] = {}
    for leaf in iter_leaves(root):
        buckets.setdefault(leaf.handler.query, []).append(HandlerEntry(path=leaf.path, handler=leaf.handler))
    return MappingProxyType({query: tuple(entries) for query, entries in buckets.items()})


def collect_schema_issues(index: HandlerIndex) -> tuple[SchemaIssue, ...]:
    """收集不会阻止构造、但会影响 decode 确定性的问题."""
    issues: list[SchemaIssue] = []
    seen_handlers: set[int] = set()
    for query, entries in index.items():
        if len(entries) > 1:
            issues.extend(
                SchemaIssue(
                    code=SchemaIssueCode.UNCONDITIONAL_SHARED_KEY,
                    query=query,
                    path=entry.dotted_path,
                    detail=f"{len(entries)} 个 handler 共用该 query",
                )
                for entry in entries
                if entry.handler.decode_condition is None
            )
        for entry in entries:
            handler = entry.handler
            if id(handler) in seen_handlers:
                continue
            seen_handlers.add(id(handler))
            issues.extend(
                SchemaIssue(
                    code=SchemaIssueCode.DUPLICATE_ALIAS_VALUE,
                    query=query,
                    path=entry.dotted_path,
                    detail=wire,
                )
                for wire in handler.duplicate_alias_values
            )
    return tuple(issues)


__all__ = [
    "HandlerEntry",
    "HandlerIndex",
    "SchemaBranch",
    "SchemaIssue",
    "SchemaLeaf",
    "SchemaNode",
    "build_handler_index",
    "build_schema_tree",
    "collect_schema_issues",
    "iter_leaves",
]
