"""嵌套对象与 query 字符串之间的双向编解码.

说明:
- encode 沿 schema 树与数据同步遍历, 只输出两者都存在的字段
- decode 通过 query key -> handler 索引还原嵌套对象
- 多个 handler 共用同一 query key 时, 按 decode_condition 选择, 条件引用的判别字段总是先解码
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from querycoder.codec.schema_tree import (
    HandlerEntry,
    HandlerIndex,
    SchemaBranch,
    SchemaIssue,
    build_handler_index,
    build_schema_tree,
    collect_schema_issues,
)
from querycoder.constants import ErrorMessages
from querycoder.errors import SchemaError, ValidationError
from querycoder.schemas import validate_or_raise
from querycoder.utils.conditions import condition_leaf_paths, condition_scopes, get_path, matches_condition, set_path
from querycoder.utils.query_string import as_multidict, serialize_query
from querycoder.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from querycoder.codec.query_handler import QueryHandler
    from querycoder.types import JsonDict, QueryPairs

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger(__name__)


class QueryCoder(Generic[ModelT]):
    """按 schema 树编解码 query 字符串.

    Args:
        schema: 与数据对象同形的嵌套映射, 叶子为 QueryHandler.
        model: 可选的 pydantic 模型, 提供后 ``decode_model`` 会返回该模型实例.

    Raises:
        SchemaError: schema 含非法节点, 或 decode_condition 之间存在循环依赖.

    Example:
        >>> coder = QueryCoder({"game": QueryHandler(query="game")})
        >>> coder.encode({"game": "Wow"})
        'game=Wow'

    """

    def __init__(self, schema: Mapping[str, Any], model: type[ModelT] | None = None) -> None:
        self._schema = build_schema_tree(schema)
        self._index = build_handler_index(self._schema)
        self._decode_order = _resolve_decode_order(self._index)
        self._issues = collect_schema_issues(self._index)
        self._model = model
        logger.debug(
            "query_coder_built",
            query_keys=len(self._index),
            handlers=sum(len(entries) for entries in self._index.values()),
            issues=len(self._issues),
        )

    @property
    def schema(self) -> SchemaBranch:
        return self._schema

    @property
    def handlers(self) -> Mapping[str, tuple[QueryHandler, ...]]:
        """query key -> 共用该 key 的 handler, 顺序为深度优先遍历顺序."""
        return MappingProxyType(
            {query: tuple(entry.handler for entry in entries) for query, entries in self._index.items()},
        )

    @property
    def decode_order(self) -> tuple[str, ...]:
        return self._decode_order

    @property
    def issues(self) -> tuple[SchemaIssue, ...]:
        return self._issues

    def entries(self, query: str) -> tuple[HandlerEntry, ...]:
        return self._index.get(query, ())

    def encode(self, data: Any) -> str:
        """将对象编码为 query 字符串.

        Args:
            data: 映射、pydantic 模型或 dataclass 实例.

        Returns:
            str: ``a=1&b=2`` 形式的 query 字符串, 不带前导 ``?``.

        """
        return serialize_query(self.encode_pairs(data))

    def encode_pairs(self, data: Any) -> QueryPairs:
        """将对象编码为有序的 query key -> 已转义值映射."""
        mapping = _as_mapping(data)
        if mapping is None:
            raise ValidationError(
                ErrorMessages.ENCODE_DATA_NOT_MAPPING,
                extra={"value_type": type(data).__name__},
            )
        pairs: QueryPairs = {}
        self._deep_encode(mapping, self._schema, pairs)
        return pairs

    def decode(self, query: str | Mapping[str, Any]) -> JsonDict:
        """将 query 还原为嵌套字典.

        Args:
            query: 原始 query 字符串、``parse_qs`` 风格映射或 ``request.args``.

        Returns:
            dict: 只包含成功解码的字段; 未知 key、未命中条件的 key 与空值都会被忽略.

        """
        params = as_multidict(query)
        result: JsonDict = {}
        for query_key in self._decode_order:
            raw = params.get(query_key)
            if raw is None:
                continue
            entry = self._select_entry(query_key, result)
            if entry is None:
                logger.debug("query_key_unresolved", query_key=query_key, candidates=len(self._index[query_key]))
                continue
            value = entry.handler.decode(raw)
            if value is None:
                continue
            set_path(result, entry.path, value)

        ignored = [key for key in params if key not in self._index]
        if ignored:
            logger.debug("query_keys_ignored", query_keys=ignored)
        return result

    def decode_as(self, query: str | Mapping[str, Any], model: type[ModelT]) -> ModelT:
        """解码并校验为指定 pydantic 模型.

        Raises:
            ValidationError: 解码结果不满足模型约束.

        """
        return validate_or_raise(model, self.decode(query))

    def decode_model(self, query: str | Mapping[str, Any]) -> ModelT:
        """使用构造时绑定的模型解码."""
        if self._model is None:
            raise ValidationError("QueryCoder 未绑定模型, 请改用 decode_as")
        return self.decode_as(query, self._model)

    def _deep_encode(self, data: Mapping[str, Any], branch: SchemaBranch, pairs: QueryPairs) -> None:
        for key, value in data.items():
            node = branch.children.get(str(key))
            if node is None or value is None:
                continue

            # 分支节点: 继续向下
            if isinstance(node, SchemaBranch):
                nested = _as_mapping(value)
                if nested is None:
                    logger.debug(
                        "encode_branch_value_skipped",
                        path=".".join(node.path),
                        value_type=type(value).__name__,
                    )
                    continue
                self._deep_encode(nested, node, pairs)
                continue

            handler = node.handler
            if not handler.encodable:
                continue
            pairs[handler.query] = handler.encode(value)

    def _select_entry(self, query_key: str, result: Mapping[str, Any]) -> HandlerEntry | None:
        entries = self._index[query_key]
        if len(entries) == 1:
            return entries[0]

        # 作用域由近及远逐层比较, 同一层内按索引顺序
        scoped = [
            (entry, condition_scopes(entry.path))
            for entry in entries
            if entry.handler.decode_condition is not None
        ]
        depth = max((len(scopes) for _, scopes in scoped), default=0)
        for distance in range(depth):
            for entry, scopes in scoped:
                if distance < len(scopes) and matches_condition(
                    get_path(result, scopes[distance]),
                    entry.handler.decode_condition,
                ):
                    return entry
        # 无条件的 handler 只在所有条件都未命中时兜底
        return next((entry for entry in entries if entry.handler.decode_condition is None), None)


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return None


def _resolve_decode_order(index: HandlerIndex) -> tuple[str, ...]:
    """按条件依赖对 query key 做拓扑排序, 同层保持索引顺序.

    共用 query key 的 handler 才会参与条件选择, 其条件中每个叶子字段
    在各作用域下对应的索引条目都视为依赖, 依赖的 query key 必须先解码.
    """
    path_to_query = {entry.path: query for query, entries in index.items() for entry in entries}
    dependencies: dict[str, set[str]] = {query: set() for query in index}
    for query, entries in index.items():
        if len(entries) < 2:
            continue
        for entry in entries:
            condition = entry.handler.decode_condition
            if not condition:
                continue
            for leaf in condition_leaf_paths(condition):
                for scope in condition_scopes(entry.path):
                    dependency = path_to_query.get((*scope, *leaf))
                    if dependency is not None and dependency != query:
                        dependencies[query].add(dependency)

    order: list[str] = []
    emitted: set[str] = set()
    remaining = list(index)
    while remaining:
        ready = next((query for query in remaining if dependencies[query] <= emitted), None)
        if ready is None:
            raise SchemaError(
                message_key="SCHEMA_CONDITION_CYCLE",
                extra={"query_keys": list(remaining)},
            )
        order.append(ready)
        emitted.add(ready)
        remaining.remove(ready)
    return tuple(order)


__all__ = ["QueryCoder"]
