"""query 编解码核心."""

from .query_coder import QueryCoder
from .query_handler import QueryHandler
from .schema_tree import HandlerEntry, SchemaBranch, SchemaIssue, SchemaLeaf, build_schema_tree

__all__ = [
    "HandlerEntry",
    "QueryCoder",
    "QueryHandler",
    "SchemaBranch",
    "SchemaIssue",
    "SchemaLeaf",
    "build_schema_tree",
]
