"""querycoder - 嵌套对象与 URL query 字符串的双向编解码.

用法:
    >>> coder = QueryCoder({"game": QueryHandler(query="g")})
    >>> coder.encode({"game": "Wow"})
    'g=Wow'
    >>> coder.decode("g=Wow")
    {'game': 'Wow'}
"""

from querycoder.codec import HandlerEntry, QueryCoder, QueryHandler, SchemaIssue
from querycoder.constants import DEFAULT_SEPARATOR, ValueType
from querycoder.errors import AppError, SchemaError, ValidationError
from querycoder.settings import APP_VERSION
from querycoder.utils.structlog_config import configure_structlog

__version__ = APP_VERSION

__all__ = [
    "DEFAULT_SEPARATOR",
    "AppError",
    "HandlerEntry",
    "QueryCoder",
    "QueryHandler",
    "SchemaError",
    "SchemaIssue",
    "ValidationError",
    "ValueType",
    "configure_structlog",
    "__version__",
]
