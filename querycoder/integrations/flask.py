"""Flask 集成.

约束:
- 只读取 `request.args`, 不处理 form/JSON body
- 未处于请求上下文时必须显式传入 request
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from flask import Flask, has_request_context, jsonify, request as current_request, url_for
from pydantic import BaseModel

from querycoder.errors import AppError, map_exception_to_status
from querycoder.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from flask import Request
    from flask.typing import ResponseReturnValue

    from querycoder.codec import QueryCoder
    from querycoder.types import JsonDict

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger(__name__)


def _resolve_request(request: Request | None) -> Request:
    if request is not None:
        return request
    if not has_request_context():
        raise RuntimeError("当前不在 Flask 请求上下文中, 请显式传入 request")
    return current_request


def decode_request(coder: QueryCoder[Any], request: Request | None = None) -> JsonDict:
    """解码当前请求的 query 参数."""
    return coder.decode(_resolve_request(request).args)


def decode_request_as(coder: QueryCoder[Any], model: type[ModelT], request: Request | None = None) -> ModelT:
    """解码当前请求的 query 参数并校验为 pydantic 模型.

    Raises:
        ValidationError: 解码结果不满足模型约束, 由 ``init_app`` 注册的处理器转换为 400.

    """
    return coder.decode_as(_resolve_request(request).args, model)


def url_for_query(endpoint: str, coder: QueryCoder[Any], data: Any, **values: Any) -> str:
    """生成携带编码后 query 的 URL.

    Args:
        endpoint: Flask endpoint 名称.
        coder: 用于编码 data 的 QueryCoder.
        data: 待编码的对象.
        **values: 透传给 ``url_for`` 的路由参数.

    Returns:
        str: 例如 ``/runs?game=Wow&dungeon=MistsOfTirnaScithe``; query 为空时不带 ``?``.

    """
    base = url_for(endpoint, **values)
    query = coder.encode(data)
    if not query:
        return base
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{query}"


def init_app(app: Flask) -> None:
    """注册 querycoder 异常处理器, 将 AppError 转为统一 JSON 错误响应."""

    @app.errorhandler(AppError)
    def _handle_app_error(error: AppError) -> ResponseReturnValue:
        status_code = map_exception_to_status(error)
        logger.warning(
            "querycoder_error",
            message_key=error.message_key,
            category=error.category.value,
            status_code=status_code,
            **error.extra,
        )
        payload = {
            "error": True,
            "message": error.message,
            "message_key": error.message_key,
            "recoverable": error.recoverable,
        }
        return jsonify(payload), status_code


__all__ = ["decode_request", "decode_request_as", "init_app", "url_for_query"]
