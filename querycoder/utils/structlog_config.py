"""querycoder 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import structlog

from querycoder.constants import LogFormat
from querycoder.settings import APP_VERSION, Settings, get_settings

if TYPE_CHECKING:
    from structlog.typing import BindableLogger

    from querycoder.types import StructlogEventDict

LOGGER_NAMESPACE = "querycoder"


class StructlogConfig:
    """structlog 配置核心类.

    负责组装处理器链并把日志级别同步到标准库 logger.

    Attributes:
        configured: 是否已配置标志.
        settings: 最近一次配置使用的 Settings.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger('querycoder.codec')

    """

    def __init__(self) -> None:
        self.configured = False
        self.settings: Settings | None = None

    def configure(self, settings: Settings | None = None, *, force: bool = False) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            settings: 显式传入的设置, 缺省时读取 ``get_settings()``.
            force: 已配置时是否重新配置, 用于切换日志格式.

        """
        if self.configured and not force:
            return

        resolved = settings or get_settings()
        processors = [
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._add_global_context,
            self._get_renderer(resolved),
        ]
        structlog.configure(
            processors=cast("list[structlog.types.Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # 允许 configure_structlog 切换格式后, 已创建的 logger 立即生效
            cache_logger_on_first_use=False,
        )
        logging.getLogger(LOGGER_NAMESPACE).setLevel(resolved.log_level.value)
        self.settings = resolved
        self.configured = True

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        event_dict.setdefault("library", LOGGER_NAMESPACE)
        event_dict.setdefault("version", APP_VERSION)
        return event_dict

    @staticmethod
    def _get_renderer(settings: Settings) -> structlog.types.Processor:
        if settings.log_format is LogFormat.JSON:
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=False)


structlog_config = StructlogConfig()


def configure_structlog(settings: Settings | None = None) -> None:
    """按 Settings 重新配置 structlog.

    Args:
        settings: 设置对象, 缺省时读取环境变量.

    """
    structlog_config.configure(settings, force=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    只返回惰性代理, 不触发配置; 处理器链由宿主应用或 ``configure_structlog`` 决定.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('querycoder.codec')
        >>> logger.debug('query_coder_built', handler_count=3)

    """
    return structlog.get_logger(name)


__all__ = ["StructlogConfig", "configure_structlog", "get_logger", "structlog_config"]
