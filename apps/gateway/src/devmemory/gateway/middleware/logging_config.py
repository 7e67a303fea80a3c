"""structlog 配置模块

服务日志与第三方库（uvicorn / SQLAlchemy / aiosqlite）的标准库日志
走同一个 ProcessorFormatter，输出格式由 DEV_MEMORY_LOG_FORMAT 决定。
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE 环境变量控制，false 时只输出本地日志。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 第三方库默认级别：只保留告警，避免逐条 SQL / 逐个请求刷屏
_LIBRARY_LOG_LEVELS = {
    "aiosqlite": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() in ("1", "true", "yes")


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def configure_library_loggers() -> None:
    """收敛第三方库日志级别

    DEV_MEMORY_SQL_ECHO=true 时把 sqlalchemy.engine 调到 INFO，输出执行的 SQL。
    """
    for name, level in _LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    if _env_flag("DEV_MEMORY_SQL_ECHO"):
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def setup_logging() -> None:
    """初始化 structlog 配置

    DEV_MEMORY_LOG_FORMAT: "json" 结构化输出，"dev"（默认）可读输出
    DEV_MEMORY_LOG_LEVEL: 根日志级别（默认 INFO）
    """
    log_format = os.environ.get("DEV_MEMORY_LOG_FORMAT", "dev")
    log_level = os.environ.get("DEV_MEMORY_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    configure_library_loggers()


def setup_logfire(app: FastAPI) -> None:
    """Logfire 可选初始化（LOGFIRE_SEND_TO_LOGFIRE=true 时启用，需要 LOGFIRE_TOKEN）"""
    if not _env_flag("LOGFIRE_SEND_TO_LOGFIRE"):
        return

    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
    except Exception as e:
        # APM 不可用不影响请求处理
        structlog.get_logger().warning("logfire_init_failed", error=str(e))
