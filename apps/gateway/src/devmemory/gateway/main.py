"""FastAPI 应用主文件

app 创建 + lifespan 管理：连接池初始化、连通性检查、迁移回放、路由注册。
存储不可达时 lifespan 抛 StartupError，进程拒绝对外服务。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from devmemory.core.exceptions import StartupError, StoreError
from devmemory.core.store import create_store_group, run_migrations
from fastapi import FastAPI

from .config import load_gateway_config
from .errors import register_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, interactions, invariants, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时打开连接池并校验连通性，关闭时释放连接"""
    config = load_gateway_config()

    try:
        store_group = await create_store_group(config.db_path, pool_size=config.pool_size)
    except StoreError as e:
        log.error("startup_failed", db_path=config.db_path, error=e.message)
        raise StartupError(f"store unreachable: {e.message}") from e

    try:
        await store_group.records.ping()
        log.info("database_connection_verified", db_path=config.db_path)
        if config.auto_migrate:
            await run_migrations(store_group.records, config.migrations_dir)
    except StoreError as e:
        await store_group.close()
        log.error("startup_failed", db_path=config.db_path, error=e.message)
        raise StartupError(f"store unreachable: {e.message}") from e

    app.state.store_group = store_group
    log.info("dev_memory_started", host=config.host, port=config.port)

    yield

    # 关闭：释放连接池
    await store_group.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Dev Memory API",
        version="0.1.0",
        description="开发任务、AI 交互日志与全局 invariant 的持久化服务",
        lifespan=lifespan,
    )

    # 注册中间件（后注册的在外层：Logging 先清空上下文，Trace 再绑定 task_id）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(interactions.router, tags=["interactions"])
    app.include_router(invariants.router, tags=["invariants"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
