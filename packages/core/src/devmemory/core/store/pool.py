"""SQLite 连接池 -- SQLAlchemy AsyncEngine（aiosqlite 驱动）

连接由 AsyncAdaptedQueuePool 管理，上限为 size，不允许溢出；
每个新建连接通过 connect 事件设置 PRAGMA。
借出的连接只服务于一次语句执行，正常退出提交、异常退出回滚。
池关闭后：新的借用立即抛 StoreError；关闭前已在排队的借用者
拿到连接后同样抛 StoreError；关闭时仍被借出的连接在归还时失效。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from ..config import DEFAULT_POOL_SIZE
from ..exceptions import StoreError

log = structlog.get_logger()

POOL_CLOSED_MESSAGE = "connection pool is closed"

_PRAGMAS = [
    "PRAGMA journal_mode = WAL",
    "PRAGMA foreign_keys = ON",
    "PRAGMA busy_timeout = 5000",
]


def store_error_from(exc: SQLAlchemyError) -> StoreError:
    """将 SQLAlchemy 异常转换为 StoreError，保留驱动层原始信息"""
    orig = getattr(exc, "orig", None)
    return StoreError(str(orig) if orig is not None else str(exc))


def _apply_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    for pragma in _PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


class ConnectionPool:
    """aiosqlite 连接池"""

    def __init__(
        self,
        db_path: str,
        size: int = DEFAULT_POOL_SIZE,
        timeout: float = 30.0,
    ) -> None:
        if size < 1:
            raise ValueError("pool size must be >= 1")
        self._db_path = db_path
        self._size = size
        self._timeout = timeout
        self._engine: AsyncEngine | None = None
        self._closed = True

    @property
    def size(self) -> int:
        return self._size

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self) -> None:
        """创建引擎并建立首个连接，确认数据库文件可打开"""
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{self._db_path}",
            poolclass=AsyncAdaptedQueuePool,
            pool_size=self._size,
            max_overflow=0,
            pool_timeout=self._timeout,
            pool_pre_ping=True,
        )
        event.listen(engine.sync_engine, "connect", _apply_pragmas)

        try:
            async with engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
        except SQLAlchemyError as e:
            await engine.dispose()
            raise store_error_from(e) from e

        self._engine = engine
        self._closed = False
        log.info("connection_pool_opened", db_path=self._db_path, size=self._size)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """借出一个连接并开启事务，退出时提交或回滚后归还"""
        if self._closed or self._engine is None:
            raise StoreError(POOL_CLOSED_MESSAGE)

        try:
            async with self._engine.connect() as conn:
                try:
                    # 排队期间池已关闭
                    if self._closed:
                        raise StoreError(POOL_CLOSED_MESSAGE)
                    async with conn.begin():
                        yield conn
                finally:
                    if self._closed:
                        await conn.invalidate()
        except SQLAlchemyError as e:
            raise store_error_from(e) from e

    async def close(self) -> None:
        """释放引擎持有的全部空闲连接；借出中的连接在归还时失效"""
        if self._engine is None:
            self._closed = True
            return
        engine, self._engine = self._engine, None
        self._closed = True
        await engine.dispose()
        log.info("connection_pool_closed", db_path=self._db_path)
