"""Record Store 适配层 -- 参数化语句执行

execute(statement, parameters) -> 行列表，或抛 StoreError。
语句以驱动原生的 `?` 占位符绑定参数（exec_driver_sql）。
不重试、不重连；底层错误信息原样保留在 StoreError.message 中。
"""

from collections.abc import Sequence
from typing import Any

import aiosqlite
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import StoreError
from .pool import ConnectionPool, store_error_from


class SqliteRecordStore:
    """RecordStore 的 SQLite 实现"""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    async def execute(
        self,
        statement: str,
        parameters: Sequence[Any] = (),
    ) -> list[dict[str, Any]]:
        """执行单条语句并提交

        只允许 `?` 占位符绑定参数。结果行在事务提交前取完，
        以支持 INSERT/UPDATE ... RETURNING；失败时事务回滚。
        """
        async with self._pool.connection() as conn:
            try:
                result = await conn.exec_driver_sql(statement, tuple(parameters))
                rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
            except SQLAlchemyError as e:
                raise store_error_from(e) from e
        return rows

    async def execute_script(self, script: str) -> None:
        """执行多语句 SQL 脚本（迁移用），直接交给 aiosqlite 的 executescript"""
        async with self._pool.connection() as conn:
            raw = await conn.get_raw_connection()
            try:
                await raw.driver_connection.executescript(script)
            except aiosqlite.Error as e:
                raise StoreError(str(e)) from e

    async def ping(self) -> None:
        """连通性检查，失败抛 StoreError"""
        await self.execute("SELECT 1")
