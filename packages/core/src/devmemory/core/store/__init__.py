"""Dev Memory Core Store -- SQLite 持久化实现

提供工厂函数创建共享同一连接池的 Store 实例组。
"""

from pathlib import Path

from ..config import DEFAULT_POOL_SIZE
from ..exceptions import StoreError
from .interaction_store import SqliteInteractionStore
from .invariant_store import SqliteInvariantStore
from .migrate import run_migrations, scan_migrations
from .pool import ConnectionPool
from .protocols import InteractionStore, InvariantStore, RecordStore, TaskStore
from .record_store import SqliteRecordStore
from .task_store import SqliteTaskStore


class StoreGroup:
    """Store 实例组 -- 共享同一个连接池"""

    def __init__(self, pool: ConnectionPool) -> None:
        self.pool = pool
        self.records: RecordStore = SqliteRecordStore(pool)
        self.task_store: TaskStore = SqliteTaskStore(self.records)
        self.interaction_store: InteractionStore = SqliteInteractionStore(self.records)
        self.invariant_store: InvariantStore = SqliteInvariantStore(self.records)

    async def close(self) -> None:
        await self.pool.close()


async def create_store_group(
    db_path: str,
    pool_size: int = DEFAULT_POOL_SIZE,
    migrations_dir: str | Path | None = None,
) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径
        pool_size: 连接池大小
        migrations_dir: 迁移脚本目录；为 None 时不执行迁移

    Returns:
        StoreGroup 实例

    Raises:
        StoreError: 连接池无法打开或迁移失败
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    try:
        db_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreError(f"cannot create database directory {db_dir}: {e}") from e

    pool = ConnectionPool(db_path, size=pool_size)
    await pool.open()
    store_group = StoreGroup(pool)

    if migrations_dir is not None:
        try:
            await run_migrations(store_group.records, Path(migrations_dir))
        except Exception:
            await pool.close()
            raise

    return store_group


__all__ = [
    "StoreGroup",
    "create_store_group",
    "ConnectionPool",
    "SqliteRecordStore",
    "SqliteTaskStore",
    "SqliteInteractionStore",
    "SqliteInvariantStore",
    "run_migrations",
    "scan_migrations",
]
