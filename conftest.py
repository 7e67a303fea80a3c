"""全局 pytest 配置 -- 临时 SQLite 数据库 + 已迁移的 StoreGroup fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator:
    """提供已执行内置迁移的 StoreGroup"""
    from devmemory.core.config import PACKAGED_MIGRATIONS_DIR
    from devmemory.core.store import create_store_group

    group = await create_store_group(
        str(tmp_db_path),
        pool_size=2,
        migrations_dir=PACKAGED_MIGRATIONS_DIR,
    )
    yield group
    await group.close()
