"""集成测试共享 fixture -- 走真实 lifespan 的完整应用"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_db_path(tmp_path: Path, monkeypatch) -> Path:
    """集成测试数据库路径（通过环境变量交给 lifespan）"""
    db_path = tmp_path / "sqlite" / "integration.db"
    monkeypatch.setenv("DEV_MEMORY_DB_PATH", str(db_path))
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.delenv("DEV_MEMORY_MIGRATIONS_DIR", raising=False)
    monkeypatch.delenv("DEV_MEMORY_AUTO_MIGRATE", raising=False)
    return db_path


@pytest_asyncio.fixture
async def integration_app(integration_db_path: Path):
    """集成测试用 FastAPI app（lifespan 负责连接池与迁移）"""
    from devmemory.gateway.main import create_app, lifespan

    app = create_app()
    async with lifespan(app):
        yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
