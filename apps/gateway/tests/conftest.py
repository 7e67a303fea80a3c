"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(store_group):
    """创建测试用 FastAPI app 实例（绕过 lifespan，手动注入 StoreGroup）"""
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from devmemory.gateway.main import create_app

    application = create_app()
    application.state.store_group = store_group
    yield application

    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
