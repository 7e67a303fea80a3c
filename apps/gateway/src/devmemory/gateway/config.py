"""GatewayConfig -- 网关运行配置

从环境变量加载，取值规则见 devmemory.core.config。
"""

from pathlib import Path

from devmemory.core.config import (
    get_auto_migrate,
    get_db_path,
    get_host,
    get_migrations_dir,
    get_pool_size,
    get_port,
)
from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """网关配置

    环境变量:
        DEV_MEMORY_DB_PATH: SQLite 数据库路径
        DEV_MEMORY_POOL_SIZE: 连接池大小（默认 5）
        DEV_MEMORY_MIGRATIONS_DIR: 迁移脚本目录（默认内置目录）
        DEV_MEMORY_AUTO_MIGRATE: 启动时自动迁移（默认 true）
        DEV_MEMORY_HOST / DEV_MEMORY_PORT: 监听地址（默认 0.0.0.0:3100）
    """

    db_path: str = Field(description="SQLite 数据库路径")
    pool_size: int = Field(default=5, ge=1, description="连接池大小")
    migrations_dir: Path = Field(description="迁移脚本目录")
    auto_migrate: bool = Field(default=True, description="启动时是否回放迁移")
    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=3100, ge=1, le=65535, description="监听端口")


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载网关配置"""
    return GatewayConfig(
        db_path=get_db_path(),
        pool_size=get_pool_size(),
        migrations_dir=get_migrations_dir(),
        auto_migrate=get_auto_migrate(),
        host=get_host(),
        port=get_port(),
    )
