"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、连接池大小、迁移目录、监听地址等可配置项。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()

# 默认监听端口
DEFAULT_PORT: int = 3100

# 默认连接池大小
DEFAULT_POOL_SIZE: int = 5

# 内置迁移脚本目录
PACKAGED_MIGRATIONS_DIR: Path = Path(__file__).resolve().parent / "store" / "migrations"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("DEV_MEMORY_DATA_DIR", "data"))


def _get_int(env_var: str, default: int) -> int:
    """读取整数环境变量，非法值记录告警后回退默认值"""
    val = os.environ.get(env_var)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        log.warning("invalid_int_config", env_var=env_var, value=val, fallback=default)
        return default


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "DEV_MEMORY_DB_PATH",
        str(_get_base_dir() / "sqlite" / "dev_memory.db"),
    )


def get_pool_size() -> int:
    """获取连接池大小（最小为 1）"""
    return max(1, _get_int("DEV_MEMORY_POOL_SIZE", DEFAULT_POOL_SIZE))


def get_migrations_dir() -> Path:
    """获取迁移脚本目录"""
    override = os.environ.get("DEV_MEMORY_MIGRATIONS_DIR")
    return Path(override) if override else PACKAGED_MIGRATIONS_DIR


def get_auto_migrate() -> bool:
    """启动时是否自动执行迁移"""
    return os.environ.get("DEV_MEMORY_AUTO_MIGRATE", "true").lower() in ("1", "true", "yes")


def get_host() -> str:
    """获取监听地址"""
    return os.environ.get("DEV_MEMORY_HOST", "0.0.0.0")


def get_port() -> int:
    """获取监听端口"""
    return _get_int("DEV_MEMORY_PORT", DEFAULT_PORT)
