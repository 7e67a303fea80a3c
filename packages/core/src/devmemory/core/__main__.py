"""CLI 入口模块 -- python -m devmemory.core <command>

支持的命令：
  migrate                     按文件名顺序回放迁移脚本
  seed-invariants <file>      从 JSON 数组文件写入 invariant（按 id 覆盖）
"""

import asyncio
import json
import sys
from pathlib import Path

from .config import get_db_path, get_migrations_dir, get_pool_size

_USAGE = """用法: python -m devmemory.core <command>
命令:
  migrate                     按文件名顺序回放迁移脚本
  seed-invariants <file>      从 JSON 数组文件写入 invariant"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "migrate":
        asyncio.run(migrate())
    elif command == "seed-invariants":
        if len(sys.argv) < 3:
            print("用法: python -m devmemory.core seed-invariants <file>")
            sys.exit(1)
        asyncio.run(seed_invariants(Path(sys.argv[2])))
    else:
        print(f"未知命令: {command}")
        print("可用命令: migrate, seed-invariants")
        sys.exit(1)


async def migrate() -> None:
    """执行迁移回放"""
    from .store import create_store_group, run_migrations

    db_path = get_db_path()
    migrations_dir = get_migrations_dir()

    print(f"数据库路径: {db_path}")
    print(f"迁移目录: {migrations_dir}")

    store_group = await create_store_group(db_path, pool_size=1)
    try:
        applied = await run_migrations(store_group.records, migrations_dir)
        for name in applied:
            print(f"已执行: {name}")
        print(f"迁移完成，共 {len(applied)} 个脚本")
    finally:
        await store_group.close()


async def seed_invariants(path: Path) -> int:
    """从 JSON 文件写入 invariant

    文件内容为对象数组，字段同 Invariant 模型。

    Returns:
        写入条数
    """
    from .models import Invariant
    from .store import create_store_group

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} 必须是 JSON 数组")
    invariants = [Invariant.model_validate(item) for item in data]

    store_group = await create_store_group(
        get_db_path(),
        pool_size=get_pool_size(),
        migrations_dir=get_migrations_dir(),
    )
    try:
        for invariant in invariants:
            await store_group.invariant_store.upsert_invariant(invariant)
        print(f"已写入 {len(invariants)} 条 invariant")
    finally:
        await store_group.close()

    return len(invariants)


if __name__ == "__main__":
    main()
