"""迁移回放测试

测试内容：
1. 只挑选 0 开头的 .sql 文件，按文件名排序
2. 重复回放不报错（幂等约定）
3. 目录不存在时跳过
4. 失败脚本抛 StoreError，之前的脚本已生效
"""

from pathlib import Path

import pytest
from devmemory.core.config import PACKAGED_MIGRATIONS_DIR
from devmemory.core.exceptions import StoreError
from devmemory.core.store import create_store_group, run_migrations, scan_migrations


class TestScanMigrations:
    def test_filters_and_sorts(self, tmp_path: Path):
        for name in ["0002_b.sql", "0001_a.sql", "README.md", "seed.sql", "0003_c.txt"]:
            (tmp_path / name).write_text("-- noop", encoding="utf-8")
        (tmp_path / "0000_dir.sql").mkdir()

        assert [p.name for p in scan_migrations(tmp_path)] == ["0001_a.sql", "0002_b.sql"]

    def test_missing_dir(self, tmp_path: Path):
        assert scan_migrations(tmp_path / "nope") == []

    def test_packaged_migrations_present(self):
        names = [p.name for p in scan_migrations(PACKAGED_MIGRATIONS_DIR)]
        assert names[0] == "0001_create_dev_memory_tables.sql"
        assert names == sorted(names)


class TestRunMigrations:
    async def test_creates_tables(self, store_group):
        rows = await store_group.records.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        tables = {row["name"] for row in rows}
        assert {"development_tasks", "ai_interactions", "foundation_invariants"} <= tables

    async def test_replay_is_idempotent(self, store_group):
        applied = await run_migrations(store_group.records, PACKAGED_MIGRATIONS_DIR)
        assert applied == [p.name for p in scan_migrations(PACKAGED_MIGRATIONS_DIR)]

    async def test_failure_stops_replay(self, tmp_path: Path):
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "0001_ok.sql").write_text(
            "CREATE TABLE IF NOT EXISTS t1 (id TEXT);", encoding="utf-8"
        )
        (migrations_dir / "0002_broken.sql").write_text("CREATE TABL oops;", encoding="utf-8")
        (migrations_dir / "0003_never.sql").write_text(
            "CREATE TABLE IF NOT EXISTS t3 (id TEXT);", encoding="utf-8"
        )

        group = await create_store_group(str(tmp_path / "m.db"), pool_size=1)
        try:
            with pytest.raises(StoreError):
                await run_migrations(group.records, migrations_dir)
            rows = await group.records.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
            tables = {row["name"] for row in rows}
            assert "t1" in tables
            assert "t3" not in tables
        finally:
            await group.close()
