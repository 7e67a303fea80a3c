"""SQL 迁移回放

扫描迁移目录中以 "0" 开头、".sql" 结尾的文件，按文件名排序依次执行。
线性回放：无版本表、无回滚、无校验和；脚本自身需保证可重复执行
（CREATE ... IF NOT EXISTS）。
"""

from pathlib import Path

import structlog

from .protocols import RecordStore

log = structlog.get_logger()


def scan_migrations(migrations_dir: Path) -> list[Path]:
    """按文件名顺序返回迁移脚本列表，目录不存在时返回空列表"""
    if not migrations_dir.is_dir():
        log.warning("migrations_dir_missing", path=str(migrations_dir))
        return []

    return sorted(
        (
            path
            for path in migrations_dir.iterdir()
            if path.is_file() and path.suffix == ".sql" and path.name.startswith("0")
        ),
        key=lambda path: path.name,
    )


async def run_migrations(records: RecordStore, migrations_dir: Path) -> list[str]:
    """依次执行全部迁移脚本

    Args:
        records: RecordStore 实例
        migrations_dir: 迁移脚本目录

    Returns:
        已执行的文件名列表

    Raises:
        StoreError: 任一脚本执行失败（之前已执行的脚本不回滚）
    """
    applied: list[str] = []
    for path in scan_migrations(migrations_dir):
        await records.execute_script(path.read_text(encoding="utf-8"))
        log.info("migration_applied", file=path.name)
        applied.append(path.name)

    log.info("migrations_complete", count=len(applied))
    return applied
