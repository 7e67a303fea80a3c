"""InvariantStore SQLite 实现

HTTP 层只读；upsert_invariant 仅供 CLI 带外初始化使用。
active 以 INTEGER 0/1 存储。
"""

from typing import Any

from ..models.enums import InvariantSeverity
from ..models.invariant import Invariant, InvariantSummary
from .protocols import RecordStore


class SqliteInvariantStore:
    """InvariantStore 的 SQLite 实现"""

    def __init__(self, records: RecordStore) -> None:
        self._records = records

    async def list_active(self) -> list[Invariant]:
        """查询全部 active invariant，按 id 正序"""
        rows = await self._records.execute(
            "SELECT * FROM foundation_invariants WHERE active = 1 ORDER BY id ASC"
        )
        return [self._row_to_invariant(row) for row in rows]

    async def list_active_critical(self) -> list[InvariantSummary]:
        """查询 active 且 severity = critical 的 invariant，只投影摘要字段"""
        rows = await self._records.execute(
            """
            SELECT id, title, description, category
            FROM foundation_invariants
            WHERE active = 1 AND severity = ?
            ORDER BY id ASC
            """,
            (InvariantSeverity.CRITICAL.value,),
        )
        return [InvariantSummary(**row) for row in rows]

    async def upsert_invariant(self, invariant: Invariant) -> None:
        """写入 invariant，id 已存在时覆盖其余字段"""
        await self._records.execute(
            """
            INSERT INTO foundation_invariants (id, title, description, category,
                                               severity, active)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                description = excluded.description,
                category = excluded.category,
                severity = excluded.severity,
                active = excluded.active
            """,
            (
                invariant.id,
                invariant.title,
                invariant.description,
                invariant.category,
                invariant.severity,
                1 if invariant.active else 0,
            ),
        )

    @staticmethod
    def _row_to_invariant(row: dict[str, Any]) -> Invariant:
        return Invariant(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            category=row["category"],
            severity=row["severity"],
            active=bool(row["active"]),
        )
