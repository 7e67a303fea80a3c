"""InteractionStore SQLite 实现

交互表 append-only：只允许插入，不允许更新或删除。
"""

from typing import Any

from ..models.interaction import Interaction
from .codec import dump_json, from_db_timestamp, load_json, to_db_timestamp
from .protocols import RecordStore


class SqliteInteractionStore:
    """InteractionStore 的 SQLite 实现"""

    def __init__(self, records: RecordStore) -> None:
        self._records = records

    async def append_interaction(self, interaction: Interaction) -> Interaction:
        """追加交互记录（append-only）"""
        rows = await self._records.execute(
            """
            INSERT INTO ai_interactions (id, task_id, role, content, context, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            RETURNING *
            """,
            (
                interaction.id,
                interaction.task_id,
                interaction.role,
                interaction.content,
                dump_json(interaction.context),
                to_db_timestamp(interaction.created_at),
            ),
        )
        return self._row_to_interaction(rows[0])

    async def list_interactions(self, task_id: str) -> list[Interaction]:
        """查询指定任务的交互记录，按 created_at 正序"""
        rows = await self._records.execute(
            """
            SELECT * FROM ai_interactions
            WHERE task_id = ?
            ORDER BY created_at ASC, id ASC
            """,
            (task_id,),
        )
        return [self._row_to_interaction(row) for row in rows]

    @staticmethod
    def _row_to_interaction(row: dict[str, Any]) -> Interaction:
        return Interaction(
            id=row["id"],
            task_id=row["task_id"],
            role=row["role"],
            content=row["content"],
            context=load_json(row["context"], {}),
            created_at=from_db_timestamp(row["created_at"]),
        )
