"""TaskStore SQLite 实现

changes / context 以 JSON 文本存储；update 一条语句写回全部可变字段，
失败时原记录保持不变。
"""

from datetime import datetime
from typing import Any

from ..merge import MergedFields
from ..models.task import Task
from .codec import dump_json, from_db_timestamp, load_json, to_db_timestamp
from .protocols import RecordStore


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, records: RecordStore) -> None:
        self._records = records

    async def create_task(self, task: Task) -> Task:
        """创建任务记录，status 未设置时使用列默认值"""
        rows = await self._records.execute(
            """
            INSERT INTO development_tasks (id, title, description, status,
                                           changes, context, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING *
            """,
            (
                task.id,
                task.title,
                task.description,
                task.status,
                dump_json(task.changes),
                dump_json(task.context),
                to_db_timestamp(task.created_at),
                to_db_timestamp(task.updated_at),
            ),
        )
        return self._row_to_task(rows[0])

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        rows = await self._records.execute(
            "SELECT * FROM development_tasks WHERE id = ?",
            (task_id,),
        )
        if not rows:
            return None
        return self._row_to_task(rows[0])

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 created_at 倒序"""
        rows = await self._records.execute(
            "SELECT * FROM development_tasks ORDER BY created_at DESC, id DESC"
        )
        return [self._row_to_task(row) for row in rows]

    async def update_task(
        self,
        task_id: str,
        fields: MergedFields,
        updated_at: datetime,
    ) -> Task | None:
        """写回合并后的全部可变字段，id 不存在时返回 None"""
        rows = await self._records.execute(
            """
            UPDATE development_tasks
            SET title = ?, description = ?, status = ?,
                changes = ?, context = ?, updated_at = ?
            WHERE id = ?
            RETURNING *
            """,
            (
                fields.title,
                fields.description,
                fields.status,
                dump_json(fields.changes),
                dump_json(fields.context),
                to_db_timestamp(updated_at),
                task_id,
            ),
        )
        if not rows:
            return None
        return self._row_to_task(rows[0])

    @staticmethod
    def _row_to_task(row: dict[str, Any]) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            status=row["status"],
            changes=load_json(row["changes"], []),
            context=load_json(row["context"], {}),
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
        )
