"""InteractionService -- 任务交互日志（append-only）"""

from datetime import UTC, datetime

import structlog
from devmemory.core.exceptions import NotFoundError, ValidationError
from devmemory.core.models import Interaction
from devmemory.core.store import StoreGroup
from pydantic import JsonValue
from ulid import ULID

log = structlog.get_logger()


class InteractionService:
    """交互日志业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def append_interaction(
        self,
        task_id: str,
        role: str | None,
        content: str | None = None,
        context: dict[str, JsonValue] | None = None,
    ) -> Interaction:
        """追加一条交互记录

        Raises:
            ValidationError: role 缺失或为空
            NotFoundError: task_id 指向的任务不存在
        """
        if not role:
            raise ValidationError("role is required")

        # 拒绝悬空引用，否则外键约束会以存储错误的形式暴露
        if await self._stores.task_store.get_task(task_id) is None:
            raise NotFoundError("task not found")

        interaction = Interaction(
            id=str(ULID()),
            task_id=task_id,
            role=role,
            content=content or None,
            context=context or {},
            created_at=datetime.now(UTC),
        )
        appended = await self._stores.interaction_store.append_interaction(interaction)

        log.info(
            "interaction_appended",
            task_id=task_id,
            interaction_id=appended.id,
            role=role,
        )
        return appended

    async def list_interactions(self, task_id: str) -> list[Interaction]:
        """按时间正序列出任务的交互记录；未知 task_id 返回空列表"""
        return await self._stores.interaction_store.list_interactions(task_id)
