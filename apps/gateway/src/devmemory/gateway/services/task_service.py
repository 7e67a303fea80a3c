"""TaskService -- 任务创建/查询/合并更新业务逻辑

更新流程：读取当前记录 -> merge_update -> 单条语句写回全部字段。
同一进程内对同一任务的更新通过 task 级锁串行化；
跨进程仍是最后写入者获胜（读与写之间没有事务）。
"""

import asyncio
from datetime import UTC, datetime

import structlog
from devmemory.core.exceptions import NotFoundError, ValidationError
from devmemory.core.merge import merge_update
from devmemory.core.models import Task, TaskPatch
from devmemory.core.store import StoreGroup
from pydantic import JsonValue
from ulid import ULID

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    _task_locks: dict[str, asyncio.Lock] = {}
    _task_lock_users: dict[str, int] = {}

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def create_task(
        self,
        title: str | None,
        description: str | None = None,
        context: dict[str, JsonValue] | None = None,
    ) -> Task:
        """创建任务

        Raises:
            ValidationError: title 缺失或为空（不写入任何记录）
        """
        if not title:
            raise ValidationError("title is required")

        now = datetime.now(UTC)
        task = Task(
            id=str(ULID()),
            title=title,
            description=description or None,
            context=context or {},
            created_at=now,
            updated_at=now,
        )
        created = await self._stores.task_store.create_task(task)

        log.info("task_created", task_id=created.id)
        return created

    async def get_task(self, task_id: str) -> Task:
        """查询单个任务

        Raises:
            NotFoundError: 任务不存在
        """
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise NotFoundError("task not found")
        return task

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 created_at 倒序（无分页）"""
        return await self._stores.task_store.list_tasks()

    async def update_task(self, task_id: str, patch: TaskPatch) -> Task:
        """合并更新任务

        Raises:
            NotFoundError: 任务不存在（不会创建新记录）
        """
        lock = self._get_task_lock(task_id)
        try:
            async with lock:
                current = await self._stores.task_store.get_task(task_id)
                if current is None:
                    raise NotFoundError("task not found")

                fields = merge_update(current, patch)
                updated = await self._stores.task_store.update_task(
                    task_id, fields, datetime.now(UTC)
                )
                if updated is None:
                    raise NotFoundError("task not found")
        finally:
            self._release_task_lock(task_id, lock)

        log.info(
            "task_updated",
            task_id=task_id,
            fields=sorted(patch.model_fields_set),
            changes_count=len(updated.changes),
        )
        return updated

    @classmethod
    def _get_task_lock(cls, task_id: str) -> asyncio.Lock:
        """获取 task 级别锁，序列化同一任务的读-改-写。"""
        lock = cls._task_locks.get(task_id)
        if lock is None:
            lock = asyncio.Lock()
            cls._task_locks[task_id] = lock
        cls._task_lock_users[task_id] = cls._task_lock_users.get(task_id, 0) + 1
        return lock

    @classmethod
    def _release_task_lock(cls, task_id: str, lock: asyncio.Lock) -> None:
        """最后一个使用者退出时回收锁，避免字典无限增长。"""
        remaining = cls._task_lock_users.get(task_id, 1) - 1
        if remaining > 0:
            cls._task_lock_users[task_id] = remaining
            return
        cls._task_lock_users.pop(task_id, None)
        if cls._task_locks.get(task_id) is lock:
            cls._task_locks.pop(task_id, None)
