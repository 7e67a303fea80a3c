"""TaskService / InteractionService 服务层测试

覆盖：
1. 校验失败不落盘
2. 不存在的任务 NotFoundError
3. 同进程并发 PATCH 通过 task 级锁串行化，changes 不丢失
4. 锁在最后一个使用者退出后回收
"""

import asyncio

import pytest
from devmemory.core.exceptions import NotFoundError, ValidationError
from devmemory.core.models import TaskPatch
from devmemory.gateway.services.interaction_service import InteractionService
from devmemory.gateway.services.invariant_service import InvariantService
from devmemory.gateway.services.task_service import TaskService


class TestTaskService:
    async def test_create_without_title_writes_nothing(self, store_group):
        service = TaskService(store_group)
        with pytest.raises(ValidationError, match="title is required"):
            await service.create_task(None)
        assert await service.list_tasks() == []

    async def test_get_missing_raises(self, store_group):
        service = TaskService(store_group)
        with pytest.raises(NotFoundError):
            await service.get_task("01JNOTEXIST0000000000000000")

    async def test_update_missing_raises_and_creates_nothing(self, store_group):
        service = TaskService(store_group)
        with pytest.raises(NotFoundError):
            await service.update_task("01JNOTEXIST0000000000000000", TaskPatch(title="ghost"))
        assert await service.list_tasks() == []

    async def test_concurrent_updates_keep_every_change(self, store_group):
        service = TaskService(store_group)
        task = await service.create_task("concurrent")

        await asyncio.gather(
            *(
                service.update_task(task.id, TaskPatch(changes=[f"c{i}"], context={f"k{i}": i}))
                for i in range(10)
            )
        )

        final = await service.get_task(task.id)
        assert sorted(final.changes) == sorted(f"c{i}" for i in range(10))
        assert final.context == {f"k{i}": i for i in range(10)}

    async def test_task_locks_released(self, store_group):
        service = TaskService(store_group)
        task = await service.create_task("locks")

        await asyncio.gather(
            service.update_task(task.id, TaskPatch(status="in_progress")),
            service.update_task(task.id, TaskPatch(status="review")),
        )
        with pytest.raises(NotFoundError):
            await service.update_task("01JNOTEXIST0000000000000000", TaskPatch())

        assert task.id not in TaskService._task_locks
        assert task.id not in TaskService._task_lock_users
        assert "01JNOTEXIST0000000000000000" not in TaskService._task_locks


class TestInteractionService:
    async def test_missing_role_checked_before_task_lookup(self, store_group):
        service = InteractionService(store_group)
        with pytest.raises(ValidationError, match="role is required"):
            await service.append_interaction("01JNOTEXIST0000000000000000", role=None)

    async def test_dangling_task_rejected(self, store_group):
        service = InteractionService(store_group)
        with pytest.raises(NotFoundError, match="task not found"):
            await service.append_interaction("01JNOTEXIST0000000000000000", role="agent")


class TestInvariantService:
    async def test_check_with_empty_table(self, store_group):
        result = await InvariantService(store_group).check_critical()
        assert result.count == 0
        assert result.invariants == []
        assert result.message == "No active invariants."
