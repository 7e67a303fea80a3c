"""Store Protocol 接口定义

定义 RecordStore、TaskStore、InteractionStore、InvariantStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing），
服务层只依赖这些接口，测试可替换为任意实现。
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from ..merge import MergedFields
from ..models.interaction import Interaction
from ..models.invariant import Invariant, InvariantSummary
from ..models.task import Task


class RecordStore(Protocol):
    """参数化语句执行接口"""

    async def execute(
        self,
        statement: str,
        parameters: Sequence[Any] = (),
    ) -> list[dict[str, Any]]:
        """执行单条语句，返回结果行；失败抛 StoreError"""
        ...

    async def execute_script(self, script: str) -> None:
        """执行多语句脚本"""
        ...

    async def ping(self) -> None:
        """连通性检查"""
        ...


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> Task:
        """插入任务并返回落盘后的记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_tasks(self) -> list[Task]:
        """按 created_at 倒序列出全部任务"""
        ...

    async def update_task(
        self,
        task_id: str,
        fields: MergedFields,
        updated_at: datetime,
    ) -> Task | None:
        """单条语句写回全部可变字段"""
        ...


class InteractionStore(Protocol):
    """Interaction 存储接口 -- append-only"""

    async def append_interaction(self, interaction: Interaction) -> Interaction:
        """追加交互记录"""
        ...

    async def list_interactions(self, task_id: str) -> list[Interaction]:
        """按 created_at 正序列出任务的交互记录"""
        ...


class InvariantStore(Protocol):
    """Invariant 存储接口"""

    async def list_active(self) -> list[Invariant]:
        """列出 active 的 invariant"""
        ...

    async def list_active_critical(self) -> list[InvariantSummary]:
        """列出 active 且 critical 的 invariant 投影"""
        ...

    async def upsert_invariant(self, invariant: Invariant) -> None:
        """写入或覆盖 invariant（仅供带外初始化）"""
        ...
