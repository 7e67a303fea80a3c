"""Task 合并更新 -- 纯函数，无 I/O

每个字段独立计算：
- title / status: patch 给出非空值才替换
- description: 只要 patch 中出现该键就替换（包括 null / 空串）
- changes: 按 patch 顺序追加到现有列表之后，不去重、不覆盖
- context: 浅合并，patch 中的键覆盖同名键，不删除任何键

单写者假设：并发的读-改-写可能丢失一方的追加，调用方自行串行化。
"""

from pydantic import BaseModel, Field, JsonValue

from .models.task import Task, TaskPatch


class MergedFields(BaseModel):
    """合并后的 Task 可变字段"""

    title: str
    description: str | None = None
    status: str
    changes: list[JsonValue] = Field(default_factory=list)
    context: dict[str, JsonValue] = Field(default_factory=dict)


def merge_update(current: Task, patch: TaskPatch) -> MergedFields:
    """计算 Task 的下一版本可变字段

    Args:
        current: 当前持久化的 Task
        patch: 部分更新

    Returns:
        MergedFields，current 与 patch 均不会被修改
    """
    description = (
        patch.description
        if "description" in patch.model_fields_set
        else current.description
    )

    changes = list(current.changes)
    if patch.changes is not None:
        changes.extend(patch.changes)

    context = dict(current.context)
    if patch.context is not None:
        context.update(patch.context)

    return MergedFields(
        title=patch.title or current.title,
        description=description,
        status=patch.status or current.status,
        changes=changes,
        context=context,
    )
