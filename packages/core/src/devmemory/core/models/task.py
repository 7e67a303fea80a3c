"""Task Domain Model

changes 只追加不删除，context 只做浅合并不删键，
两者的合并规则见 devmemory.core.merge。
"""

from datetime import datetime

from pydantic import BaseModel, Field, JsonValue

from .enums import DEFAULT_TASK_STATUS


class Task(BaseModel):
    """开发任务记录"""

    id: str = Field(description="唯一标识，ULID 格式，创建后不可变")
    title: str = Field(description="任务标题（非空）")
    description: str | None = Field(default=None, description="任务描述，可清空")
    status: str = Field(default=DEFAULT_TASK_STATUS, description="自由文本状态标签")
    changes: list[JsonValue] = Field(default_factory=list, description="变更记录，只追加")
    context: dict[str, JsonValue] = Field(default_factory=dict, description="上下文，浅合并")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="最近一次修改时间")


class TaskPatch(BaseModel):
    """Task 部分更新

    未出现在请求中的字段不会进入 model_fields_set，
    description 依赖这一点区分“未提供”与“显式清空”。
    """

    title: str | None = None
    description: str | None = None
    status: str | None = None
    changes: list[JsonValue] | None = None
    context: dict[str, JsonValue] | None = None
