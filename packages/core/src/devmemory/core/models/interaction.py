"""Interaction Domain Model

交互日志 append-only：写入后不更新、不合并 context。
"""

from datetime import datetime

from pydantic import BaseModel, Field, JsonValue


class Interaction(BaseModel):
    """一次与任务相关的对话记录"""

    id: str = Field(description="唯一标识，ULID 格式")
    task_id: str = Field(description="所属 Task ID")
    role: str = Field(description="说话方（human/agent/system 等，不强制）")
    content: str | None = Field(default=None, description="交互内容")
    context: dict[str, JsonValue] = Field(default_factory=dict, description="创建时写入，之后不变")
    created_at: datetime = Field(description="创建时间")
