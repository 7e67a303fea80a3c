"""Invariant Domain Model

Invariant 是全局规则，不属于任何任务；HTTP 层只读，
数据通过迁移脚本或 `python -m devmemory.core seed-invariants` 写入。
"""

from pydantic import BaseModel, Field

# check 结果提示语
MUST_RESPECT_MESSAGE = (
    "You MUST respect ALL listed invariants before proceeding with any mutation."
)
NO_ACTIVE_MESSAGE = "No active invariants."


class Invariant(BaseModel):
    """全局 Invariant 记录"""

    id: str = Field(description="规则标识，按字典序排序")
    title: str = Field(description="规则标题")
    description: str | None = Field(default=None, description="规则说明")
    category: str | None = Field(default=None, description="分类")
    severity: str = Field(default="medium", description="严重等级")
    active: bool = Field(default=True, description="是否生效")


class InvariantSummary(BaseModel):
    """check 端点返回的投影字段"""

    id: str
    title: str
    description: str | None = None
    category: str | None = None


class InvariantCheckResult(BaseModel):
    """critical invariant 查询结果（只读建议，不做拦截）"""

    count: int
    invariants: list[InvariantSummary]
    message: str

    @classmethod
    def from_invariants(cls, invariants: list[InvariantSummary]) -> "InvariantCheckResult":
        return cls(
            count=len(invariants),
            invariants=invariants,
            message=MUST_RESPECT_MESSAGE if invariants else NO_ACTIVE_MESSAGE,
        )
