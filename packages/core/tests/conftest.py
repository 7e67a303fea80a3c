"""packages/core 测试配置 -- 核心层 fixture"""

from datetime import UTC, datetime

import pytest
from devmemory.core.models import Invariant, Task


@pytest.fixture
def make_task():
    """构造未落盘的 Task"""

    def _make(task_id: str = "01JTEST000000000000000001", **overrides) -> Task:
        now = datetime.now(UTC)
        fields = {
            "id": task_id,
            "title": "核心层测试任务",
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Task(**fields)

    return _make


@pytest.fixture
def sample_invariants() -> list[Invariant]:
    """三条 active（两条 critical）+ 一条停用的 critical"""
    return [
        Invariant(
            id="INV-002",
            title="No direct DB writes",
            description="All writes go through the service layer",
            category="architecture",
            severity="critical",
        ),
        Invariant(
            id="INV-001",
            title="Keep migrations linear",
            description="Never edit an applied migration",
            category="schema",
            severity="critical",
        ),
        Invariant(
            id="INV-003",
            title="Prefer small commits",
            category="process",
            severity="low",
        ),
        Invariant(
            id="INV-004",
            title="Retired rule",
            category="process",
            severity="critical",
            active=False,
        ),
    ]
