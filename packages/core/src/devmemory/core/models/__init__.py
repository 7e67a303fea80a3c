"""Dev Memory Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import DEFAULT_TASK_STATUS, InvariantSeverity
from .interaction import Interaction
from .invariant import (
    MUST_RESPECT_MESSAGE,
    NO_ACTIVE_MESSAGE,
    Invariant,
    InvariantCheckResult,
    InvariantSummary,
)
from .task import Task, TaskPatch

__all__ = [
    # 枚举与默认值
    "DEFAULT_TASK_STATUS",
    "InvariantSeverity",
    # Task
    "Task",
    "TaskPatch",
    # Interaction
    "Interaction",
    # Invariant
    "Invariant",
    "InvariantSummary",
    "InvariantCheckResult",
    "MUST_RESPECT_MESSAGE",
    "NO_ACTIVE_MESSAGE",
]
