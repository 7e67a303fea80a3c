"""枚举与默认值定义

status / role / severity 列都是自由文本，这里只给出常用取值，
存储层与服务层都不做封闭枚举校验。
"""

from enum import StrEnum

# 未显式设置 status 时的列默认值
DEFAULT_TASK_STATUS = "pending"


class InvariantSeverity(StrEnum):
    """Invariant 严重等级 -- check 端点只关心 CRITICAL"""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

