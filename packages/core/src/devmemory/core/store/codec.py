"""列值编解码 -- 时间戳与 JSON 文本列

时间戳统一为微秒精度的 ISO-8601 文本，保证 TEXT 列按字典序即时间序；
JSON 列以文本存储，NULL / 空串按调用方给定的空值还原。
"""

import json
from datetime import datetime
from typing import Any


def to_db_timestamp(ts: datetime) -> str:
    return ts.isoformat(timespec="microseconds")


def from_db_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def load_json(value: str | None, empty: Any) -> Any:
    """解析 JSON 列；列为空时返回 empty"""
    if not value:
        return empty
    return json.loads(value)
