"""TraceMiddleware -- 为任务相关请求绑定 task_id

从 /dev-memory/tasks/{task_id}[/interactions] 路径中提取 task_id，
贯穿该请求内的全部服务日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_TASKS_PREFIX = "/dev-memory/tasks/"


def extract_task_id(path: str) -> str | None:
    """提取路径中的 task_id，非任务路径返回 None"""
    if not path.startswith(_TASKS_PREFIX):
        return None
    task_id = path[len(_TASKS_PREFIX):].split("/", 1)[0]
    return task_id or None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
