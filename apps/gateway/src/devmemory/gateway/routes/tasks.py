"""开发任务路由

POST  /dev-memory/tasks: 创建任务（201）
GET   /dev-memory/tasks: 任务列表，按 created_at 倒序
GET   /dev-memory/tasks/{task_id}: 任务详情（404 不存在）
PATCH /dev-memory/tasks/{task_id}: 合并更新（changes 追加、context 浅合并）
"""

from devmemory.core.models import TaskPatch
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, JsonValue
from starlette.responses import JSONResponse

from ..deps import get_store_group
from ..services.task_service import TaskService

router = APIRouter()


class TaskCreateRequest(BaseModel):
    """创建任务请求体（title 的非空校验在服务层）"""

    title: str | None = Field(default=None, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    context: dict[str, JsonValue] | None = Field(default=None, description="初始上下文")


class TaskUpdateRequest(BaseModel):
    """合并更新请求体，未提供的字段保持不变"""

    title: str | None = Field(default=None, description="非空时替换标题")
    description: str | None = Field(default=None, description="出现即替换，null 表示清空")
    status: str | None = Field(default=None, description="非空时替换状态")
    changes: list[JsonValue] | None = Field(default=None, description="追加到现有 changes 之后")
    context: dict[str, JsonValue] | None = Field(default=None, description="浅合并到现有 context")


@router.post("/dev-memory/tasks")
async def create_task(
    body: TaskCreateRequest | None = None,
    store_group=Depends(get_store_group),
):
    """创建开发任务"""
    body = body or TaskCreateRequest()
    service = TaskService(store_group)
    task = await service.create_task(
        title=body.title,
        description=body.description,
        context=body.context,
    )
    return JSONResponse(
        status_code=201,
        content={"ok": True, "task": task.model_dump(mode="json")},
    )


@router.get("/dev-memory/tasks")
async def list_tasks(store_group=Depends(get_store_group)):
    """查询任务列表（最新的在前）"""
    service = TaskService(store_group)
    tasks = await service.list_tasks()
    return {"ok": True, "tasks": [t.model_dump(mode="json") for t in tasks]}


@router.get("/dev-memory/tasks/{task_id}")
async def get_task(task_id: str, store_group=Depends(get_store_group)):
    """查询单个任务"""
    service = TaskService(store_group)
    task = await service.get_task(task_id)
    return {"ok": True, "task": task.model_dump(mode="json")}


@router.patch("/dev-memory/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdateRequest | None = None,
    store_group=Depends(get_store_group),
):
    """合并更新任务"""
    # 只透传请求中实际出现的字段，保留 description 的“显式清空”语义
    patch = TaskPatch(**(body.model_dump(exclude_unset=True) if body else {}))
    service = TaskService(store_group)
    task = await service.update_task(task_id, patch)
    return {"ok": True, "task": task.model_dump(mode="json")}
