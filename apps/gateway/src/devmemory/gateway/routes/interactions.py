"""任务交互日志路由

POST /dev-memory/tasks/{task_id}/interactions: 追加交互（201）
GET  /dev-memory/tasks/{task_id}/interactions: 按时间正序列出
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, JsonValue
from starlette.responses import JSONResponse

from ..deps import get_store_group
from ..services.interaction_service import InteractionService

router = APIRouter()


class InteractionAppendRequest(BaseModel):
    """追加交互请求体（role 的非空校验在服务层）"""

    role: str | None = Field(default=None, description="说话方")
    content: str | None = Field(default=None, description="交互内容")
    context: dict[str, JsonValue] | None = Field(default=None, description="交互上下文")


@router.post("/dev-memory/tasks/{task_id}/interactions")
async def append_interaction(
    task_id: str,
    body: InteractionAppendRequest | None = None,
    store_group=Depends(get_store_group),
):
    """为任务追加一条交互记录"""
    body = body or InteractionAppendRequest()
    service = InteractionService(store_group)
    interaction = await service.append_interaction(
        task_id,
        role=body.role,
        content=body.content,
        context=body.context,
    )
    return JSONResponse(
        status_code=201,
        content={"ok": True, "interaction": interaction.model_dump(mode="json")},
    )


@router.get("/dev-memory/tasks/{task_id}/interactions")
async def list_interactions(task_id: str, store_group=Depends(get_store_group)):
    """列出任务的交互记录"""
    service = InteractionService(store_group)
    interactions = await service.list_interactions(task_id)
    return {
        "ok": True,
        "interactions": [i.model_dump(mode="json") for i in interactions],
    }
