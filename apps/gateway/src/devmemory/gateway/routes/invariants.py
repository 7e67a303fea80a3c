"""全局 invariant 路由（只读）

GET /invariants: 全部 active invariant，按 id 正序
GET /invariants/check: 写操作前的检查 -- 返回全部 active critical invariant
"""

from fastapi import APIRouter, Depends

from ..deps import get_store_group
from ..services.invariant_service import InvariantService

router = APIRouter()


@router.get("/invariants")
async def list_invariants(store_group=Depends(get_store_group)):
    service = InvariantService(store_group)
    invariants = await service.list_active()
    return {"ok": True, "invariants": [i.model_dump(mode="json") for i in invariants]}


@router.get("/invariants/check")
async def check_invariants(store_group=Depends(get_store_group)):
    """返回调用方在任何写操作前必须遵守的 critical invariant

    只是查询，不会阻止或放行任何写操作。
    """
    service = InvariantService(store_group)
    result = await service.check_critical()
    return {"ok": True, **result.model_dump(mode="json")}
