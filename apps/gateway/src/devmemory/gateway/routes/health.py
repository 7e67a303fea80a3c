"""健康检查路由

GET /health: 执行 SELECT 1 验证存储连通性。
- 200: {"ok": true, "status": "healthy"}
- 503: {"ok": false, "status": "unhealthy", "error": ...}
"""

import structlog
from devmemory.core.exceptions import StoreError
from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_store_group

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health(store_group=Depends(get_store_group)):
    """存储连通性检查"""
    try:
        await store_group.records.ping()
    except StoreError as e:
        log.warning("health_check_failed", error=e.message)
        return JSONResponse(
            status_code=503,
            content={"ok": False, "status": "unhealthy", "error": e.message},
        )

    return {"ok": True, "status": "healthy"}
