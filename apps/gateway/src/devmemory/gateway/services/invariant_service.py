"""InvariantService -- 全局 invariant 只读查询

check_critical 只返回当前生效的 critical invariant 与提示语，
不拦截也不放行任何写操作；调用方应在 create/update/append 前自行查询。
"""

from devmemory.core.models import Invariant, InvariantCheckResult
from devmemory.core.store import StoreGroup


class InvariantService:
    """Invariant 查询服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_active(self) -> list[Invariant]:
        return await self._stores.invariant_store.list_active()

    async def check_critical(self) -> InvariantCheckResult:
        critical = await self._stores.invariant_store.list_active_critical()
        return InvariantCheckResult.from_invariants(critical)
