"""端到端流程测试

场景：创建任务 -> 两次 PATCH 累积 changes / 合并 context
-> 追加交互 -> 查询 critical invariant -> 列表与单查一致。
"""

from httpx import AsyncClient


class TestDevMemoryFlow:
    async def test_refactor_auth_scenario(self, client: AsyncClient):
        resp = await client.post("/dev-memory/tasks", json={"title": "Refactor auth"})
        assert resp.status_code == 201
        task = resp.json()["task"]
        assert task["changes"] == []
        assert task["context"] == {}
        task_url = f"/dev-memory/tasks/{task['id']}"

        resp = await client.patch(
            task_url,
            json={
                "status": "in_progress",
                "changes": ["renamed module"],
                "context": {"risk": "low"},
            },
        )
        assert resp.status_code == 200
        task = resp.json()["task"]
        assert task["status"] == "in_progress"
        assert task["changes"] == ["renamed module"]
        assert task["context"] == {"risk": "low"}

        resp = await client.patch(
            task_url,
            json={"changes": ["added tests"], "context": {"owner": "alice"}},
        )
        task = resp.json()["task"]
        assert task["status"] == "in_progress"
        assert task["changes"] == ["renamed module", "added tests"]
        assert task["context"] == {"risk": "low", "owner": "alice"}

        fetched = await client.get(task_url)
        assert fetched.json()["task"] == task

    async def test_interactions_and_invariants(self, client: AsyncClient, integration_app):
        from devmemory.core.models import Invariant

        await integration_app.state.store_group.invariant_store.upsert_invariant(
            Invariant(
                id="INV-001",
                title="No schema drops",
                description="Only additive migrations",
                category="schema",
                severity="critical",
            )
        )

        check = await client.get("/invariants/check")
        assert check.json()["count"] == 1
        assert check.json()["invariants"][0]["id"] == "INV-001"

        task = (await client.post("/dev-memory/tasks", json={"title": "Add column"})).json()["task"]
        interactions_url = f"/dev-memory/tasks/{task['id']}/interactions"
        await client.post(interactions_url, json={"role": "human", "content": "add email col"})
        await client.post(interactions_url, json={"role": "agent", "content": "done"})

        resp = await client.get(interactions_url)
        assert [i["content"] for i in resp.json()["interactions"]] == ["add email col", "done"]

    async def test_health_through_lifespan(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.json() == {"ok": True, "status": "healthy"}
