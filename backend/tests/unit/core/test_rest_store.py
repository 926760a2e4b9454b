"""
Unit Tests for the REST data store client
"""
import json

import httpx
import pytest

from app.core.database import RestStore
from app.core.exceptions import PersistenceError


BASE_URL = "https://test-project.supabase.co/rest/v1"


def make_store(handler) -> RestStore:
    return RestStore(BASE_URL, "service-key", transport=httpx.MockTransport(handler))


class Recorder:
    """Captures every request and answers with a canned response"""

    def __init__(self, status_code=200, body=None, text=None):
        self.requests = []
        self.status_code = status_code
        self.body = body
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)


class TestBuildParams:
    def test_filters_order_and_columns(self):
        params = RestStore.build_params({"user_id": "u-1", "status": "draft"}, "created_at.desc", ["id", "title"])

        assert params == {
            "user_id": "eq.u-1",
            "status": "eq.draft",
            "order": "created_at.desc",
            "select": "id,title",
        }

    def test_list_filter_uses_in(self):
        params = RestStore.build_params({"project_id": ["p-1", "p-2"], "status": "completed"})

        assert params == {"project_id": "in.(p-1,p-2)", "status": "eq.completed"}

    def test_empty(self):
        assert RestStore.build_params() == {}


class TestRestStore:
    @pytest.mark.asyncio
    async def test_select_sends_headers_and_filters(self):
        recorder = Recorder(body=[{"id": "p-1"}])
        store = make_store(recorder)

        rows = await store.select("research_projects", {"user_id": "u-1"}, order="created_at.desc")
        await store.close()

        request = recorder.requests[0]
        assert rows == [{"id": "p-1"}]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/research_projects"
        assert request.url.params["user_id"] == "eq.u-1"
        assert request.url.params["order"] == "created_at.desc"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"

    @pytest.mark.asyncio
    async def test_create_asks_for_representation(self):
        recorder = Recorder(status_code=201, body=[{"id": "a-1", "status": "completed"}])
        store = make_store(recorder)

        created = await store.create("research_analyses", {"status": "completed"})
        await store.close()

        request = recorder.requests[0]
        assert created == {"id": "a-1", "status": "completed"}
        assert request.method == "POST"
        assert request.headers["prefer"] == "return=representation"
        assert json.loads(request.content) == {"status": "completed"}

    @pytest.mark.asyncio
    async def test_update_patches_matching_rows(self):
        recorder = Recorder(body=[{"id": "p-1", "status": "analyzed"}])
        store = make_store(recorder)

        updated = await store.update("research_projects", {"id": "p-1"}, {"status": "analyzed"})
        await store.close()

        request = recorder.requests[0]
        assert updated == [{"id": "p-1", "status": "analyzed"}]
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.p-1"

    @pytest.mark.asyncio
    async def test_delete(self):
        recorder = Recorder(status_code=204, text="")
        store = make_store(recorder)

        await store.delete("research_projects", {"id": "p-1"})
        await store.close()

        assert recorder.requests[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_rejection_carries_upstream_text(self):
        recorder = Recorder(status_code=409, text='{"message":"duplicate key value"}')
        store = make_store(recorder)

        with pytest.raises(PersistenceError) as exc_info:
            await store.create("research_analyses", {"status": "completed"})
        await store.close()

        assert exc_info.value.message == 'create research_analyses failed: {"message":"duplicate key value"}'
        assert exc_info.value.details["upstream_status"] == 409
        assert len(recorder.requests) == 1  # no retry

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = make_store(handler)

        with pytest.raises(PersistenceError) as exc_info:
            await store.select("research_projects")
        await store.close()

        assert "select research_projects failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_ping(self):
        healthy = make_store(Recorder(body={}))
        broken = make_store(Recorder(status_code=503, text="down"))

        assert await healthy.ping() is True
        assert await broken.ping() is False
        await healthy.close()
        await broken.close()

    def test_from_settings(self, settings):
        store = RestStore.from_settings(settings)

        assert store.base_url == "https://test-project.supabase.co/rest/v1"
