"""
Research API Client - thin async wrapper over the backend REST API

Unwraps ``{"data": ...}`` envelopes and turns ``{"error": {...}}`` envelopes
into APIError.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx


class APIError(Exception):
    """Error envelope returned by the backend (or a transport failure)"""

    def __init__(self, code: str, message: str, status: int = 0):
        self.code = code
        self.message = message
        self.status = status
        super().__init__(f"{code}: {message}")


class ResearchAPIClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ResearchAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.ConnectError:
            raise APIError("CONNECTION_ERROR", f"Tidak dapat terhubung ke server {self.base_url}")
        except httpx.HTTPError as e:
            raise APIError("HTTP_ERROR", str(e))

        if response.status_code >= 400:
            try:
                error = response.json().get("error") or {}
            except ValueError:
                error = {}
            raise APIError(
                error.get("code", "HTTP_ERROR"),
                error.get("message", response.text or response.reason_phrase),
                response.status_code,
            )
        return response

    async def _data(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        return response.json().get("data")

    # ========== Auth ==========

    async def register(self, email: str, password: str, full_name: str, **extra) -> Dict[str, Any]:
        return await self._data(
            "POST", "/auth/register",
            json={"email": email, "password": password, "full_name": full_name, **extra},
        )

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._data("POST", "/auth/login", json={"email": email, "password": password})

    async def profile(self) -> Dict[str, Any]:
        return await self._data("GET", "/auth/profile")

    # ========== Projects ==========

    async def list_projects(self) -> List[Dict[str, Any]]:
        return await self._data("GET", "/projects")

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        return await self._data("GET", f"/projects/{project_id}")

    async def create_project(self, **fields) -> Dict[str, Any]:
        return await self._data("POST", "/projects", json=fields)

    # ========== Uploads ==========

    async def upload_csv(self, project_id: str, path: Path) -> Dict[str, Any]:
        with open(path, "rb") as fh:
            files = {"file": (path.name, fh.read(), "text/csv")}
        return await self._data("POST", f"/projects/{project_id}/uploads", files=files)

    async def list_uploads(self, project_id: str) -> List[Dict[str, Any]]:
        return await self._data("GET", f"/projects/{project_id}/uploads")

    # ========== Analysis ==========

    async def recommend(
        self,
        research_type: str,
        hypothesis: Optional[str] = None,
        var_independent: Any = None,
        var_dependent: Any = None,
        data_summary: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        data = await self._data(
            "POST", "/analysis",
            params={"action": "recommend"},
            json={
                "research_type": research_type,
                "hypothesis": hypothesis,
                "var_independent": var_independent,
                "var_dependent": var_dependent,
                "data_summary": data_summary,
            },
        )
        return data["recommendations"]

    async def process(
        self,
        project_id: str,
        method: str,
        upload_id: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._data(
            "POST", "/analysis",
            params={"action": "process"},
            json={"project_id": project_id, "method": method, "upload_id": upload_id, "params": params or {}},
        )

    async def list_analyses(self, project_id: str) -> List[Dict[str, Any]]:
        return await self._data("GET", "/analysis", params={"project_id": project_id})

    async def export_analysis(self, analysis_id: str, fmt: str = "json") -> bytes:
        response = await self._request("GET", f"/analysis/{analysis_id}/export", params={"format": fmt})
        return response.content
