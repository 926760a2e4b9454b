"""
Data store client.

All persistence goes through a Supabase/PostgREST REST endpoint. ``RestStore``
is the only component that talks to it: equality filters, ordering and column
projection are encoded as PostgREST query parameters, every write asks for
the representation back, and any non-2xx answer becomes a ``PersistenceError``
carrying the upstream body text. There are no retries.
"""

import time
from typing import Any, Dict, List, Mapping, Optional

import httpx
from fastapi import Request

from app.core.config import Settings
from app.core.exceptions import PersistenceError
from app.core.logging_config import logger


class RestStore:
    """Async PostgREST client bound to one project's REST URL and service key"""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "RestStore":
        return cls(
            base_url=settings.store_rest_url,
            api_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            timeout=settings.STORE_TIMEOUT_SECONDS,
            transport=transport,
        )

    @staticmethod
    def build_params(
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> Dict[str, str]:
        """
        Encode filters as ``col=eq.value`` (``col=in.(a,b)`` for a list or
        tuple), ``order=col.desc`` and ``select=a,b``
        """
        params: Dict[str, str] = {}
        for column, value in (filters or {}).items():
            if isinstance(value, (list, tuple)):
                params[column] = f"in.({','.join(str(v) for v in value)})"
            else:
                params[column] = f"eq.{value}"
        if order:
            params["order"] = order
        if columns:
            params["select"] = ",".join(columns)
        return params

    async def _request(
        self,
        operation: str,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json_body: Any = None,
        prefer_representation: bool = False,
    ) -> Any:
        headers = {"Prefer": "return=representation"} if prefer_representation else None
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method, f"/{table}", params=params, json=json_body, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"[Store] {operation} on {table} failed: {e}")
            raise PersistenceError(f"{operation} {table} failed: {e}", table=table)

        duration_ms = (time.perf_counter() - start) * 1000

        if response.status_code >= 400:
            logger.warning(
                f"[Store] {operation} on {table} rejected ({response.status_code}): {response.text}",
                extra={"store_table": table, "upstream_status": response.status_code},
            )
            raise PersistenceError(
                f"{operation} {table} failed: {response.text}",
                table=table,
                upstream_status=response.status_code,
            )

        data = response.json() if response.content else None
        rows = len(data) if isinstance(data, list) else 0
        logger.log_store_call(operation, table, duration_ms, rows_affected=rows)
        return data

    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        params = self.build_params(filters, order, columns or ["*"])
        data = await self._request("select", "GET", table, params=params)
        return data or []

    async def create(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one record and return it as stored (with its assigned id)"""
        data = await self._request(
            "create", "POST", table, json_body=dict(record), prefer_representation=True
        )
        if not data:
            raise PersistenceError(f"create {table} failed: empty representation", table=table)
        return data[0] if isinstance(data, list) else data

    async def update(
        self,
        table: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        """Patch every row matching ``filters``; returns the updated rows"""
        params = self.build_params(filters)
        data = await self._request(
            "update", "PATCH", table, params=params, json_body=dict(patch), prefer_representation=True
        )
        return data or []

    async def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        params = self.build_params(filters)
        await self._request("delete", "DELETE", table, params=params)

    async def ping(self) -> bool:
        """True when the REST endpoint answers at all"""
        try:
            response = await self._client.get("/")
        except httpx.HTTPError as e:
            logger.warning(f"[Store] ping failed: {e}")
            return False
        return response.status_code < 500

    async def close(self) -> None:
        await self._client.aclose()


def get_store(request: Request) -> RestStore:
    """FastAPI dependency: the store created in the application lifespan"""
    return request.app.state.store


async def close_store(store: Optional[RestStore]) -> None:
    if store is not None:
        await store.close()
        logger.info("[Store] client closed")
