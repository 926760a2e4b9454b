"""
Unit Tests for health checks, middleware headers and error rendering
"""
from unittest.mock import ANY, patch

import pytest
from httpx import AsyncClient

from app.core.logging_config import logger


class TestHealth:
    @pytest.mark.asyncio
    async def test_root_health(self, client: AsyncClient, settings):
        response = await client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert response.json()['version'] == settings.APP_VERSION

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/live')

        assert response.status_code == 200
        assert response.json()['status'] == 'alive'

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/ready')

        assert response.status_code == 200
        assert response.json()['checks']['store']['status'] == 'healthy'

    @pytest.mark.asyncio
    async def test_readiness_when_store_unreachable(self, client: AsyncClient, store, monkeypatch):
        async def unreachable():
            return False

        monkeypatch.setattr(store, 'ping', unreachable)

        response = await client.get('/api/v1/health/ready')

        assert response.status_code == 503
        assert response.json()['status'] == 'not_ready'


class TestMiddleware:
    @pytest.mark.asyncio
    async def test_request_id_and_timing_headers(self, client: AsyncClient):
        response = await client.get('/health', headers={'X-Request-ID': 'req-123'})

        assert response.headers['X-Request-ID'] == 'req-123'
        assert response.headers['X-Response-Time'].endswith('ms')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get('/api/v1/tidak-ada')

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'NOT_FOUND'

    @pytest.mark.asyncio
    async def test_completed_request_is_logged(self, client: AsyncClient):
        with patch.object(logger, 'log_request') as log_request:
            await client.get('/api/v1/analysis')

        log_request.assert_called_once_with('GET', '/api/v1/analysis', 401, ANY, level='warning')

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, client: AsyncClient):
        with patch.object(logger, 'log_request') as log_request:
            await client.get('/health')

        log_request.assert_not_called()
