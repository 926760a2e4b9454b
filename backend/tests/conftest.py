"""
Research Analysis Platform - Test Configuration and Fixtures
"""
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional

import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment
os.environ['SUPABASE_URL'] = 'https://test-project.supabase.co'
os.environ['SUPABASE_SERVICE_ROLE_KEY'] = 'test-service-role-key'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''

from app.main import create_app
from app.core.config import Settings
from app.core.exceptions import PersistenceError
from app.core.security import get_password_hash, create_access_token

fake = Faker()

TEST_PASSWORD = 'testpassword123'


class FakeStore:
    """
    In-memory stand-in for RestStore with the same call surface.

    ``fail_on[(operation, table)] = "text"`` makes that call raise
    PersistenceError with the given upstream text. Every call is recorded
    in ``calls`` as (operation, table, filters_or_record).
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[tuple, str] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _check_failure(self, operation: str, table: str) -> None:
        if (operation, table) in self.fail_on:
            text = self.fail_on[(operation, table)]
            raise PersistenceError(f"{operation} {table} failed: {text}", table=table, upstream_status=400)

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Optional[Mapping[str, Any]]) -> bool:
        return all(
            str(row.get(k)) in [str(x) for x in v] if isinstance(v, (list, tuple)) else str(row.get(k)) == str(v)
            for k, v in (filters or {}).items()
        )

    def _next_timestamp(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(table, [])

    async def select(self, table, filters=None, order=None, columns=None):
        self.calls.append(("select", table, dict(filters or {})))
        self._check_failure("select", table)
        result = [dict(r) for r in self.rows(table) if self._matches(r, filters)]
        if order:
            column, _, direction = order.partition(".")
            result.sort(key=lambda r: str(r.get(column) or ""), reverse=direction == "desc")
        if columns and columns != ["*"]:
            result = [{c: r.get(c) for c in columns} for r in result]
        return result

    async def create(self, table, record):
        self.calls.append(("create", table, dict(record)))
        self._check_failure("create", table)
        row = {"id": str(uuid.uuid4()), "created_at": self._next_timestamp(), **dict(record)}
        self.rows(table).append(row)
        return dict(row)

    async def update(self, table, filters, patch):
        self.calls.append(("update", table, dict(filters)))
        self._check_failure("update", table)
        updated = []
        for row in self.rows(table):
            if self._matches(row, filters):
                row.update(dict(patch))
                updated.append(dict(row))
        return updated

    async def delete(self, table, filters):
        self.calls.append(("delete", table, dict(filters)))
        self._check_failure("delete", table)
        self.tables[table] = [r for r in self.rows(table) if not self._matches(r, filters)]

    async def ping(self):
        return True

    async def close(self):
        pass

    def operations(self, table: Optional[str] = None) -> List[tuple]:
        return [(op, t) for op, t, _ in self.calls if table is None or t == table]


@pytest.fixture
def settings() -> Settings:
    """Explicit settings for the app under test"""
    return Settings(
        SUPABASE_URL='https://test-project.supabase.co',
        SUPABASE_SERVICE_ROLE_KEY='test-service-role-key',
        JWT_SECRET_KEY='test-jwt-secret-key-for-testing',
        RATE_LIMIT_ENABLED=False,
        BCRYPT_ROUNDS=4,
        LOG_FILE='',
        _env_file=None,
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def app(settings: Settings, store: FakeStore):
    return create_app(settings, store=store)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the in-memory store"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


@pytest.fixture
async def test_user(store: FakeStore) -> Dict[str, Any]:
    """Create a test user"""
    return await store.create('research_users', {
        'email': fake.email().lower(),
        'full_name': fake.name(),
        'password_hash': get_password_hash(TEST_PASSWORD, rounds=4),
        'institution': 'Universitas Indonesia',
        'research_field': 'Psikologi',
    })


@pytest.fixture
async def other_user(store: FakeStore) -> Dict[str, Any]:
    return await store.create('research_users', {
        'email': fake.email().lower(),
        'full_name': fake.name(),
        'password_hash': get_password_hash('otherpassword123', rounds=4),
    })


@pytest.fixture
def auth_headers(test_user: Dict[str, Any], settings: Settings) -> dict:
    """Generate authentication headers for test user"""
    token = create_access_token(test_user['id'], test_user['email'], settings)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def other_auth_headers(other_user: Dict[str, Any], settings: Settings) -> dict:
    token = create_access_token(other_user['id'], other_user['email'], settings)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def test_project(store: FakeStore, test_user: Dict[str, Any]) -> Dict[str, Any]:
    """Quantitative project owned by test_user"""
    return await store.create('research_projects', {
        'user_id': test_user['id'],
        'title': 'Pengaruh Motivasi terhadap Prestasi Belajar',
        'description': fake.sentence(),
        'research_type': 'quantitative',
        'hypothesis': 'Motivasi berpengaruh positif terhadap prestasi',
        'var_independent': 'motivasi',
        'var_dependent': 'prestasi',
        'status': 'draft',
    })


@pytest.fixture
def sample_csv() -> bytes:
    return (
        b"responden,motivasi,prestasi,kelompok\n"
        b"1,70,75.5,A\n"
        b"2,80,82.0,B\n"
        b"3,,68.0,A\n"
        b"4,90,91.5,B\n"
        b"5,60,64.0,A\n"
        b"6,85,88.0,B\n"
    )
