"""
Shared test fixtures.

Services are built with in-memory repositories; nothing here needs
network access or Supabase credentials.
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from unittest.mock import patch
from typing import Generator

from services.auth_service import AuthService, CodeSender
from services.autosave_service import AutosaveService
from services.catalog_service import CatalogService
from services.repositories import (
    InMemoryCatalogRepository,
    InMemoryUserRepository,
    InMemoryVerificationCodeStore,
)

# Long enough that timers never fire during a test; tests flush explicitly
TEST_DEBOUNCE_SECONDS = 60


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data or []
        self._count = count

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def limit(self, count):
        self._data = self._data[:count]
        return self

    def execute(self) -> MockSupabaseResponse:
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table backed by the client's row list."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self._client = client
        self._name = name

    @property
    def _rows(self) -> list:
        return self._client._tables.setdefault(self._name, {"data": [], "count": None})["data"]

    def select(self, *args, **kwargs):
        config = self._client._tables.get(self._name, {"data": [], "count": None})
        return MockSupabaseQuery(list(config["data"]), config["count"])

    def upsert(self, data, on_conflict: str = "id"):
        rows = self._rows
        key = data.get(on_conflict)
        for idx, row in enumerate(rows):
            if row.get(on_conflict) == key:
                rows[idx] = {**row, **data}
                break
        else:
            rows.append(dict(data))
        self._client.upserts.append((self._name, data))
        return MockSupabaseQuery([data])


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}
        self.upserts = []

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": list(data), "count": count}

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return MockSupabaseTable(self, name)


class FailingSupabaseClient:
    """Client whose every call raises, for error-path tests."""

    def table(self, name: str):
        raise ConnectionError("connection refused")


# ===================
# AUTH HELPERS
# ===================

class RecordingCodeSender(CodeSender):
    """Keeps the last code sent to each email so tests can read it."""

    def __init__(self):
        self.sent = {}

    def send(self, email: str, code: str) -> None:
        self.sent[email] = code


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("catalogs", [
                {"username": "alice", "data": {...}}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("catalogs", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.get_supabase_client", return_value=mock_supabase):
        with patch("config.database.get_supabase_client", return_value=mock_supabase):
            yield mock_supabase


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def autosave(catalog_repository) -> Generator:
    service = AutosaveService(catalog_repository, debounce_seconds=TEST_DEBOUNCE_SECONDS)
    yield service
    service.flush()


@pytest.fixture
def catalog_service(catalog_repository, autosave) -> CatalogService:
    """CatalogService over an in-memory repository."""
    return CatalogService(catalog_repository, autosave)


@pytest.fixture
def code_sender() -> RecordingCodeSender:
    return RecordingCodeSender()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repository, code_sender) -> AuthService:
    """AuthService with in-memory stores and the cheapest bcrypt cost."""
    return AuthService(
        users=user_repository,
        codes=InMemoryVerificationCodeStore(ttl_minutes=10),
        sender=code_sender,
        secret_key="test-secret-key-0123456789",
        hash_rounds=4,
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(monkeypatch, catalog_service, auth_service):
    """
    Create FastAPI test client with fresh in-memory services.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    monkeypatch.setattr("services.catalog_service._catalog_service", catalog_service)
    monkeypatch.setattr("services.auth_service._auth_service", auth_service)

    return TestClient(app)


@pytest.fixture
def auth_headers(test_client, code_sender) -> dict:
    """Register 'alice' and return her bearer header."""
    email = "alice@example.com"
    test_client.post("/api/auth/send-code", json={"email": email})
    response = test_client.post("/api/auth/register", json={
        "username": "alice",
        "password": "secret123",
        "email": email,
        "code": code_sender.sent[email],
    })
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
