"""
Shared pytest fixtures.

Routes run against FakeSupabase (tests/fakes.py) injected through
app.dependency_overrides; nothing talks to a real Supabase project.
"""
import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeSupabase


def _clear_auth_caches():
    from app.modules.auth import service as auth_service
    auth_service._AUTH_USER_CACHE.clear()
    auth_service._REVOKED_TOKENS.clear()


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def client(fake_db):
    from app.main import app
    from app.core.dependencies import get_admin_supabase
    from app.core.rate_limit import limiter
    from app.database.supabase_client import get_supabase, get_service_supabase

    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_service_supabase] = lambda: fake_db
    app.dependency_overrides[get_admin_supabase] = lambda: fake_db
    limiter.enabled = False
    _clear_auth_caches()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True
    _clear_auth_caches()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(fake_db):
    return bearer(fake_db.add_account("admin@example.com", role="admin"))


@pytest.fixture
def staff_headers(fake_db):
    return bearer(fake_db.add_account("staff@example.com", role="staff"))


@pytest.fixture
def member_headers(fake_db):
    return bearer(fake_db.add_account("member@example.com", role="member"))
