"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
settings with a test signing key, an in-memory service container, a seeded
set of tenants and users, and helpers for session credentials.
"""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    ServiceContainer,
    get_admin_service,
    get_auth_service,
    get_tenant_service,
    get_verification_service,
)
from modules.accounts import User, VerificationState, hash_password
from modules.authz import Role
from modules.tenants import Tenant, TenantStatus
from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

# Test signing key (only for testing); 32+ bytes so PyJWT accepts it for HS256
TEST_SESSION_SECRET = "test-session-secret-for-testing-only-0123456789"
TEST_PASSWORD = "correct-horse-battery"

# Hashed once with a low cost factor to keep the suite fast
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD, rounds=4)


def run_sync(coro):
    """
    Run a coroutine on a private event loop.

    Used by sync fixtures; leaves the current event loop untouched so
    pytest-asyncio tests and TestClient keep working.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_user(
    username: str,
    role: Role = Role.OPERATOR,
    tenant_ref: Optional[str] = None,
    **overrides,
) -> User:
    """Build a user record with TEST_PASSWORD as its password."""
    fields = dict(
        id=str(uuid.uuid4()),
        username=username,
        password_hash=TEST_PASSWORD_HASH,
        role=role,
        tenant_ref=tenant_ref,
        verification_state=VerificationState.UNVERIFIED,
        requires_verification_on_next_login=role != Role.ADMIN,
    )
    fields.update(overrides)
    return User(**fields)


def as_caller(user: User) -> AuthenticatedUser:
    """The AuthenticatedUser a session for this user would produce."""
    return AuthenticatedUser(
        id=user.id,
        username=user.username,
        role=user.role.value,
        tenant_ref=user.tenant_ref,
    )


async def seed_identity(container: ServiceContainer) -> SimpleNamespace:
    """
    Populate a container with:

    - tenants acme and globex (active) and dormant (inactive)
    - admin (global), sub1/op1/viewer1 in acme, sub2/op2 in globex,
      idle in dormant
    """
    tenants = container.tenants
    acme = await tenants.create(Tenant(id="tenant-acme", name="Acme", subdomain="acme"))
    globex = await tenants.create(Tenant(id="tenant-globex", name="Globex", subdomain="globex"))
    dormant = await tenants.create(
        Tenant(
            id="tenant-dormant",
            name="Dormant",
            subdomain="dormant",
            status=TenantStatus.INACTIVE,
        )
    )

    users = container.users
    return SimpleNamespace(
        acme=acme,
        globex=globex,
        dormant=dormant,
        admin=await users.create(make_user("admin", Role.ADMIN)),
        sub1=await users.create(make_user("sub1", Role.SUB_ADMIN, acme.id)),
        op1=await users.create(make_user("op1", Role.OPERATOR, acme.id)),
        viewer1=await users.create(make_user("viewer1", Role.VIEWER, acme.id)),
        sub2=await users.create(make_user("sub2", Role.SUB_ADMIN, globex.id)),
        op2=await users.create(make_user("op2", Role.OPERATOR, globex.id)),
        idle=await users.create(make_user("idle", Role.OPERATOR, dormant.id)),
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SESSION_SECRET,
        storage_backend="memory",
        verification_poll_interval_seconds=0.0,
        verification_poll_max_attempts=3,
    )


@pytest.fixture
def container(settings: Settings) -> ServiceContainer:
    """A fresh in-memory service container."""
    return ServiceContainer(settings)


@pytest.fixture
def seeded(container: ServiceContainer) -> SimpleNamespace:
    """Tenants and users seeded into the container."""
    return run_sync(seed_identity(container))


@pytest.fixture
def session_for(container: ServiceContainer) -> Callable[[User], str]:
    """Issue a session credential for a user."""

    def issue(user: User) -> str:
        return container.codec.issue(user).token

    return issue


@pytest.fixture
def auth_headers(session_for) -> Callable[[User], dict[str, str]]:
    """Authorization headers carrying a session for a user."""

    def headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {session_for(user)}"}

    return headers


@pytest.fixture
def app(container: ServiceContainer, settings: Settings):
    """An app whose services all come from the test container."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_auth_service] = lambda: container.auth
    app.dependency_overrides[get_tenant_service] = lambda: container.tenant_service
    app.dependency_overrides[get_verification_service] = lambda: container.verification
    app.dependency_overrides[get_admin_service] = lambda: container.admin
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
