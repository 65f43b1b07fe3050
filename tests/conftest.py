"""
Shared pytest fixtures.

The app is imported with header-based auth and in-memory storage; each test
that needs a store gets a fresh ``InMemoryRepository`` wired into the app
through ``dependency_overrides``.
"""

from __future__ import annotations

import os

os.environ["AUTH_MODE"] = "header"
os.environ["STORAGE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from agriwise.main import app
from agriwise.models.marketplace import ListingCreate
from agriwise.models.user import Role, UserContext
from agriwise.services.memory_repository import InMemoryRepository
from agriwise.services.storage import get_repository


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def farmer() -> UserContext:
    return UserContext(user_id="farmer-1", role=Role.FARMER)


@pytest.fixture
def buyer() -> UserContext:
    return UserContext(user_id="buyer-1", role=Role.BUYER)


@pytest.fixture
def landowner() -> UserContext:
    return UserContext(user_id="owner-1", role=Role.LANDOWNER)


@pytest.fixture
def tomato_listing(repository, farmer):
    """10 kg of tomatoes at 50 per kg, listed by ``farmer``."""
    return repository.create_listing(
        farmer.user_id,
        ListingCreate(crop_name="Red Tomato", quantity=10, unit="kg", price_per_unit=50),
    )


@pytest.fixture
def headers_for():
    """Build the identity headers trusted in header auth mode."""

    def build(user: UserContext) -> dict:
        return {"X-User-Id": user.user_id, "X-User-Role": user.role.value}

    return build
