from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Self
from unittest import mock

import pytest
from httpx import ASGITransport, AsyncClient

from logovote.api import deps
from logovote.api.main import create_app
from logovote.app.namespaces.domain import Logo, Namespace
from logovote.app.namespaces.usecases import NamespaceUseCase, SuperAdminUseCase
from logovote.infrastructure.context import UseCases
from logovote.toolkit import timezone

if TYPE_CHECKING:
    from fastapi import FastAPI


class TestClient(AsyncClient):
    def __init__(self, *, app: FastAPI, **kwargs):
        self.app = app
        super().__init__(transport=ASGITransport(app=app), **kwargs)

    def mock_admin(self, namespace: Namespace) -> Self:
        async def get_admin_namespace_id():
            return namespace.id

        self.app.dependency_overrides[deps.admin_namespace_id] = get_admin_namespace_id
        return self

    def mock_superadmin(self) -> Self:
        async def require_superadmin_token():
            return None

        self.app.dependency_overrides[deps.superadmin_token] = require_superadmin_token
        return self


@pytest.fixture(scope="session")
async def app():
    """Application fixture."""
    return create_app(lifespan=mock.MagicMock())


@pytest.fixture
async def client(app: FastAPI):
    """Test client fixture to make requests against app endpoints."""
    async with TestClient(app=app, base_url="http://test") as cli:
        yield cli
    app.dependency_overrides.pop(deps.admin_namespace_id, None)
    app.dependency_overrides.pop(deps.superadmin_token, None)


@pytest.fixture
def _usecases():
    return mock.MagicMock(
        UseCases,
        namespace=mock.MagicMock(NamespaceUseCase),
        superadmin=mock.MagicMock(SuperAdminUseCase),
    )


@pytest.fixture
def ns_use_case(_usecases: UseCases):
    """A mocked instance of a NamespaceUseCase."""
    return _usecases.namespace


@pytest.fixture
def superadmin_use_case(_usecases: UseCases):
    """A mocked instance of a SuperAdminUseCase."""
    return _usecases.superadmin


@pytest.fixture(autouse=True)
async def mock_usecases_deps(anyio_backend, app: FastAPI, _usecases: UseCases):
    async def get_usecases():
        return _usecases
    app.dependency_overrides[deps.usecases] = get_usecases


@pytest.fixture
def namespace() -> Namespace:
    ns_id = uuid.uuid4()
    return Namespace(
        id=ns_id,
        created_at=timezone.now(),
        friendly_url_name="team",
        logos=[
            Logo(path=f"{ns_id}/a.png", votes=["alice", "bob"]),
            Logo(path=f"{ns_id}/b.svg", description="Blue"),
        ],
    )
