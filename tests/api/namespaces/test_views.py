from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from logovote.api.exceptions import NamespaceNotFound
from logovote.api.namespaces.exceptions import (
    FriendlyNameTaken,
    NamespaceDeleteFailed,
)
from logovote.app.namespaces.domain import Namespace

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from tests.api.conftest import TestClient

pytestmark = [pytest.mark.anyio]


class TestClearVotes:
    url = "/namespaces/clear_votes"

    async def test(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        # GIVEN
        for logo in namespace.logos:
            logo.clear_votes()
        ns_use_case.clear_votes.return_value = namespace
        # WHEN
        client.mock_admin(namespace)
        response = await client.post(self.url)
        # THEN
        assert response.status_code == 200
        assert response.json()["total_votes"] == 0
        ns_use_case.clear_votes.assert_awaited_once_with(namespace.id)


class TestCreate:
    url = "/namespaces/create"

    async def test(self, client: TestClient, ns_use_case: MagicMock):
        # GIVEN
        namespace = Namespace()
        ns_use_case.create_namespace.return_value = namespace
        # WHEN
        response = await client.post(self.url)
        # THEN
        assert response.status_code == 200
        assert response.json() == {
            "namespace_id": str(namespace.id),
            "admin_key": namespace.admin_key,
        }


class TestDelete:
    url = "/namespaces/delete"

    async def test(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        # GIVEN
        ns_use_case.delete_namespace.return_value = True
        # WHEN
        client.mock_admin(namespace)
        response = await client.post(self.url)
        # THEN
        assert response.status_code == 200
        assert response.json() is None
        ns_use_case.delete_namespace.assert_awaited_once_with(namespace.id)

    async def test_when_delete_fails(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        ns_use_case.delete_namespace.return_value = False
        client.mock_admin(namespace)
        response = await client.post(self.url)
        assert response.status_code == 500
        assert response.json() == NamespaceDeleteFailed().as_dict()


class TestGet:
    url = "/namespaces/get"

    async def test(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        # GIVEN
        ns_use_case.get_namespace.return_value = namespace
        logo = namespace.logos[0]
        # WHEN
        response = await client.get(self.url, params={"namespace_id": str(namespace.id)})
        # THEN
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(namespace.id)
        assert data["friendly_url_name"] == "team"
        assert data["total_votes"] == 2
        assert data["logos"][0] == {
            "id": str(logo.id),
            "path": logo.path,
            "url": f"http://test/uploads/{logo.path}",
            "description": "",
            "votes": 2,
        }
        assert data["logos"][1]["description"] == "Blue"
        ns_use_case.get_namespace.assert_awaited_once_with(namespace.id)

    async def test_when_namespace_does_not_exist(
        self, client: TestClient, ns_use_case: MagicMock
    ):
        ns_use_case.get_namespace.side_effect = Namespace.NotFound
        response = await client.get(self.url, params={"namespace_id": str(uuid.uuid4())})
        assert response.status_code == 404
        assert response.json() == NamespaceNotFound().as_dict()

    async def test_when_namespace_id_is_malformed(self, client: TestClient):
        response = await client.get(self.url, params={"namespace_id": "nope"})
        assert response.status_code == 422


class TestRename:
    url = "/namespaces/rename"

    async def test(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        # GIVEN
        ns_use_case.rename.return_value = namespace
        # WHEN
        client.mock_admin(namespace)
        response = await client.post(self.url, json={"name": "Team"})
        # THEN
        assert response.status_code == 200
        assert response.json()["friendly_url_name"] == "team"
        ns_use_case.rename.assert_awaited_once_with(namespace.id, "Team")

    async def test_when_name_is_taken(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        ns_use_case.rename.side_effect = Namespace.FriendlyNameTaken
        client.mock_admin(namespace)
        response = await client.post(self.url, json={"name": "taken"})
        assert response.status_code == 409
        assert response.json() == FriendlyNameTaken().as_dict()


class TestResolve:
    url = "/namespaces/resolve"

    async def test(
        self, client: TestClient, ns_use_case: MagicMock, namespace: Namespace
    ):
        # GIVEN
        ns_use_case.resolve.return_value = namespace
        # WHEN
        response = await client.get(self.url, params={"name": "Team"})
        # THEN
        assert response.status_code == 200
        assert response.json() == {
            "namespace_id": str(namespace.id),
            "friendly_url_name": "team",
        }
        ns_use_case.resolve.assert_awaited_once_with("Team")

    async def test_when_name_is_unknown(
        self, client: TestClient, ns_use_case: MagicMock
    ):
        ns_use_case.resolve.side_effect = Namespace.NotFound
        response = await client.get(self.url, params={"name": "nobody"})
        assert response.status_code == 404
        assert response.json() == NamespaceNotFound().as_dict()
