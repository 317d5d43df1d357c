from __future__ import annotations

import io
import uuid
import zipfile
from typing import TYPE_CHECKING

import pytest

from logovote.api.exceptions import InvalidToken, MissingToken
from logovote.api.namespaces.exceptions import NamespaceDeleteFailed
from logovote.api.superadmin.exceptions import InvalidArchive
from logovote.app.namespaces.domain import Namespace
from logovote.app.namespaces.services import BackupService, PruneResult
from logovote.config import config

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from tests.api.conftest import TestClient

pytestmark = [pytest.mark.anyio]


class TestAuth:
    url = "/superadmin/namespaces/list"

    async def test_when_token_is_missing(self, client: TestClient):
        response = await client.get(self.url)
        assert response.status_code == 401
        assert response.json() == MissingToken().as_dict()

    async def test_when_token_is_invalid(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(config.auth, "superadmin_token", "root")
        headers = {"Authorization": "Bearer not-root"}
        response = await client.get(self.url, headers=headers)
        assert response.status_code == 403
        assert response.json() == InvalidToken().as_dict()

    async def test_with_valid_token(
        self,
        client: TestClient,
        superadmin_use_case: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setattr(config.auth, "superadmin_token", "root")
        superadmin_use_case.list_namespaces.return_value = []
        headers = {"Authorization": "Bearer root"}
        response = await client.get(self.url, headers=headers)
        assert response.status_code == 200
        assert response.json() == {"items": []}


class TestDeleteNamespace:
    url = "/superadmin/namespaces/delete"

    async def test(self, client: TestClient, superadmin_use_case: MagicMock):
        # GIVEN
        ns_id = uuid.uuid4()
        superadmin_use_case.delete_namespace.return_value = True
        # WHEN
        client.mock_superadmin()
        response = await client.post(self.url, json={"namespace_id": str(ns_id)})
        # THEN
        assert response.status_code == 200
        superadmin_use_case.delete_namespace.assert_awaited_once_with(ns_id)

    async def test_when_delete_fails(
        self, client: TestClient, superadmin_use_case: MagicMock
    ):
        superadmin_use_case.delete_namespace.return_value = False
        client.mock_superadmin()
        payload = {"namespace_id": str(uuid.uuid4())}
        response = await client.post(self.url, json=payload)
        assert response.status_code == 500
        assert response.json() == NamespaceDeleteFailed().as_dict()


class TestExport:
    url = "/superadmin/export"

    async def test(self, client: TestClient, superadmin_use_case: MagicMock):
        # GIVEN
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("namespaces/a.json", b"{}")
        superadmin_use_case.export.return_value = iter([buffer.getvalue()])
        # WHEN
        client.mock_superadmin()
        response = await client.get(self.url)
        # THEN
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/zip"
        assert "attachment" in response.headers["Content-Disposition"]
        archive = zipfile.ZipFile(io.BytesIO(response.content))
        assert archive.namelist() == ["namespaces/a.json"]


class TestImport:
    url = "/superadmin/import"

    async def test(self, client: TestClient, superadmin_use_case: MagicMock):
        # GIVEN
        superadmin_use_case.import_.return_value = 3
        files = {"file": ("backup.zip", b"zip-content", "application/zip")}
        # WHEN
        client.mock_superadmin()
        response = await client.post(self.url, files=files)
        # THEN
        assert response.status_code == 200
        assert response.json() == {"namespaces": 3}
        superadmin_use_case.import_.assert_awaited_once()

    async def test_when_archive_is_invalid(
        self, client: TestClient, superadmin_use_case: MagicMock
    ):
        superadmin_use_case.import_.side_effect = BackupService.InvalidArchive
        files = {"file": ("backup.zip", b"garbage", "application/zip")}
        client.mock_superadmin()
        response = await client.post(self.url, files=files)
        assert response.status_code == 400
        assert response.json() == InvalidArchive().as_dict()


class TestListNamespaces:
    url = "/superadmin/namespaces/list"

    async def test(
        self,
        client: TestClient,
        superadmin_use_case: MagicMock,
        namespace: Namespace,
    ):
        # GIVEN
        superadmin_use_case.list_namespaces.return_value = [namespace]
        # WHEN
        client.mock_superadmin()
        response = await client.get(self.url)
        # THEN
        assert response.status_code == 200
        [item] = response.json()["items"]
        assert item["id"] == str(namespace.id)
        assert item["friendly_url_name"] == "team"
        assert item["logos"] == 2
        assert item["total_votes"] == 2


class TestPrune:
    url = "/superadmin/prune"

    async def test(self, client: TestClient, superadmin_use_case: MagicMock):
        # GIVEN
        deleted, failed = uuid.uuid4(), uuid.uuid4()
        superadmin_use_case.prune.return_value = PruneResult(
            checked=5, deleted=[deleted], failed=[failed]
        )
        # WHEN
        client.mock_superadmin()
        response = await client.post(self.url)
        # THEN
        assert response.status_code == 200
        assert response.json() == {
            "checked": 5,
            "deleted": [str(deleted)],
            "failed": [str(failed)],
        }
