from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, cast
from unittest import mock

import pytest

from logovote.app.namespaces.services import PruneResult
from logovote.worker.jobs import namespaces

if TYPE_CHECKING:
    from logovote.worker.main import ARQContext

pytestmark = [pytest.mark.anyio]


class TestPruneNamespaces:
    async def test(self, arq_context: ARQContext):
        # GIVEN
        superadmin = cast(mock.MagicMock, arq_context["usecases"].superadmin)
        expected = PruneResult(checked=2, deleted=[uuid.uuid4()])
        superadmin.prune.return_value = expected
        # WHEN
        result = await namespaces.prune_namespaces(arq_context)
        # THEN
        assert result is expected
        superadmin.prune.assert_awaited_once_with()

    async def test_when_some_namespaces_failed(self, arq_context: ARQContext, caplog):
        superadmin = cast(mock.MagicMock, arq_context["usecases"].superadmin)
        superadmin.prune.return_value = PruneResult(checked=1, failed=[uuid.uuid4()])
        result = await namespaces.prune_namespaces(arq_context)
        assert len(result.failed) == 1
        assert "failed for 1 namespaces" in caplog.text
