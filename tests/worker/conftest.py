from __future__ import annotations

from contextlib import AsyncExitStack
from typing import TYPE_CHECKING
from unittest import mock

import pytest

from logovote.app.namespaces.usecases import SuperAdminUseCase
from logovote.infrastructure.context import UseCases

if TYPE_CHECKING:
    from logovote.worker.main import ARQContext


@pytest.fixture
def arq_context() -> ARQContext:
    return {
        "usecases": mock.MagicMock(
            UseCases,
            superadmin=mock.MagicMock(SuperAdminUseCase),
        ),
        "_stack": AsyncExitStack(),
    }
