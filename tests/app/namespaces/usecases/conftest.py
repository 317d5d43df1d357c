from __future__ import annotations

from unittest import mock

import pytest

from logovote.app.namespaces.services import (
    BackupService,
    FriendlyNameRegistry,
    LogoService,
    NamespaceService,
    PruningService,
)
from logovote.app.namespaces.usecases import NamespaceUseCase, SuperAdminUseCase


@pytest.fixture
def ns_use_case():
    """A NamespaceUseCase instance with mocked services."""
    services = mock.MagicMock(
        logo=mock.MagicMock(spec=LogoService),
        namespace=mock.MagicMock(spec=NamespaceService),
    )
    return NamespaceUseCase(services=services)


@pytest.fixture
def superadmin_use_case():
    """A SuperAdminUseCase instance with mocked services."""
    services = mock.MagicMock(
        backup=mock.MagicMock(spec=BackupService),
        namespace=mock.MagicMock(
            spec=NamespaceService,
            registry=mock.MagicMock(spec=FriendlyNameRegistry),
        ),
        pruning=mock.MagicMock(spec=PruningService),
    )
    return SuperAdminUseCase(services=services)
