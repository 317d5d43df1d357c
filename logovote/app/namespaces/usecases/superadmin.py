from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator
    from uuid import UUID

    from logovote.app.infrastructure import IFileContent
    from logovote.app.namespaces.domain import Namespace
    from logovote.app.namespaces.services import (
        BackupService,
        NamespaceService,
        PruneResult,
        PruningService,
    )

    class IUseCaseServices(Protocol):
        backup: BackupService
        namespace: NamespaceService
        pruning: PruningService

__all__ = ["SuperAdminUseCase"]


class SuperAdminUseCase:
    __slots__ = ["backup", "namespace", "pruning"]

    def __init__(self, services: IUseCaseServices):
        self.backup = services.backup
        self.namespace = services.namespace
        self.pruning = services.pruning

    async def delete_namespace(self, ns_id: UUID) -> bool:
        """Deletes any namespace. Returns False if deletion partially failed."""
        return await self.namespace.delete(ns_id)

    def export(self) -> Iterator[bytes]:
        """Returns zipped content of all namespaces and uploaded files."""
        return self.backup.export()

    async def import_(self, content: IFileContent) -> int:
        """
        Replaces all namespaces and uploaded files with an archive content.

        Raises:
            BackupService.InvalidArchive: If content is not a valid archive.
        """
        return await self.backup.import_(content)

    async def list_namespaces(self) -> list[Namespace]:
        """Returns all namespaces."""
        return await self.namespace.list_all()

    async def prune(self) -> PruneResult:
        """Deletes old namespaces without votes right away."""
        return await self.pruning.sweep()

    async def rebuild_names(self) -> int:
        """
        Rebuilds friendly name registry from namespace records.

        Returns:
            int: Number of registered friendly names.
        """
        await self.namespace.rebuild_registry()
        return len(self.namespace.registry)
