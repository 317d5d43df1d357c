from __future__ import annotations

from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Self

from logovote.app.namespaces.services import (
    BackupService,
    FriendlyNameRegistry,
    LogoService,
    NamespaceService,
    PruningService,
)
from logovote.app.namespaces.usecases import NamespaceUseCase, SuperAdminUseCase
from logovote.infrastructure.database.filesystem import FileSystemDatabase
from logovote.infrastructure.storage import FileSystemStorage

if TYPE_CHECKING:
    from logovote.app.infrastructure import IStorage
    from logovote.config import AppConfig, DatabaseConfig, StorageConfig

__all__ = [
    "AppContext",
    "UseCases",
]


class AppContext:
    __slots__ = ["usecases", "_infra", "_services", "_stack"]

    def __init__(self, config: AppConfig):
        self._stack = AsyncExitStack()
        self._infra = Infrastructure(config)
        self._services = Services(self._infra, config)
        self.usecases = UseCases(self._services)

    async def __aenter__(self) -> Self:
        await self._stack.enter_async_context(self._infra)
        await self._services.namespace.rebuild_registry()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._stack.aclose()


class Infrastructure:
    __slots__ = ["database", "storage", "_stack"]

    def __init__(self, config: AppConfig):
        self.database = self._get_database(config.database)
        self.storage = self._get_storage(config.storage)
        self._stack = AsyncExitStack()

    async def __aenter__(self) -> Self:
        await self._stack.enter_async_context(self.database)
        await self._stack.enter_async_context(self.storage)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self._stack.aclose()

    @staticmethod
    def _get_database(db_config: DatabaseConfig) -> FileSystemDatabase:
        return FileSystemDatabase(db_config)

    @staticmethod
    def _get_storage(storage_config: StorageConfig) -> IStorage:
        return FileSystemStorage(storage_config)


class Services:
    __slots__ = [
        "backup",
        "logo",
        "namespace",
        "pruning",
        "registry",
    ]

    def __init__(self, infra: Infrastructure, config: AppConfig):
        database = infra.database
        storage = infra.storage

        self.registry = FriendlyNameRegistry()
        self.namespace = NamespaceService(
            database=database,
            storage=storage,
            registry=self.registry,
            key_prefix=f"logovote:{config.database.fs_location}",
        )
        self.logo = LogoService(
            storage=storage,
            max_size=config.features.upload_file_max_size,
        )
        self.pruning = PruningService(
            namespace=self.namespace,
            retention_period=config.features.retention_period,
        )
        self.backup = BackupService(namespace=self.namespace, storage=storage)


class UseCases:
    __slots__ = ["namespace", "superadmin"]

    def __init__(self, services: Services):
        self.namespace = NamespaceUseCase(services=services)
        self.superadmin = SuperAdminUseCase(services=services)
