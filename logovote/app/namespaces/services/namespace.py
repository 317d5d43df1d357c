from __future__ import annotations

import contextlib
import logging
import secrets
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING, Protocol, TypeVar

from logovote.app.infrastructure import IDatabase
from logovote.app.namespaces.domain import Namespace
from logovote.cache import cache
from logovote.toolkit import timezone

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Sequence
    from uuid import UUID

    from logovote.app.infrastructure import IStorage
    from logovote.app.namespaces.domain import Logo
    from logovote.app.namespaces.repositories import INamespaceRepository

    from .registry import FriendlyNameRegistry

    class IServiceDatabase(IDatabase, Protocol):
        namespace: INamespaceRepository

__all__ = ["NamespaceService"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LOCK_TTL = 30
_REPLACE_TTL = 600
_POLL_INTERVAL = 0.1


class NamespaceService:
    """
    Reads, mutates and deletes namespace records.

    Every change to a namespace goes through `mutate` (or `delete`), which are
    serialized per namespace ID with a cache lock, so two concurrent changes to the
    same namespace never overwrite each other, even from different processes. Changes
    to different namespaces run independently.

    Friendly name registry is local to the process. Other processes learn about
    renames, deletions and imports through a shared registry generation and rebuild
    their registries when it changes.
    """

    __slots__ = ["db", "key_prefix", "registry", "storage", "_generation"]

    def __init__(
        self,
        database: IServiceDatabase,
        storage: IStorage,
        registry: FriendlyNameRegistry,
        *,
        key_prefix: str = "logovote",
    ):
        self.db = database
        self.storage = storage
        self.registry = registry
        self.key_prefix = key_prefix
        self._generation = 0

    @property
    def _generation_key(self) -> str:
        return f"{self.key_prefix}:registry-generation"

    @property
    def _names_lock_key(self) -> str:
        return f"{self.key_prefix}:names"

    @property
    def _replace_lock_key(self) -> str:
        return f"{self.key_prefix}:replace"

    def _lock_key(self, ns_id: UUID) -> str:
        return f"{self.key_prefix}:namespace:{ns_id}"

    @contextlib.asynccontextmanager
    async def _lock(self, ns_id: UUID) -> AsyncIterator[None]:
        """Holds a namespace lock while the store is not being replaced."""
        while True:
            async with cache.lock(self._lock_key(ns_id), expire=_LOCK_TTL, wait=True):
                if not await cache.is_locked(self._replace_lock_key):
                    yield
                    return
            await cache.is_locked(
                self._replace_lock_key, wait=_REPLACE_TTL, step=_POLL_INTERVAL
            )

    async def _registry_changed(self) -> None:
        generation = await cache.incr(self._generation_key)
        # someone else changed it too, so the next sync rebuilds
        if generation == self._generation + 1:
            self._generation = generation

    async def add_logos(self, ns_id: UUID, logos: Sequence[Logo]) -> Namespace:
        """
        Appends logos to a namespace with a single write.

        Raises:
            Namespace.NotFound: If namespace does not exist.
        """
        def _add(namespace: Namespace) -> Namespace:
            namespace.logos.extend(logos)
            return namespace

        return await self.mutate(ns_id, _add)

    async def clear_votes(self, ns_id: UUID) -> Namespace:
        """
        Removes all votes from every logo in a namespace.

        Raises:
            Namespace.NotFound: If namespace does not exist.
        """
        def _clear(namespace: Namespace) -> Namespace:
            for logo in namespace.logos:
                logo.clear_votes()
            return namespace

        return await self.mutate(ns_id, _clear)

    async def create(self) -> Namespace:
        """Creates a new empty namespace with a fresh ID and admin key."""
        namespace = Namespace(created_at=timezone.now())
        async with self._lock(namespace.id):
            await self.db.namespace.save(namespace)
        logger.info("Namespace created: %s", namespace.id)
        return namespace

    async def delete(self, ns_id: UUID) -> bool:
        """
        Deletes a namespace record and all of the namespace files.

        Both the record and the files are attempted to be deleted even if one of them
        fails. Anything that is already absent counts as deleted. Nothing is restored
        on failure.

        Returns:
            bool: True if namespace is completely gone, False if something failed.
        """
        success = True
        async with self._lock(ns_id):
            try:
                if not await self.db.namespace.delete(ns_id):
                    logger.info("Namespace record not found (already deleted?): %s", ns_id)
            except OSError:
                logger.exception("Failed to delete namespace record: %s", ns_id)
                success = False
            else:
                self.registry.remove(ns_id)
                await self._registry_changed()

            try:
                await self.storage.deletedir(ns_id)
            except OSError:
                logger.exception("Failed to delete namespace files: %s", ns_id)
                success = False

        if success:
            logger.info("Namespace deleted: %s", ns_id)
        return success

    async def delete_logo(self, ns_id: UUID, logo_id: UUID) -> Logo:
        """
        Removes a logo from a namespace and then deletes the logo file.

        The record is saved before the file is deleted. If the file can't be deleted
        it is left on the storage and the logo is still considered deleted.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
        """
        logo = await self.mutate(ns_id, lambda namespace: namespace.pop_logo(logo_id))
        try:
            await self.storage.delete(logo.path)
        except (OSError, ValueError):
            logger.exception("Failed to delete logo file, leaving it: %s", logo.path)
        return logo

    async def exists(self, ns_id: UUID) -> bool:
        """Returns True if a namespace with a given ID exists."""
        return await self.db.namespace.exists(ns_id)

    async def get_by_friendly_name(self, name: str) -> Namespace:
        """
        Returns a namespace known under a given friendly name.

        Raises:
            Namespace.NotFound: If there is no namespace with such friendly name.
        """
        await self.sync_registry()
        ns_id = self.registry.lookup(name)
        return await self.get_by_id(ns_id)

    async def get_by_id(self, ns_id: UUID) -> Namespace:
        """
        Returns a namespace with a given ID.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Namespace.Corrupted: If a namespace record can't be read.
        """
        return await self.db.namespace.get_by_id(ns_id)

    async def list_all(self) -> list[Namespace]:
        """Returns all namespaces. Records that can't be read are skipped."""
        namespaces = []
        for ns_id in await self.db.namespace.list_ids():
            try:
                namespaces.append(await self.db.namespace.get_by_id(ns_id))
            except Namespace.NotFound:
                continue
            except (Namespace.Corrupted, OSError):
                logger.exception("Failed to read namespace: %s", ns_id)
        return namespaces

    async def list_ids(self) -> list[UUID]:
        """Returns IDs of all namespaces."""
        return await self.db.namespace.list_ids()

    async def mutate(self, ns_id: UUID, fn: Callable[[Namespace], T]) -> T:
        """
        Reads a namespace, applies `fn` to it and saves the result.

        Mutations of the same namespace are applied one at a time. If `fn` raises,
        nothing is saved and the exception propagates.

        Raises:
            Namespace.NotFound: If namespace does not exist.

        Returns:
            T: Whatever `fn` returns.
        """
        async with self._lock(ns_id):
            namespace = await self.db.namespace.get_by_id(ns_id)
            result = fn(namespace)
            await self.db.namespace.save(namespace)
        return result

    async def rebuild_registry(self) -> None:
        """Fills friendly name registry from all namespace records."""
        generation = await cache.get(self._generation_key, default=0)
        self.registry.rebuild(await self.list_all())
        self._generation = generation

    async def rename(self, ns_id: UUID, name: str | None) -> Namespace:
        """
        Sets a new friendly name for a namespace. Empty name removes friendly name.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Namespace.FriendlyNameTaken: If another namespace already has this name.
        """
        def _rename(namespace: Namespace) -> Namespace:
            # registry goes first and stays ahead of the record if the save fails
            namespace.friendly_url_name = self.registry.rename(
                namespace.id, namespace.friendly_url_name, name
            )
            return namespace

        async with cache.lock(self._names_lock_key, expire=_LOCK_TTL, wait=True):
            async with self._lock(ns_id):
                await self.sync_registry()
                namespace = await self.db.namespace.get_by_id(ns_id)
                await self.db.namespace.save(_rename(namespace))
                await self._registry_changed()
        return namespace

    @contextlib.asynccontextmanager
    async def replacing(self) -> AsyncIterator[None]:
        """
        Blocks every namespace change in every process while the store is replaced.

        Changes already in progress are waited for. On exit the registry is rebuilt
        from whatever records the store holds.
        """
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(
                cache.lock(self._replace_lock_key, expire=_REPLACE_TTL, wait=True)
            )
            for ns_id in await self.db.namespace.list_ids():
                await stack.enter_async_context(
                    cache.lock(self._lock_key(ns_id), expire=_REPLACE_TTL, wait=True)
                )
            try:
                yield
            finally:
                await self.rebuild_registry()
                await self._registry_changed()

    async def set_description(
        self, ns_id: UUID, logo_id: UUID, description: str
    ) -> Logo:
        """
        Updates logo description.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
        """
        def _set_description(namespace: Namespace) -> Logo:
            logo = namespace.get_logo(logo_id)
            logo.description = description
            return logo

        return await self.mutate(ns_id, _set_description)

    async def sync_registry(self) -> None:
        """Rebuilds friendly name registry if another process has changed it."""
        if await cache.get(self._generation_key, default=0) != self._generation:
            await self.rebuild_registry()

    async def validate_owner(self, ns_id: UUID, admin_key: str) -> bool:
        """Returns True if namespace exists and admin key matches, False otherwise."""
        try:
            namespace = await self.db.namespace.get_by_id(ns_id)
        except Namespace.NotFound:
            return False
        return secrets.compare_digest(
            namespace.admin_key.encode(), admin_key.encode()
        )

    async def vote(self, ns_id: UUID, logo_id: UUID, identifier: str) -> int:
        """
        Records a vote for a logo.

        Raises:
            Namespace.NotFound: If namespace does not exist.
            Logo.NotFound: If there is no such logo in the namespace.
            Logo.AlreadyVoted: If identifier has already voted for this logo.

        Returns:
            int: Vote count of the logo after the vote.
        """
        return await self.mutate(
            ns_id, lambda namespace: namespace.get_logo(logo_id).add_vote(identifier)
        )
