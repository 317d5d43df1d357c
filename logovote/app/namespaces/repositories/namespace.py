from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from logovote.app.infrastructure.storage import IArchivable

if TYPE_CHECKING:
    from uuid import UUID

    from logovote.app.namespaces.domain import Namespace


class INamespaceRepository(IArchivable, Protocol):
    async def delete(self, ns_id: UUID) -> bool:
        """
        Deletes a namespace record.

        Args:
            ns_id (UUID): Namespace ID.

        Returns:
            bool: True if a record was deleted, False if it did not exist.
        """

    async def exists(self, ns_id: UUID) -> bool:
        """Returns True if a namespace record with a given ID exists."""

    async def get_by_id(self, ns_id: UUID) -> Namespace:
        """
        Returns a namespace with a given ID.

        Args:
            ns_id (UUID): Namespace ID.

        Raises:
            Namespace.NotFound: If namespace with a given ID does not exist.
            Namespace.Corrupted: If a stored record is not a valid namespace.

        Returns:
            Namespace: A namespace with a target ID.
        """

    async def list_ids(self) -> list[UUID]:
        """Returns IDs of all stored namespaces."""

    async def save(self, namespace: Namespace) -> Namespace:
        """
        Saves a namespace record, replacing the previous one.

        The record is replaced atomically: a concurrent reader sees either the previous
        record or the new one, and a failed save leaves the previous record in place.

        Args:
            namespace (Namespace): a Namespace instance.

        Returns:
            Namespace: A saved namespace.
        """
