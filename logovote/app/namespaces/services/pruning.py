from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from logovote.app.namespaces.domain import Namespace
from logovote.toolkit import timezone

if TYPE_CHECKING:
    from datetime import datetime, timedelta
    from uuid import UUID

    from .namespace import NamespaceService

__all__ = ["PruneResult", "PruningService"]

logger = logging.getLogger(__name__)


class PruneResult:
    __slots__ = ("checked", "deleted", "failed")

    def __init__(
        self,
        checked: int = 0,
        deleted: list[UUID] | None = None,
        failed: list[UUID] | None = None,
    ) -> None:
        self.checked = checked
        self.deleted = deleted if deleted is not None else []
        self.failed = failed if failed is not None else []

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"checked={self.checked!r}, "
            f"deleted={self.deleted!r}, "
            f"failed={self.failed!r}"
            ")"
        )


class PruningService:
    """Deletes namespaces that nobody voted in for the whole retention period."""

    __slots__ = ["namespace", "retention_period"]

    def __init__(self, namespace: NamespaceService, *, retention_period: timedelta):
        self.namespace = namespace
        self.retention_period = retention_period

    @staticmethod
    def is_stale(namespace: Namespace, *, created_before: datetime) -> bool:
        """
        True if namespace was created strictly before the given moment and has no
        votes, False otherwise. Namespaces without creation date are never stale.
        """
        if namespace.created_at is None or namespace.created_at >= created_before:
            return False
        return namespace.total_votes() == 0

    async def sweep(self) -> PruneResult:
        """
        Deletes every stale namespace.

        Each namespace is checked and deleted on its own, so a failure with one of them
        is logged and the sweep goes on with the rest.
        """
        logger.info("Pruning old, empty namespaces...")
        created_before = timezone.ago(self.retention_period)
        result = PruneResult()

        for ns_id in await self.namespace.list_ids():
            result.checked += 1
            try:
                namespace = await self.namespace.get_by_id(ns_id)
            except Namespace.NotFound:
                continue
            except Exception:
                logger.exception("Failed to read namespace, skipping: %s", ns_id)
                result.failed.append(ns_id)
                continue

            if not self.is_stale(namespace, created_before=created_before):
                continue

            logger.info(
                "Pruning namespace %s: created at %s and has 0 votes",
                ns_id,
                namespace.created_at,
            )
            if await self.namespace.delete(ns_id):
                result.deleted.append(ns_id)
            else:
                result.failed.append(ns_id)

        logger.info(
            "Pruning finished: checked %d, deleted %d, failed %d",
            result.checked,
            len(result.deleted),
            len(result.failed),
        )
        return result
