from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from logovote.app.namespaces.domain import Namespace, friendly_name

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

__all__ = ["FriendlyNameRegistry"]

logger = logging.getLogger(__name__)


class FriendlyNameRegistry:
    """
    In-memory lookup from a friendly name (slug) to a namespace ID.

    The registry is derived state: namespace records are the source of truth and the
    registry can be rebuilt from them at any time. It is populated once on startup
    with `rebuild` and then kept up to date by namespace renames and deletions.
    """

    __slots__ = ("_ids",)

    def __init__(self) -> None:
        self._ids: dict[str, UUID] = {}

    def __contains__(self, name: str) -> bool:
        slug = friendly_name.normalize(name)
        return slug is not None and slug in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def lookup(self, name: str) -> UUID:
        """
        Returns an ID of a namespace known under a given friendly name.

        The name is normalized before lookup, so 'My Team' and 'my-team' are the same.

        Raises:
            Namespace.NotFound: If no namespace has such friendly name.
        """
        slug = friendly_name.normalize(name)
        if slug is None or slug not in self._ids:
            raise Namespace.NotFound(f"No namespace with friendly name '{name}'")
        return self._ids[slug]

    def rebuild(self, namespaces: Iterable[Namespace]) -> None:
        """
        Replaces registry content with friendly names of given namespaces.

        If two namespaces share the same friendly name, the last one wins.
        """
        self._ids.clear()
        for namespace in namespaces:
            slug = friendly_name.normalize(namespace.friendly_url_name)
            if slug is None:
                continue
            if (owner_id := self._ids.get(slug)) is not None and owner_id != namespace.id:
                logger.warning(
                    "Friendly name '%s' is used by both %s and %s, keeping the latter",
                    slug,
                    owner_id,
                    namespace.id,
                )
            self._ids[slug] = namespace.id

        logger.info("Friendly name registry rebuilt with %d entries", len(self._ids))

    def remove(self, ns_id: UUID) -> None:
        """Drops all friendly names pointing to a given namespace."""
        for slug in [slug for slug, owner_id in self._ids.items() if owner_id == ns_id]:
            del self._ids[slug]

    def rename(
        self, ns_id: UUID, old_name: str | None, new_name: str | None
    ) -> str | None:
        """
        Moves namespace from an old friendly name to a new one.

        A new name that normalizes to nothing just drops the old name.

        Raises:
            Namespace.FriendlyNameTaken: If a new name belongs to another namespace.
                Registry is left untouched in that case.

        Returns:
            str | None: Normalized new name.
        """
        new_slug = friendly_name.normalize(new_name)
        if new_slug is not None:
            owner_id = self._ids.get(new_slug)
            if owner_id is not None and owner_id != ns_id:
                raise Namespace.FriendlyNameTaken(
                    f"Friendly name '{new_slug}' is already taken"
                )

        old_slug = friendly_name.normalize(old_name)
        if old_slug is not None and self._ids.get(old_slug) == ns_id:
            del self._ids[old_slug]

        if new_slug is not None:
            self._ids[new_slug] = ns_id
        return new_slug
