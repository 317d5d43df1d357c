from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from logovote.app.namespaces.repositories import INamespaceRepository

__all__ = ["IDatabase"]


class IDatabase(Protocol):
    namespace: INamespaceRepository

    async def __aenter__(self) -> Self:
        return self  # pragma: no cover

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()

    async def shutdown(self) -> None:
        """Releases database resources."""
