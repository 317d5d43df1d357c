from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING, Self

from logovote.app.infrastructure import IDatabase

from .repositories import NamespaceRepository

if TYPE_CHECKING:
    from logovote.config import DatabaseConfig

__all__ = ["FileSystemDatabase"]


class FileSystemDatabase(IDatabase):
    """A database that keeps every namespace as a JSON record in a directory."""

    __slots__ = ("location", "namespace")

    def __init__(self, config: DatabaseConfig):
        self.location = os.path.normpath(config.fs_location)
        self.namespace = NamespaceRepository(self.location)

    async def __aenter__(self) -> Self:
        await asyncio.to_thread(os.makedirs, self.location, exist_ok=True)
        return self

    async def shutdown(self) -> None:
        pass
