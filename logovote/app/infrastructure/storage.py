from __future__ import annotations

import abc
import datetime
from typing import IO, TYPE_CHECKING, NamedTuple, Protocol, Self

if TYPE_CHECKING:
    from collections.abc import Iterator
    from uuid import UUID
    from zipfile import ZipFile

    from .content import IFileContent

__all__ = ["ArchiveMember", "IArchivable", "IStorage"]


class ArchiveMember(NamedTuple):
    path: str
    modified_at: datetime.datetime
    perms: int
    content: IO[bytes]


class IArchivable(Protocol):
    @abc.abstractmethod
    def archive(self, prefix: str) -> Iterator[ArchiveMember]:
        """
        Return an iterator over every stored file as an archive member. Member paths
        are relative to the storage root and start with a given prefix.

        Empty or missing storage root yields nothing.
        """

    @abc.abstractmethod
    async def clear(self) -> None:
        """Delete everything in the storage, leaving an empty storage root behind."""

    @abc.abstractmethod
    async def restore(self, archive: ZipFile, prefix: str) -> int:
        """
        Extract archive members under a given prefix into the storage root.

        Members outside of the prefix or pointing outside of the storage root are
        ignored.

        Returns:
            int: Number of extracted files.
        """


class IStorage(IArchivable, Protocol):
    location: str

    @abc.abstractmethod
    async def __aenter__(self) -> Self:
        raise NotImplementedError()  # pragma: no cover

    @abc.abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        raise NotImplementedError()  # pragma: no cover

    @abc.abstractmethod
    async def delete(self, path: str) -> None:
        """
        Delete a file by its storage-relative path.

        If path does not exists or path is a directory, it will act as a no-op.
        """

    @abc.abstractmethod
    async def deletedir(self, ns_id: UUID) -> None:
        """
        Delete all files uploaded to a namespace.

        If a namespace has no files, it will act as a no-op.
        """

    @abc.abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether a file exists at a given storage-relative path."""

    @abc.abstractmethod
    async def save(self, ns_id: UUID, content: IFileContent, *, ext: str) -> str:
        """
        Save content under a new unique name within a namespace folder.

        Returns:
            str: Storage-relative path of a saved file, e.g. '<ns_id>/<name><ext>'.
        """
