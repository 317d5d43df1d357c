from __future__ import annotations

import asyncio
import contextlib
import os
import os.path
import shutil
import uuid
from typing import IO, TYPE_CHECKING, Self

from logovote.app.infrastructure import IStorage
from logovote.infrastructure import _fstree

if TYPE_CHECKING:
    from collections.abc import Iterator
    from uuid import UUID
    from zipfile import ZipFile

    from logovote.app.infrastructure import ArchiveMember, IFileContent
    from logovote.config import FileSystemStorageConfig

__all__ = ["FileSystemStorage"]


def _delete(path: str) -> None:
    if not os.path.isdir(path):
        with contextlib.suppress(FileNotFoundError):
            os.unlink(path)


def _write(path: str, file: IO[bytes]) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as buffer:
        shutil.copyfileobj(file, buffer)


class FileSystemStorage(IStorage):
    __slots__ = ("location",)

    def __init__(self, config: FileSystemStorageConfig):
        self.location = os.path.normpath(config.fs_location)

    async def __aenter__(self) -> Self:
        await asyncio.to_thread(os.makedirs, self.location, exist_ok=True)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def _joinpath(self, *paths: str) -> str:
        """
        Join paths to the storage location and return a normalized path.

        Raises:
            ValueError: If resulting path points outside of the storage location.
        """
        fullpath = os.path.normpath(os.path.join(self.location, *paths))
        if os.path.commonpath([self.location, fullpath]) != self.location:
            raise ValueError(f"Path is outside of the storage: {os.path.join(*paths)}")
        return fullpath

    async def delete(self, path: str) -> None:
        await asyncio.to_thread(_delete, self._joinpath(path))

    async def deletedir(self, ns_id: UUID) -> None:
        fullpath = self._joinpath(str(ns_id))
        with contextlib.suppress(FileNotFoundError, NotADirectoryError):
            await asyncio.to_thread(shutil.rmtree, fullpath)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.exists, self._joinpath(path))

    async def save(self, ns_id: UUID, content: IFileContent, *, ext: str) -> str:
        path = f"{ns_id}/{uuid.uuid4().hex}{ext.lower()}"
        fullpath = self._joinpath(path)
        await content.seek(0)
        await asyncio.to_thread(_write, fullpath, content.file)

        return path

    def archive(self, prefix: str) -> Iterator[ArchiveMember]:
        return _fstree.iter_tree(self.location, prefix)

    async def clear(self) -> None:
        await _fstree.clear(self.location)

    async def restore(self, archive: ZipFile, prefix: str) -> int:
        return await _fstree.restore(archive, prefix, self.location)
