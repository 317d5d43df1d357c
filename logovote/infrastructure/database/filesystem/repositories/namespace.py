from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import os.path
import uuid
from typing import TYPE_CHECKING

from logovote.app.namespaces.domain import Namespace
from logovote.app.namespaces.repositories import INamespaceRepository
from logovote.infrastructure import _fstree

if TYPE_CHECKING:
    from collections.abc import Iterator
    from uuid import UUID
    from zipfile import ZipFile

    from logovote.app.infrastructure import ArchiveMember

__all__ = ["NamespaceRepository"]

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


def _read(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _write(path: str, content: bytes) -> None:
    dirname, basename = os.path.split(path)
    tmp_path = os.path.join(dirname, f".{basename}.{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise


class NamespaceRepository(INamespaceRepository):
    __slots__ = ("location",)

    def __init__(self, location: str):
        self.location = location

    def _record_path(self, ns_id: UUID) -> str:
        return os.path.join(self.location, f"{ns_id}{_SUFFIX}")

    async def delete(self, ns_id: UUID) -> bool:
        try:
            await asyncio.to_thread(os.unlink, self._record_path(ns_id))
        except FileNotFoundError:
            return False
        return True

    async def exists(self, ns_id: UUID) -> bool:
        return await asyncio.to_thread(os.path.isfile, self._record_path(ns_id))

    async def get_by_id(self, ns_id: UUID) -> Namespace:
        try:
            record = await asyncio.to_thread(_read, self._record_path(ns_id))
        except FileNotFoundError as exc:
            msg = f"Namespace with id={ns_id} does not exist"
            raise Namespace.NotFound(msg) from exc

        return Namespace.from_record(ns_id, record)

    async def list_ids(self) -> list[UUID]:
        try:
            names = await asyncio.to_thread(os.listdir, self.location)
        except FileNotFoundError:
            return []

        ids = []
        for name in sorted(names):
            if name.startswith(".") or not name.endswith(_SUFFIX):
                continue
            try:
                ids.append(uuid.UUID(name[:-len(_SUFFIX)]))
            except ValueError:
                logger.warning("Skipping unexpected file in namespaces dir: %s", name)
        return ids

    async def save(self, namespace: Namespace) -> Namespace:
        record = namespace.as_record()
        await asyncio.to_thread(_write, self._record_path(namespace.id), record)
        return namespace

    def archive(self, prefix: str) -> Iterator[ArchiveMember]:
        return _fstree.iter_tree(self.location, prefix)

    async def clear(self) -> None:
        await _fstree.clear(self.location)

    async def restore(self, archive: ZipFile, prefix: str) -> int:
        return await _fstree.restore(archive, prefix, self.location)
