from __future__ import annotations

import itertools
import logging
import zipfile
from typing import TYPE_CHECKING, ClassVar

import stream_zip

if TYPE_CHECKING:
    from collections.abc import Iterator

    from logovote.app.infrastructure import IFileContent, IStorage

    from .namespace import NamespaceService

__all__ = ["BackupService"]

logger = logging.getLogger(__name__)


class InvalidArchive(Exception):
    pass


class BackupService:
    """
    Exports the whole store into a ZIP archive and replaces the store from one.

    An archive has two top-level folders: 'namespaces' with namespace records and
    'uploads' with uploaded logo files.
    """

    InvalidArchive: ClassVar[type[InvalidArchive]] = InvalidArchive

    RECORDS_PREFIX: ClassVar[str] = "namespaces"
    FILES_PREFIX: ClassVar[str] = "uploads"

    __slots__ = ["namespace", "storage"]

    def __init__(self, namespace: NamespaceService, storage: IStorage):
        self.namespace = namespace
        self.storage = storage

    def export(self) -> Iterator[bytes]:
        """Return an iterator over a zipped content of the whole store."""
        members = itertools.chain(
            self.namespace.db.namespace.archive(self.RECORDS_PREFIX),
            self.storage.archive(self.FILES_PREFIX),
        )
        return stream_zip.stream_zip(  # type: ignore[no-any-return]
            (
                member.path,
                member.modified_at,
                member.perms,
                stream_zip.ZIP_32,
                member.content,
            )
            for member in members
        )

    async def import_(self, content: IFileContent) -> int:
        """
        Replaces everything in the store with the archive content and rebuilds the
        friendly name registry.

        This is destructive: all current namespaces and files are deleted first. If
        extraction fails midway, the store is left as extraction left it.

        Raises:
            BackupService.InvalidArchive: If content is not a ZIP archive. The store is
                left untouched in that case.

        Returns:
            int: Number of imported namespace records.
        """
        await content.seek(0)
        try:
            archive = zipfile.ZipFile(content.file)
        except zipfile.BadZipFile as exc:
            raise self.InvalidArchive() from exc

        logger.warning("Replacing all namespaces and uploads from an archive")
        with archive:
            async with self.namespace.replacing():
                await self.namespace.db.namespace.clear()
                await self.storage.clear()
                records = await self.namespace.db.namespace.restore(
                    archive, self.RECORDS_PREFIX
                )
                files = await self.storage.restore(archive, self.FILES_PREFIX)

        logger.info("Imported %d namespace records and %d files", records, files)
        return records
