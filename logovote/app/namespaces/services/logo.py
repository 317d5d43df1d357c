from __future__ import annotations

import logging
import os
import os.path
from typing import TYPE_CHECKING

from logovote.app.namespaces.domain import Logo
from logovote.toolkit import mediatypes

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from logovote.app.infrastructure import IFileContent, IStorage

__all__ = ["LogoService"]

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".svg"})
ALLOWED_MEDIATYPES = frozenset({
    mediatypes.IMAGE_JPEG,
    mediatypes.IMAGE_PNG,
    mediatypes.IMAGE_SVG,
})


def _get_size(content: IFileContent) -> int:
    if content.size is not None:
        return content.size
    content.file.seek(0, os.SEEK_END)
    return content.file.tell()


class LogoService:
    """Validates uploaded images and keeps them in the content storage."""

    __slots__ = ["storage", "max_size"]

    def __init__(self, storage: IStorage, *, max_size: int):
        self.storage = storage
        self.max_size = max_size

    def check(self, content: IFileContent) -> str:
        """
        Checks that content is a supported image within the size limit.

        Both file extension and media type guessed from the content must be one of
        jpeg, png or svg.

        Raises:
            Logo.TooLarge: If content exceeds max upload size.
            Logo.UnsupportedType: If content is not a supported image.

        Returns:
            str: Lower-cased file extension.
        """
        _, ext = os.path.splitext(content.filename or "")
        ext = ext.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise Logo.UnsupportedType(f"Unsupported file extension: '{ext}'")

        mediatype = mediatypes.guess(content.file, name=content.filename)
        if mediatype not in ALLOWED_MEDIATYPES:
            raise Logo.UnsupportedType(f"Unsupported media type: '{mediatype}'")

        if _get_size(content) > self.max_size:
            raise Logo.TooLarge()

        return ext

    async def create(self, ns_id: UUID, content: IFileContent) -> Logo:
        """
        Saves content as a new logo file in a namespace folder.

        The returned logo is not added to the namespace.

        Raises:
            Logo.TooLarge: If content exceeds max upload size.
            Logo.UnsupportedType: If content is not a supported image.
        """
        ext = self.check(content)
        path = await self.storage.save(ns_id, content, ext=ext)
        return Logo(path=path)

    async def delete_files(self, logos: Iterable[Logo]) -> None:
        """Deletes files of given logos. Failures are logged and skipped."""
        for logo in logos:
            try:
                await self.storage.delete(logo.path)
            except (OSError, ValueError):
                logger.exception("Failed to delete logo file: %s", logo.path)

    async def delete_namespace_files(self, ns_id: UUID) -> None:
        """Deletes a folder with all logo files of a namespace. Failures are logged."""
        try:
            await self.storage.deletedir(ns_id)
        except OSError:
            logger.exception("Failed to delete logo files of namespace: %s", ns_id)
