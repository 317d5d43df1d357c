from __future__ import annotations

import asyncio
import contextlib
import datetime
import glob
import logging
import os
import os.path
import shutil
from typing import TYPE_CHECKING

from logovote.app.infrastructure.storage import ArchiveMember

if TYPE_CHECKING:
    from collections.abc import Iterator
    from zipfile import ZipFile

__all__ = ["clear", "iter_tree", "restore"]

logger = logging.getLogger(__name__)


def iter_tree(root: str, prefix: str) -> Iterator[ArchiveMember]:
    """
    Yields every regular file under the root as an archive member named
    '<prefix>/<path relative to root>'. Hidden files are skipped.
    """
    pathnames = glob.iglob(os.path.join(root, "**/*"), recursive=True)
    for pathname in sorted(pathnames):
        if os.path.isdir(pathname):
            continue

        relpath = os.path.relpath(pathname, root).replace(os.sep, "/")
        try:
            stat = os.lstat(pathname)
            content = open(pathname, "rb")
        except FileNotFoundError:
            logger.info("Skipping a file deleted during archiving: %s", pathname)
            continue

        with content:
            yield ArchiveMember(
                path=f"{prefix}/{relpath}",
                modified_at=datetime.datetime.fromtimestamp(stat.st_mtime),
                perms=0o600,
                content=content,
            )


async def clear(root: str) -> None:
    """Removes root with everything in it and creates it again empty."""
    with contextlib.suppress(FileNotFoundError):
        await asyncio.to_thread(shutil.rmtree, root)
    await asyncio.to_thread(os.makedirs, root, exist_ok=True)


async def restore(archive: ZipFile, prefix: str, root: str) -> int:
    """Extracts members named '<prefix>/...' into the root."""
    return await asyncio.to_thread(_restore, archive, prefix, root)


def _restore(archive: ZipFile, prefix: str, root: str) -> int:
    base = os.path.realpath(root)
    extracted = 0
    for info in archive.infolist():
        if info.is_dir():
            continue

        head, _, relpath = info.filename.partition("/")
        if head != prefix or not relpath:
            continue

        target = os.path.realpath(os.path.join(base, relpath))
        if target == base or os.path.commonpath([base, target]) != base:
            logger.warning("Skipping unsafe archive member: %s", info.filename)
            continue

        os.makedirs(os.path.dirname(target), exist_ok=True)
        with archive.open(info) as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
        extracted += 1

    return extracted
