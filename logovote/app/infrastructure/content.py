from __future__ import annotations

from io import BytesIO
from typing import BinaryIO, Protocol

__all__ = ["IFileContent", "InMemoryFileContent"]


class IFileContent(Protocol):
    """
    An uploaded file. FastAPI's UploadFile satisfies it, so views pass uploads
    straight to the use cases.
    """

    filename: str | None
    size: int | None
    file: BinaryIO

    async def read(self, size: int = -1) -> bytes: ...

    async def seek(self, offset: int) -> None: ...

    async def close(self) -> None: ...


class InMemoryFileContent:
    """File content kept in memory, used by the CLI and tests."""

    __slots__ = ("file", "filename", "size")

    def __init__(self, content: bytes, filename: str | None = None):
        self.file: BinaryIO = BytesIO(content)
        self.filename = filename
        self.size = len(content)

    async def read(self, size: int = -1) -> bytes:
        return self.file.read(size)

    async def seek(self, offset: int) -> None:
        self.file.seek(offset)

    async def close(self) -> None:
        self.file.close()
