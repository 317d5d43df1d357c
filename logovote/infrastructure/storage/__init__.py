from __future__ import annotations

from .filesystem import FileSystemStorage

__all__ = [
    "FileSystemStorage",
]
