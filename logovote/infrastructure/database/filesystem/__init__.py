from .db import FileSystemDatabase

__all__ = ["FileSystemDatabase"]
