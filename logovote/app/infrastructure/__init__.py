from .content import IFileContent, InMemoryFileContent
from .database import IDatabase
from .storage import ArchiveMember, IArchivable, IStorage

__all__ = [
    "ArchiveMember",
    "IArchivable",
    "IDatabase",
    "IFileContent",
    "IStorage",
    "InMemoryFileContent",
]
