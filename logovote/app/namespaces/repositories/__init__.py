from .namespace import INamespaceRepository

__all__ = [
    "INamespaceRepository",
]
