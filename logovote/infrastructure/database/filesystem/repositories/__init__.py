from .namespace import NamespaceRepository

__all__ = [
    "NamespaceRepository",
]
