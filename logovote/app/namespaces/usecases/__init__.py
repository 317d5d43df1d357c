from .namespace import NamespaceUseCase
from .superadmin import SuperAdminUseCase

__all__ = [
    "NamespaceUseCase",
    "SuperAdminUseCase",
]
