from __future__ import annotations

from . import friendly_name
from .logo import Logo
from .namespace import Namespace

__all__ = [
    "Logo",
    "Namespace",
    "friendly_name",
]
