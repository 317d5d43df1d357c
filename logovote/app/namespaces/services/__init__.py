from .backup import BackupService
from .logo import LogoService
from .namespace import NamespaceService
from .pruning import PruneResult, PruningService
from .registry import FriendlyNameRegistry

__all__ = [
    "BackupService",
    "FriendlyNameRegistry",
    "LogoService",
    "NamespaceService",
    "PruneResult",
    "PruningService",
]
