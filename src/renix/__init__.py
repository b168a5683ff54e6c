"""
renix - rebuild a pinned NixOS configuration and commit it when the build succeeds
"""

__version__ = "0.3.0"

from .core import RebuildOrchestrator
from .errors import RenixError

__all__ = ["RebuildOrchestrator", "RenixError"]
