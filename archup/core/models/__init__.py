"""
Domain models — Pydantic types for the upgrade dispatcher.

    from archup.core.models import UpgradeConfig, ArchConfig, ArchPackageManager
"""

from archup.core.models.config import ArchConfig, ArchPackageManager, UpgradeConfig

__all__ = [
    "ArchConfig",
    "ArchPackageManager",
    "UpgradeConfig",
]
