"""
Backend registry — picks the one package tool an upgrade runs through.

Autodetection walks a fixed priority order and the first installed tool
wins. The user can force a single backend instead; nothing else about
the order is configurable.
"""

from __future__ import annotations

import logging
from typing import Any

from archup.adapters.arch import (
    Aura,
    GarudaUpdate,
    Pacman,
    Pamac,
    Paru,
    Pikaur,
    Trizen,
    Yay,
)
from archup.adapters.base import Backend, ExecutionContext
from archup.core.errors import BackendUnavailable
from archup.core.models.config import ArchPackageManager

logger = logging.getLogger(__name__)

BACKENDS: dict[ArchPackageManager, type[Backend]] = {
    ArchPackageManager.GARUDA_UPDATE: GarudaUpdate,
    ArchPackageManager.PARU: Paru,
    ArchPackageManager.YAY: Yay,
    ArchPackageManager.TRIZEN: Trizen,
    ArchPackageManager.PIKAUR: Pikaur,
    ArchPackageManager.PAMAC: Pamac,
    ArchPackageManager.PACMAN: Pacman,
    ArchPackageManager.AURA: Aura,
}

# Autodetection priority, highest first:
#   1. garuda_update
#   2. paru
#   3. yay
#   4. trizen
#   5. pikaur
#   6. pamac
#   7. pacman         repositories only, needs sudo
#   8. aura
AUTODETECT_ORDER: tuple[ArchPackageManager, ...] = (
    ArchPackageManager.GARUDA_UPDATE,
    ArchPackageManager.PARU,
    ArchPackageManager.YAY,
    ArchPackageManager.TRIZEN,
    ArchPackageManager.PIKAUR,
    ArchPackageManager.PAMAC,
    ArchPackageManager.PACMAN,
    ArchPackageManager.AURA,
)


class BackendRegistry:
    """Resolve the configured backend selector to an installed backend."""

    def __init__(
        self,
        backends: dict[ArchPackageManager, type[Backend]] | None = None,
        order: tuple[ArchPackageManager, ...] = AUTODETECT_ORDER,
    ):
        self._backends = dict(BACKENDS if backends is None else backends)
        self._order = order

    @property
    def order(self) -> tuple[ArchPackageManager, ...]:
        return self._order

    def detect(self, ctx: ExecutionContext, selector: ArchPackageManager) -> Backend | None:
        """Detect one specific backend, or None if its tool is missing."""
        backend_cls = self._backends.get(selector)
        if backend_cls is None:
            return None
        return backend_cls.detect(ctx)

    def find(self, ctx: ExecutionContext) -> Backend | None:
        """Return the selected backend, or None when nothing matches."""
        selector = ctx.arch.package_manager
        if selector != ArchPackageManager.AUTODETECT:
            return self.detect(ctx, selector)

        for candidate in self._order:
            backend = self.detect(ctx, candidate)
            if backend is not None:
                return backend
            logger.debug("Backend %s not found", candidate.value)
        return None

    def resolve(self, ctx: ExecutionContext) -> Backend:
        """Return the selected backend.

        Raises:
            BackendUnavailable: No candidate is installed.
        """
        backend = self.find(ctx)
        if backend is None:
            raise BackendUnavailable(ctx.arch.package_manager.value)
        logger.info("Using %s (%s)", backend.name, backend.executable)
        return backend

    def status(self, ctx: ExecutionContext) -> dict[str, dict[str, Any]]:
        """Detection result for every backend, in priority order."""
        status: dict[str, dict[str, Any]] = {}
        for priority, candidate in enumerate(self._order, start=1):
            backend = self.detect(ctx, candidate)
            status[candidate.value] = {
                "name": candidate.value,
                "priority": priority,
                "available": backend is not None,
                "executable": str(backend.executable) if backend else None,
            }
        return status


def get_arch_package_manager(ctx: ExecutionContext) -> Backend | None:
    """Module-level shortcut for ``BackendRegistry().find(ctx)``."""
    return BackendRegistry().find(ctx)
