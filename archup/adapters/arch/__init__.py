"""Arch Linux package tool backends."""

from archup.adapters.arch.aur_helper import AurHelper, Pamac, Pikaur, Trizen
from archup.adapters.arch.aura import Aura
from archup.adapters.arch.garuda import GarudaUpdate
from archup.adapters.arch.pacman import Pacman
from archup.adapters.arch.yay_paru import Paru, Yay, YayParu

__all__ = [
    "AurHelper",
    "Aura",
    "GarudaUpdate",
    "Pacman",
    "Pamac",
    "Paru",
    "Pikaur",
    "Trizen",
    "Yay",
    "YayParu",
]
