"""Runtime entity exports."""

from .character import Character
from .enemy import Enemy
from .party import Party
from .stats import Stats

__all__ = [
    "Character",
    "Enemy",
    "Party",
    "Stats",
]
