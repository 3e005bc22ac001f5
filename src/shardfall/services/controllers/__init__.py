"""Session-facing controllers for the battle engine."""
from __future__ import annotations

from .battle_controller import BattleController, CommandResult, Engagement, StoryEvent

__all__ = [
    "BattleController",
    "CommandResult",
    "Engagement",
    "StoryEvent",
]
