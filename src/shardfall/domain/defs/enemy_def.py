"""Enemy template definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from shardfall.core.types import Element


@dataclass(slots=True)
class EnemyTemplateDef:
    """Template used to spawn a fresh enemy for each battle."""

    id: str
    name: str
    element: Element | None
    hp: int
    mp: int
    strength: int
    defense: int
    magic: int
    speed: int
    spirit: int
    luck: int
    story_target_id: str | None = None
