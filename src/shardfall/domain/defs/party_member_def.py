"""Party member definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from shardfall.domain.entities import Stats


@dataclass(slots=True)
class PartyMemberDef:
    """Defines a recruitable roster character and its starting loadout."""

    id: str
    name: str
    class_name: str
    level: int
    base_stats: Stats
    equipped_items: Dict[str, str | None] = field(default_factory=dict)
    crystal_resonance: Dict[str, float] = field(default_factory=dict)
