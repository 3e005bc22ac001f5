"""Party models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from shardfall.core.types import PartyLocation

from .character import Character


@dataclass(slots=True)
class Party:
    """A player's party; owned by the session layer and referenced by battles via its id."""

    id: str
    player_id: str
    members: List[Character] = field(default_factory=list)
    active_member_index: int = 0
    current_state: PartyLocation = "overworld"

    @property
    def active_member(self) -> Character | None:
        if 0 <= self.active_member_index < len(self.members):
            return self.members[self.active_member_index]
        return None
