"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from shardfall.core.types import BattleStatus, TurnKind
from shardfall.domain.entities import Character, Enemy

Unit = Union[Character, Enemy]

TERMINAL_STATES: frozenset[str] = frozenset({"victory", "defeat"})


@dataclass(frozen=True, slots=True)
class TurnRef:
    """Points at a combatant by kind and id; never holds the combatant itself."""

    kind: TurnKind
    unit_id: str


@dataclass(slots=True)
class UnitHandle:
    """A resolved combatant together with the side it fights on."""

    kind: TurnKind
    unit: Unit


@dataclass(slots=True)
class Battle:
    """Aggregate root for one encounter. The party is referenced by id only."""

    battle_id: str
    party_id: str
    enemies: List[Enemy]
    turn_order: List[TurnRef] = field(default_factory=list)
    active_turn_index: int = 0
    log: List[str] = field(default_factory=list)
    state: BattleStatus = "pending"

    @property
    def is_over(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def active_ref(self) -> TurnRef | None:
        if not self.turn_order:
            return None
        return self.turn_order[self.active_turn_index % len(self.turn_order)]


@dataclass(slots=True)
class BattleCommand:
    """A single action request for the unit whose turn it is."""

    source_id: str | None
    target_id: str | None
    ability_id: str | None
    type: str = "ability"


@dataclass(slots=True)
class CommandVerdict:
    """Outcome of validating a command; rejections carry a readable reason."""

    ok: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> CommandVerdict:
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: str) -> CommandVerdict:
        return cls(ok=False, reason=reason)
