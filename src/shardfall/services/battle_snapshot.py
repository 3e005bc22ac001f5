"""Serializable projection of a battle for clients."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from shardfall.core.config import DEFAULT_LOG_WINDOW
from shardfall.core.types import BattleStatus, Element, TurnKind
from shardfall.domain.battle_models import Battle
from shardfall.domain.entities import Character, Enemy, Party, Stats


@dataclass(slots=True)
class StatsView:
    hp: int
    max_hp: int
    mp: int
    max_mp: int
    strength: int
    defense: int
    magic: int
    speed: int
    spirit: int
    luck: int


@dataclass(slots=True)
class MemberView:
    id: str
    name: str
    class_name: str
    level: int
    experience: int
    stats: StatsView
    status_effects: List[str]


@dataclass(slots=True)
class EnemyView:
    id: str
    name: str
    element: Element | None
    stats: StatsView
    status_effects: List[str]


@dataclass(slots=True)
class PartyView:
    id: str
    player_id: str
    active_member_index: int
    members: List[MemberView] = field(default_factory=list)


@dataclass(slots=True)
class TurnView:
    kind: TurnKind
    id: str


@dataclass(slots=True)
class BattleSnapshot:
    """Presentation view for the current battle state; holds copies only."""

    battle_id: str
    state: BattleStatus
    party: PartyView | None
    enemies: List[EnemyView]
    turn_order: List[TurnView]
    active: TurnView | None
    active_turn_index: int
    log: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _stats_view(stats: Stats) -> StatsView:
    return StatsView(
        hp=stats.hp,
        max_hp=stats.max_hp,
        mp=stats.mp,
        max_mp=stats.max_mp,
        strength=stats.strength,
        defense=stats.defense,
        magic=stats.magic,
        speed=stats.speed,
        spirit=stats.spirit,
        luck=stats.luck,
    )


def _member_view(member: Character) -> MemberView:
    return MemberView(
        id=member.id,
        name=member.name,
        class_name=member.class_name,
        level=member.level,
        experience=member.experience,
        stats=_stats_view(member.stats),
        status_effects=list(member.status_effects),
    )


def _enemy_view(enemy: Enemy) -> EnemyView:
    return EnemyView(
        id=enemy.id,
        name=enemy.name,
        element=enemy.element,
        stats=_stats_view(enemy.stats),
        status_effects=list(enemy.status_effects),
    )


def build_snapshot(battle: Battle, party: Party | None, *, log_window: int = DEFAULT_LOG_WINDOW) -> BattleSnapshot:
    """Copy the observable battle state, keeping only the last ``log_window`` log lines."""
    party_view = None
    if party is not None:
        party_view = PartyView(
            id=party.id,
            player_id=party.player_id,
            active_member_index=party.active_member_index,
            members=[_member_view(member) for member in party.members],
        )
    active_ref = battle.active_ref
    log = battle.log[-log_window:] if log_window > 0 else []
    return BattleSnapshot(
        battle_id=battle.battle_id,
        state=battle.state,
        party=party_view,
        enemies=[_enemy_view(enemy) for enemy in battle.enemies],
        turn_order=[TurnView(kind=ref.kind, id=ref.unit_id) for ref in battle.turn_order],
        active=TurnView(kind=active_ref.kind, id=active_ref.unit_id) if active_ref else None,
        active_turn_index=battle.active_turn_index,
        log=list(log),
    )
