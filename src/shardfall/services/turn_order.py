"""Initiative ordering over living combatants."""
from __future__ import annotations

from typing import List, Sequence, Tuple

from shardfall.domain.battle_models import TurnRef
from shardfall.domain.entities import Enemy, Party


def compute_initial_order(party: Party | None, enemies: Sequence[Enemy]) -> List[TurnRef]:
    """
    Return the schedule for a new battle.

    Only units with hp > 0 are included. Faster units act first; equal speeds
    fall back to the "p_<id>" / "e_<id>" key so the result depends only on
    speeds and ids.
    """
    entries: List[Tuple[int, str, TurnRef]] = []
    members = party.members if party is not None else []
    for member in members:
        if member.is_alive:
            entries.append((member.stats.speed, f"p_{member.id}", TurnRef(kind="party", unit_id=member.id)))
    for enemy in enemies:
        if enemy.is_alive:
            entries.append((enemy.stats.speed, f"e_{enemy.id}", TurnRef(kind="enemy", unit_id=enemy.id)))

    entries.sort(key=lambda entry: (-entry[0], entry[1]))
    return [ref for _, _, ref in entries]
