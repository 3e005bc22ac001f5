"""Resolve turn references and command ids to live combatants.

Party members live in the party's member list and enemies in the battle's
enemy list. Both are looked up by id on every call, so removing a unit from
the schedule can never leave a dangling handle behind.
"""
from __future__ import annotations

from typing import List

from shardfall.core.types import TurnKind
from shardfall.domain.battle_models import Battle, TurnRef, UnitHandle
from shardfall.domain.entities import Character, Party


def party_members(party: Party | None) -> List[Character]:
    if party is None:
        return []
    return list(party.members)


def resolve_ref(party: Party | None, battle: Battle, kind: TurnKind, unit_id: str) -> UnitHandle | None:
    """Return the unit of the given kind and id, or None when it is not in the battle."""
    if kind == "party":
        for member in party_members(party):
            if member.id == unit_id:
                return UnitHandle(kind="party", unit=member)
        return None
    if kind == "enemy":
        for enemy in battle.enemies:
            if enemy.id == unit_id:
                return UnitHandle(kind="enemy", unit=enemy)
        return None
    return None


def resolve_turn_ref(party: Party | None, battle: Battle, ref: TurnRef) -> UnitHandle | None:
    return resolve_ref(party, battle, ref.kind, ref.unit_id)


def find_unit(party: Party | None, battle: Battle, unit_id: str | None) -> UnitHandle | None:
    """Look a unit up by id alone; party members are searched before enemies."""
    if unit_id is None:
        return None
    return resolve_ref(party, battle, "party", unit_id) or resolve_ref(party, battle, "enemy", unit_id)


def first_living_member(party: Party | None) -> Character | None:
    return next((member for member in party_members(party) if member.is_alive), None)


def unit_name(handle: UnitHandle | None) -> str:
    if handle is None:
        return "Unknown"
    unit = handle.unit
    if unit.name.strip():
        return unit.name
    return unit.id
