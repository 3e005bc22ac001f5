"""In-memory registry of battles and the parties they reference."""
from __future__ import annotations

import logging
from typing import Callable, Dict

from shardfall.core.rng import RNG
from shardfall.domain.battle_models import Battle
from shardfall.domain.entities import Party
from shardfall.services.errors import BattleNotFoundError, BattleStoreError
from shardfall.services.factories import make_instance_id

logger = logging.getLogger(__name__)

_MAX_ID_ATTEMPTS = 32


class BattleStore:
    """
    Keyed collection of live battles, owned by the session layer.

    The party of each battle is kept in a side table rather than on the
    battle, so the battle never holds a copy of it. Finished battles stay
    stored until the caller deletes them.
    """

    def __init__(self) -> None:
        self._battles: Dict[str, Battle] = {}
        self._parties: Dict[str, Party] = {}

    def __len__(self) -> int:
        return len(self._battles)

    def __contains__(self, battle_id: object) -> bool:
        return battle_id in self._battles

    def allocate_id(self, rng: RNG) -> str:
        """Return a battle id that is not in use."""
        for _ in range(_MAX_ID_ATTEMPTS):
            battle_id = make_instance_id("battle", rng)
            if battle_id not in self._battles:
                return battle_id
        raise BattleStoreError("Unable to allocate a unique battle id.")

    def add(self, battle: Battle, party: Party) -> Battle:
        if battle.battle_id in self._battles:
            raise BattleStoreError(f"Battle '{battle.battle_id}' is already stored.")
        if party.id != battle.party_id:
            raise BattleStoreError(f"Battle '{battle.battle_id}' does not reference party '{party.id}'.")
        self._battles[battle.battle_id] = battle
        self._parties[battle.battle_id] = party
        logger.debug("Stored battle %s for party %s", battle.battle_id, party.id)
        return battle

    def get(self, battle_id: str) -> Battle:
        try:
            return self._battles[battle_id]
        except KeyError as exc:
            raise BattleNotFoundError(battle_id) from exc

    def find(self, battle_id: str | None) -> Battle | None:
        if battle_id is None:
            return None
        return self._battles.get(battle_id)

    def party_for(self, battle_id: str) -> Party | None:
        return self._parties.get(battle_id)

    def battle_for_party(self, party_id: str) -> Battle | None:
        """Return the stored, unfinished battle that references the party, if any."""
        for battle in self._battles.values():
            if battle.party_id == party_id and not battle.is_over:
                return battle
        return None

    def update(self, battle_id: str, updater: Callable[[Battle], Battle]) -> Battle:
        """Replace a stored battle with the updater's result; the id must not change."""
        existing = self.get(battle_id)
        updated = updater(existing)
        if updated is None or updated.battle_id != existing.battle_id:
            raise BattleStoreError("Battle updater must return the same battle id.")
        self._battles[battle_id] = updated
        return updated

    def delete(self, battle_id: str) -> None:
        self._battles.pop(battle_id, None)
        self._parties.pop(battle_id, None)
        logger.debug("Deleted battle %s", battle_id)
