"""Authorization of incoming battle commands."""
from __future__ import annotations

from shardfall.data.repositories import AbilitiesRepository
from shardfall.domain.battle_models import Battle, BattleCommand, CommandVerdict
from shardfall.domain.constants import UNSUPPORTED_TARGET_TYPES
from shardfall.domain.roster import find_unit
from shardfall.services.battle_store import BattleStore


class CommandValidator:
    """
    Pure legality check for a player's command against the current turn.

    Checks run in a fixed order and stop at the first failure; the verdict's
    reason is meant for logs and for the acting client. Nothing is mutated.
    """

    def __init__(self, store: BattleStore, abilities_repo: AbilitiesRepository) -> None:
        self._store = store
        self._abilities_repo = abilities_repo

    def validate(self, battle: Battle | None, acting_player_id: str, command: BattleCommand) -> CommandVerdict:
        if battle is None or battle.state != "in_progress":
            return CommandVerdict.reject("battle not in progress")

        active_ref = battle.active_ref
        if active_ref is None:
            return CommandVerdict.reject("no turn order")
        if active_ref.kind != "party":
            return CommandVerdict.reject("not player turn")

        party = self._store.party_for(battle.battle_id)
        if party is None or party.player_id != acting_player_id:
            return CommandVerdict.reject("battle not owned by player")

        if command.source_id != active_ref.unit_id:
            return CommandVerdict.reject("invalid source for active turn")

        ability = self._abilities_repo.find(command.ability_id) if command.ability_id else None
        if ability is None:
            return CommandVerdict.reject("unknown ability")

        source = find_unit(party, battle, command.source_id)
        if source is None:
            return CommandVerdict.reject("missing source")
        if ability.mp_cost > 0 and source.unit.stats.mp < ability.mp_cost:
            return CommandVerdict.reject("not enough MP")

        target_id = command.source_id if ability.target_type == "self" else command.target_id
        if target_id is None:
            return CommandVerdict.reject("missing target")
        target = find_unit(party, battle, target_id)
        if target is None:
            return CommandVerdict.reject("target not found")

        if ability.target_type == "enemy_single" and target.kind != "enemy":
            return CommandVerdict.reject("target must be enemy")
        if ability.target_type == "ally_single" and target.kind != "party":
            return CommandVerdict.reject("target must be ally")
        # Multi-target abilities are catalogued but have no resolution yet.
        if ability.target_type in UNSUPPORTED_TARGET_TYPES:
            return CommandVerdict.reject("unsupported target type")

        return CommandVerdict.accept()
