"""Battle service: command resolution, turn progression and enemy auto-play."""
from __future__ import annotations

import logging
from typing import List, Sequence

from shardfall.core.config import EngineConfig
from shardfall.core.rng import RNG
from shardfall.core.types import BattleStatus
from shardfall.data.repositories import AbilitiesRepository
from shardfall.domain.battle_models import Battle, BattleCommand, TurnRef, UnitHandle
from shardfall.domain.constants import FLEE_ABILITY_ID, UNSUPPORTED_TARGET_TYPES
from shardfall.domain.defs import AbilityDef
from shardfall.domain.effects import classify_effect, damage_amount, heal_amount
from shardfall.domain.elements import elemental_multiplier, unit_element
from shardfall.domain.entities import Character, Enemy, Party
from shardfall.domain.roster import (
    find_unit,
    first_living_member,
    party_members,
    resolve_turn_ref,
    unit_name,
)
from shardfall.services.battle_snapshot import BattleSnapshot, build_snapshot
from shardfall.services.battle_store import BattleStore
from shardfall.services.errors import BattleError, BattleSetupError
from shardfall.services.turn_order import compute_initial_order

logger = logging.getLogger(__name__)

# Upper bound on consecutive automatic turns, in case a configured enemy
# ability never damages anyone.
_MAX_AUTO_TURNS = 10_000


class BattleService:
    """Deterministic battle orchestrator over battles kept in a BattleStore."""

    def __init__(
        self,
        store: BattleStore,
        abilities_repo: AbilitiesRepository,
        rng: RNG,
        config: EngineConfig | None = None,
    ) -> None:
        self._store = store
        self._abilities_repo = abilities_repo
        self._rng = rng
        self._config = config or EngineConfig()

    @property
    def store(self) -> BattleStore:
        return self._store

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def create_battle(self, party: Party, enemies: Sequence[Enemy]) -> Battle:
        """Build, schedule and store a new battle for the party against copies of the enemies."""
        self._check_setup(party, enemies)

        owned_enemies = [enemy.copy() for enemy in enemies]
        battle_id = self._store.allocate_id(self._rng)
        battle = Battle(
            battle_id=battle_id,
            party_id=party.id,
            enemies=owned_enemies,
            turn_order=compute_initial_order(party, owned_enemies),
            active_turn_index=0,
            log=[f"Battle {battle_id} created."],
            state="pending",
        )
        self._store.add(battle, party)

        if battle.turn_order:
            battle.state = "in_progress"
            battle.log.append("Battle started.")
        else:
            battle.state = "defeat"
        logger.info(
            "Created battle %s for party %s against %d enemies (%s)",
            battle_id,
            party.id,
            len(owned_enemies),
            battle.state,
        )
        return battle

    def get_party(self, battle: Battle) -> Party | None:
        return self._store.party_for(battle.battle_id)

    def get_active_unit(self, battle: Battle) -> UnitHandle | None:
        active_ref = battle.active_ref
        if active_ref is None:
            return None
        return resolve_turn_ref(self.get_party(battle), battle, active_ref)

    def get_snapshot(self, battle: Battle, *, log_window: int | None = None) -> BattleSnapshot:
        window = self._config.log_window if log_window is None else log_window
        return build_snapshot(battle, self.get_party(battle), log_window=window)

    def recompute_state(self, battle: Battle) -> BattleStatus:
        """Party wipe is checked first, so a simultaneous knock-out is a defeat."""
        if not any(member.is_alive for member in party_members(self.get_party(battle))):
            return "defeat"
        if not any(enemy.is_alive for enemy in battle.enemies):
            return "victory"
        return "in_progress"

    def prune_dead(self, battle: Battle) -> None:
        """
        Drop schedule entries whose unit is gone or has no hp left.

        The index keeps pointing at the active unit when it survives, otherwise
        at the survivor just before it, so the next advance reaches the unit
        that was due next.
        """
        party = self.get_party(battle)
        old_order = battle.turn_order
        active_ref = battle.active_ref
        survivors = [ref for ref in old_order if self._is_living_ref(party, battle, ref)]
        battle.turn_order = survivors

        if not survivors:
            battle.active_turn_index = 0
            return
        if active_ref in survivors:
            battle.active_turn_index = survivors.index(active_ref)
            return

        old_index = battle.active_turn_index % len(old_order)
        preceding = [ref for ref in old_order[:old_index] if ref in survivors]
        battle.active_turn_index = survivors.index(preceding[-1]) if preceding else len(survivors) - 1

    def advance_turn(self, battle: Battle) -> Battle:
        """Move to the next living unit, or end the battle if one side is wiped out."""
        if battle is None:
            raise BattleError("advance_turn requires a battle.")
        if battle.state != "in_progress":
            return battle

        self.prune_dead(battle)
        next_state = self.recompute_state(battle)
        if next_state != "in_progress":
            self._set_state(battle, next_state)
            return battle

        if not battle.turn_order:
            self._set_state(battle, "defeat")
            return battle

        party = self.get_party(battle)
        length = len(battle.turn_order)
        battle.active_turn_index = (battle.active_turn_index + 1) % length
        # Pruning already removed the dead; this only guards against stale refs.
        for _ in range(length):
            if self._is_living_ref(party, battle, battle.turn_order[battle.active_turn_index]):
                break
            battle.active_turn_index = (battle.active_turn_index + 1) % length
        return battle

    def run_enemy_turns(self, battle: Battle) -> Battle:
        """
        Auto-play every enemy turn until a party member is up or the battle ends.

        Each enemy uses the configured ability on the first living party member.
        """
        party = self.get_party(battle)
        for _ in range(_MAX_AUTO_TURNS):
            if battle.state != "in_progress":
                return battle
            active_ref = battle.active_ref
            if active_ref is None or active_ref.kind != "enemy":
                return battle

            if resolve_turn_ref(party, battle, active_ref) is None:
                self.advance_turn(battle)
                continue
            target = first_living_member(party)
            if target is None:
                self.advance_turn(battle)
                continue

            self.execute_command(
                battle,
                BattleCommand(
                    source_id=active_ref.unit_id,
                    target_id=target.id,
                    ability_id=self._config.enemy_ability_id,
                ),
            )
            self.advance_turn(battle)
        logger.warning("Battle %s exceeded %d automatic turns; yielding", battle.battle_id, _MAX_AUTO_TURNS)
        return battle

    def record_rejection(self, battle: Battle, reason: str) -> None:
        battle.log.append(f"Invalid command: {reason}.")

    # -----------------------
    # Command Resolution
    # -----------------------
    def execute_command(self, battle: Battle, command: BattleCommand) -> Battle:
        """
        Resolve one command in place and return the same battle.

        Gameplay problems are logged to the battle and leave it untouched;
        nothing here raises for bad input.
        """
        if battle is None:
            raise BattleError("execute_command requires a battle.")
        if battle.state != "in_progress":
            return battle

        ability = self._abilities_repo.find(command.ability_id) if command.ability_id else None
        if ability is None:
            self._soft_fail(battle, "Invalid command: unknown ability.")
            return battle

        party = self.get_party(battle)
        if ability.id == FLEE_ABILITY_ID:
            battle.log.append(f"{unit_name(find_unit(party, battle, command.source_id))} fled.")
            battle.state = "defeat"
            logger.info("Battle %s ended: party fled", battle.battle_id)
            return battle

        if ability.target_type in UNSUPPORTED_TARGET_TYPES:
            self._soft_fail(battle, "Invalid command: unsupported target type.")
            return battle

        active_ref = battle.active_ref
        if active_ref is None or active_ref.unit_id != command.source_id:
            self._soft_fail(battle, "Invalid command: not active unit.")
            return battle

        source = find_unit(party, battle, command.source_id)
        target_id = command.source_id if ability.target_type == "self" else command.target_id
        target = find_unit(party, battle, target_id)
        if source is None or target is None:
            self._soft_fail(battle, "Invalid command: missing source/target.")
            return battle

        if not self._pay_mp(battle, source.unit, ability):
            return battle

        battle.log.append(self._resolve_effect(ability, source.unit, target.unit))

        self.prune_dead(battle)
        next_state = self.recompute_state(battle)
        if next_state != battle.state:
            self._set_state(battle, next_state)
        return battle

    # -----------------------
    # Helpers
    # -----------------------
    def _check_setup(self, party: Party, enemies: Sequence[Enemy]) -> None:
        if not isinstance(party, Party) or not isinstance(party.id, str) or not party.id.strip():
            raise BattleSetupError("party must have an id")
        if not isinstance(party.members, list) or not all(isinstance(m, Character) for m in party.members):
            raise BattleSetupError("party members must be a list of Character")
        if not isinstance(enemies, (list, tuple)):
            raise BattleSetupError("enemies must be a list")
        if not all(isinstance(enemy, Enemy) for enemy in enemies):
            raise BattleSetupError("enemies must be a list of Enemy")

        seen: set[str] = set()
        for unit_id in [member.id for member in party.members] + [enemy.id for enemy in enemies]:
            if unit_id in seen:
                raise BattleSetupError(f"duplicate combatant id '{unit_id}'")
            seen.add(unit_id)

    def _is_living_ref(self, party: Party | None, battle: Battle, ref: TurnRef) -> bool:
        handle = resolve_turn_ref(party, battle, ref)
        return handle is not None and handle.unit.is_alive

    def _set_state(self, battle: Battle, state: BattleStatus) -> None:
        battle.state = state
        if state == "victory":
            battle.log.append("Victory!")
        elif state == "defeat":
            battle.log.append("Defeat.")
        logger.info("Battle %s ended in %s", battle.battle_id, state)

    def _soft_fail(self, battle: Battle, message: str) -> None:
        battle.log.append(message)
        logger.debug("Battle %s: %s", battle.battle_id, message)

    def _pay_mp(self, battle: Battle, source: Character | Enemy, ability: AbilityDef) -> bool:
        if ability.mp_cost <= 0:
            return True
        mp = source.stats.mp
        if not isinstance(mp, int):
            self._soft_fail(battle, f"{source.name} failed to cast {ability.name}.")
            return False
        if mp < ability.mp_cost:
            self._soft_fail(battle, f"{source.name} tried {ability.name} but lacked MP.")
            return False
        source.stats.mp = max(0, mp - ability.mp_cost)
        source.stats.clamp()
        return True

    def _resolve_effect(self, ability: AbilityDef, source: Character | Enemy, target: Character | Enemy) -> str:
        """Apply the ability to the target and return its log line."""
        effect = classify_effect(ability)
        multiplier = elemental_multiplier(ability.element, unit_element(target))
        verb = "used"
        delta = ""

        if effect == "heal":
            amount = heal_amount(ability, source.stats, multiplier)
            target.stats.hp += amount
            target.stats.clamp()
            verb = "cast"
            delta = f" +{amount} HP"
        elif effect == "damage":
            amount = damage_amount(ability, source.stats, target.stats, multiplier)
            target.stats.hp = max(0, target.stats.hp - amount)
            target.stats.clamp()
            delta = f" -{amount} HP"
        elif effect in ("status_only", "noop"):
            pass
        else:
            raise ValueError(f"Unknown effect kind: {effect}")

        status_part = ""
        if ability.status_effect:
            if ability.status_effect not in target.status_effects:
                target.status_effects.append(ability.status_effect)
            status_part = f" ({ability.status_effect})"

        return f"{source.name} {verb} {ability.name} on {target.name}{delta}{status_part}."

    def usable_abilities(self, unit: Character) -> List[AbilityDef]:
        """Abilities the character's class and level allow, for command menus."""
        return self._abilities_repo.usable_by(unit.class_name, unit.level)
