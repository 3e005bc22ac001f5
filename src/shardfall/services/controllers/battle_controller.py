"""Session-facing battle controller that wires validation, execution and teardown."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from shardfall.domain.battle_models import Battle, BattleCommand
from shardfall.domain.constants import UNSUPPORTED_TARGET_TYPES
from shardfall.domain.defs import AbilityDef
from shardfall.domain.entities import Character, Enemy, Party
from shardfall.services.battle_service import BattleService
from shardfall.services.battle_snapshot import BattleSnapshot
from shardfall.services.command_validator import CommandValidator
from shardfall.services.errors import BattleSetupError

logger = logging.getLogger(__name__)

BOSS_TARGET_PREFIX = "boss:"


@dataclass(slots=True)
class StoryEvent:
    """Outcome notification for the quest layer."""

    type: str
    target_id: str


@dataclass(slots=True)
class Engagement:
    """What the session knows about a running battle beyond the battle itself."""

    battle_id: str
    party_id: str
    enemy_ids: Tuple[str, ...]
    story_target_id: str | None = None


@dataclass(slots=True)
class CommandResult:
    """Answer to a submitted command; the snapshot is taken after all automatic turns."""

    accepted: bool
    snapshot: BattleSnapshot
    reason: str | None = None
    story_events: List[StoryEvent] = field(default_factory=list)


class BattleController:
    """
    Boundary between a game session and the battle engine.

    Responsibilities:
    - Start battles for parties and keep track of their engagement
    - Normalize, validate and apply player commands
    - Auto-resolve enemy turns after every accepted command
    - Tear finished battles down and report story outcomes

    It does NOT handle transport, framing or rendering.
    """

    def __init__(
        self,
        battle_service: BattleService,
        validator: CommandValidator,
        *,
        on_story_event: Callable[[StoryEvent], None] | None = None,
    ) -> None:
        self._service = battle_service
        self._validator = validator
        self._on_story_event = on_story_event
        self._engagements: Dict[str, Engagement] = {}
        # Enemy id -> battle id; an enemy fights in one battle at a time.
        self._engaged_enemies: Dict[str, str] = {}

    def engage(self, party: Party, enemies: Sequence[Enemy]) -> BattleSnapshot:
        """Start a battle for the party; enemies that act first do so immediately."""
        active_battle = self._service.store.battle_for_party(party.id)
        if active_battle is not None:
            raise BattleSetupError(f"Party '{party.id}' is already in battle '{active_battle.battle_id}'.")
        for enemy in enemies:
            locked_by = self._engaged_enemies.get(enemy.id)
            if locked_by is not None:
                raise BattleSetupError(f"Enemy '{enemy.id}' is already engaged in battle '{locked_by}'.")

        battle = self._service.create_battle(party, enemies)
        party.current_state = "battle"
        story_target = next((enemy.story_target_id for enemy in enemies if enemy.story_target_id), None)
        self._engagements[battle.battle_id] = Engagement(
            battle_id=battle.battle_id,
            party_id=party.id,
            enemy_ids=tuple(enemy.id for enemy in battle.enemies),
            story_target_id=story_target,
        )
        for enemy_id in self._engagements[battle.battle_id].enemy_ids:
            self._engaged_enemies[enemy_id] = battle.battle_id

        self._service.run_enemy_turns(battle)
        snapshot = self._service.get_snapshot(battle)
        if battle.is_over:
            self._finish(battle)
        return snapshot

    def get_snapshot(self, battle_id: str) -> BattleSnapshot:
        return self._service.get_snapshot(self._service.store.get(battle_id))

    def get_engagement(self, battle_id: str) -> Engagement | None:
        return self._engagements.get(battle_id)

    def is_player_turn(self, battle_id: str) -> bool:
        active_ref = self._service.store.get(battle_id).active_ref
        return active_ref is not None and active_ref.kind == "party"

    def available_abilities(self, battle_id: str) -> List[AbilityDef]:
        """Abilities the active party member may use; empty outside a player turn."""
        battle = self._service.store.get(battle_id)
        handle = self._service.get_active_unit(battle)
        if handle is None or not isinstance(handle.unit, Character):
            return []
        return [
            ability
            for ability in self._service.usable_abilities(handle.unit)
            if ability.target_type not in UNSUPPORTED_TARGET_TYPES
        ]

    def submit_command(self, battle_id: str, player_id: str, payload: Mapping[str, Any]) -> CommandResult:
        """
        Apply one player command.

        A rejected command is logged to the battle and reported with its reason.
        An accepted one is executed, the turn advances, and enemy turns run until
        a party member is up again or the battle ends.
        """
        battle = self._service.store.get(battle_id)
        command = self._normalize_payload(battle, payload)

        verdict = self._validator.validate(battle, player_id, command)
        if not verdict.ok:
            reason = verdict.reason or "rejected"
            self._service.record_rejection(battle, reason)
            logger.info("Rejected command for battle %s from %s: %s", battle_id, player_id, reason)
            return CommandResult(accepted=False, snapshot=self._service.get_snapshot(battle), reason=reason)

        self._service.execute_command(battle, command)
        self._service.advance_turn(battle)
        self._service.run_enemy_turns(battle)

        snapshot = self._service.get_snapshot(battle)
        story_events: List[StoryEvent] = []
        if battle.is_over:
            story_events = self._finish(battle)
        return CommandResult(accepted=True, snapshot=snapshot, story_events=story_events)

    def _normalize_payload(self, battle: Battle, payload: Mapping[str, Any]) -> BattleCommand:
        def text(key: str) -> str | None:
            value = payload.get(key) if isinstance(payload, Mapping) else None
            return value if isinstance(value, str) else None

        source_id = text("source_id")
        if source_id is None:
            active_ref = battle.active_ref
            source_id = active_ref.unit_id if active_ref else None
        return BattleCommand(
            type=text("type") or "ability",
            source_id=source_id,
            target_id=text("target_id"),
            ability_id=text("ability_id"),
        )

    def _finish(self, battle: Battle) -> List[StoryEvent]:
        """Return the party to the overworld, report story outcomes and drop the battle."""
        party = self._service.get_party(battle)
        if party is not None:
            party.current_state = "overworld"

        events: List[StoryEvent] = []
        engagement = self._engagements.pop(battle.battle_id, None)
        if engagement is not None:
            for enemy_id in engagement.enemy_ids:
                self._engaged_enemies.pop(enemy_id, None)

        if (
            battle.state == "victory"
            and engagement is not None
            and engagement.story_target_id
            and engagement.story_target_id.startswith(BOSS_TARGET_PREFIX)
        ):
            event = StoryEvent(type="defeat", target_id=engagement.story_target_id)
            events.append(event)
            if self._on_story_event is not None:
                self._on_story_event(event)

        self._service.store.delete(battle.battle_id)
        logger.info("Battle %s finished with %s and was removed", battle.battle_id, battle.state)
        return events
