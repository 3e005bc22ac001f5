"""Controller flow: engagement, command submission, auto-resolved enemies and teardown."""
from __future__ import annotations

from typing import List

import pytest

from shardfall.core.rng import RNG
from shardfall.data.repositories import AbilitiesRepository
from shardfall.domain.entities import Character, Enemy, Party, Stats
from shardfall.services import BattleService, BattleStore, CommandValidator
from shardfall.services.controllers import BattleController, StoryEvent
from shardfall.services.errors import BattleNotFoundError, BattleSetupError


def test_engage_starts_battle_on_party_turn() -> None:
    controller, store, _ = _build_battle_controller()
    party = _make_party(_make_member("hero", speed=10))

    snapshot = controller.engage(party, [_make_enemy("slime", speed=1)])

    assert snapshot.state == "in_progress"
    assert snapshot.active is not None
    assert (snapshot.active.kind, snapshot.active.id) == ("party", "hero")
    assert party.current_state == "battle"
    assert snapshot.battle_id in store
    engagement = controller.get_engagement(snapshot.battle_id)
    assert engagement is not None
    assert engagement.enemy_ids == ("slime",)
    assert engagement.story_target_id is None
    assert controller.is_player_turn(snapshot.battle_id)


def test_engage_resolves_leading_enemy_turns() -> None:
    controller, _, _ = _build_battle_controller()
    hero = _make_member("hero", hp=30, speed=1)

    snapshot = controller.engage(_make_party(hero), [_make_enemy("slime", strength=5, speed=20)])

    assert "Slime used Attack on Hero -9 HP." in snapshot.log
    assert hero.stats.hp == 21
    assert snapshot.active is not None and snapshot.active.id == "hero"


def test_engage_rejects_party_already_in_battle() -> None:
    controller, _, _ = _build_battle_controller()
    party = _make_party(_make_member("hero", speed=10))
    controller.engage(party, [_make_enemy("slime", speed=1)])

    with pytest.raises(BattleSetupError):
        controller.engage(party, [_make_enemy("other", speed=1)])


def test_engage_that_ends_immediately_is_torn_down() -> None:
    controller, store, _ = _build_battle_controller()
    party = _make_party(_make_member("hero", hp=1, speed=1))

    snapshot = controller.engage(party, [_make_enemy("brute", strength=30, speed=20)])

    assert snapshot.state == "defeat"
    assert len(store) == 0
    assert party.current_state == "overworld"


def test_rejected_command_is_logged_and_reported() -> None:
    controller, _, _ = _build_battle_controller()
    party = _make_party(_make_member("hero", speed=10))
    snapshot = controller.engage(party, [_make_enemy("slime", speed=1)])

    result = controller.submit_command(
        snapshot.battle_id, "player_1", {"source_id": "hero", "target_id": "hero", "ability_id": "basic_attack"}
    )

    assert not result.accepted
    assert result.reason == "target must be enemy"
    assert result.snapshot.log[-1] == "Invalid command: target must be enemy."
    assert result.snapshot.state == "in_progress"


def test_command_from_other_player_is_rejected() -> None:
    controller, _, _ = _build_battle_controller()
    snapshot = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", speed=1)])

    result = controller.submit_command(snapshot.battle_id, "intruder", {"target_id": "slime", "ability_id": "basic_attack"})

    assert not result.accepted
    assert result.reason == "battle not owned by player"


def test_accepted_command_runs_enemy_reply() -> None:
    controller, _, _ = _build_battle_controller()
    hero = _make_member("hero", strength=10, hp=30, speed=10)
    snapshot = controller.engage(_make_party(hero), [_make_enemy("slime", hp=50, strength=5, speed=1)])

    result = controller.submit_command(
        snapshot.battle_id, "player_1", {"type": "ability", "source_id": "hero", "target_id": "slime", "ability_id": "basic_attack"}
    )

    assert result.accepted
    assert result.reason is None
    assert result.snapshot.enemies[0].stats.hp == 36
    assert hero.stats.hp == 21
    assert result.snapshot.active is not None and result.snapshot.active.id == "hero"
    assert result.story_events == []


def test_payload_source_defaults_to_active_unit() -> None:
    controller, _, _ = _build_battle_controller()
    snapshot = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", hp=50, speed=1)])

    result = controller.submit_command(snapshot.battle_id, "player_1", {"target_id": "slime", "ability_id": "basic_attack"})

    assert result.accepted


def test_non_string_payload_fields_are_ignored() -> None:
    controller, _, _ = _build_battle_controller()
    snapshot = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", speed=1)])

    result = controller.submit_command(snapshot.battle_id, "player_1", {"target_id": "slime", "ability_id": 5})

    assert not result.accepted
    assert result.reason == "unknown ability"


def test_boss_victory_emits_story_event_and_tears_down() -> None:
    controller, store, events = _build_battle_controller()
    party = _make_party(_make_member("hero", strength=50, speed=10))
    boss = _make_enemy("guardian", hp=5, speed=1, story_target_id="boss:light_shrine_guardian")
    snapshot = controller.engage(party, [boss])

    result = controller.submit_command(snapshot.battle_id, "player_1", {"target_id": "guardian", "ability_id": "basic_attack"})

    expected = StoryEvent(type="defeat", target_id="boss:light_shrine_guardian")
    assert result.accepted
    assert result.snapshot.state == "victory"
    assert result.snapshot.log[-1] == "Victory!"
    assert result.story_events == [expected]
    assert events == [expected]
    assert party.current_state == "overworld"
    assert snapshot.battle_id not in store
    assert controller.get_engagement(snapshot.battle_id) is None
    with pytest.raises(BattleNotFoundError):
        controller.get_snapshot(snapshot.battle_id)


def test_non_boss_story_target_emits_nothing() -> None:
    controller, _, events = _build_battle_controller()
    enemy = _make_enemy("rat", hp=5, speed=1, story_target_id="quest:cellar_rat")
    snapshot = controller.engage(_make_party(_make_member("hero", strength=50, speed=10)), [enemy])

    result = controller.submit_command(snapshot.battle_id, "player_1", {"target_id": "rat", "ability_id": "basic_attack"})

    assert result.snapshot.state == "victory"
    assert result.story_events == []
    assert events == []


def test_flee_ends_battle_without_story_event() -> None:
    controller, store, events = _build_battle_controller()
    party = _make_party(_make_member("hero", speed=10))
    boss = _make_enemy("guardian", speed=1, story_target_id="boss:light_shrine_guardian")
    snapshot = controller.engage(party, [boss])

    result = controller.submit_command(snapshot.battle_id, "player_1", {"ability_id": "flee"})

    assert result.accepted
    assert result.snapshot.state == "defeat"
    assert result.story_events == []
    assert events == []
    assert len(store) == 0
    assert party.current_state == "overworld"


def test_party_can_engage_again_after_teardown() -> None:
    controller, _, _ = _build_battle_controller()
    party = _make_party(_make_member("hero", speed=10))
    first = controller.engage(party, [_make_enemy("slime", speed=1)])
    controller.submit_command(first.battle_id, "player_1", {"ability_id": "flee"})

    second = controller.engage(party, [_make_enemy("slime", speed=1)])

    assert second.state == "in_progress"


def test_enemy_already_engaged_by_another_party_is_rejected() -> None:
    controller, store, _ = _build_battle_controller()
    first = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", speed=1)])
    rival = Party(id="party_2", player_id="player_2", members=[_make_member("rival", speed=10)])

    with pytest.raises(BattleSetupError, match="slime"):
        controller.engage(rival, [_make_enemy("slime", speed=1)])

    assert len(store) == 1
    assert rival.current_state == "overworld"
    assert controller.get_engagement(first.battle_id) is not None


def test_enemy_is_released_when_its_battle_ends() -> None:
    controller, _, _ = _build_battle_controller()
    first = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", speed=1)])
    controller.submit_command(first.battle_id, "player_1", {"ability_id": "flee"})
    rival = Party(id="party_2", player_id="player_2", members=[_make_member("rival", speed=10)])

    snapshot = controller.engage(rival, [_make_enemy("slime", speed=1)])

    assert snapshot.state == "in_progress"
    assert rival.current_state == "battle"


def test_unknown_battle_raises() -> None:
    controller, _, _ = _build_battle_controller()

    with pytest.raises(BattleNotFoundError):
        controller.submit_command("battle_000000", "player_1", {"ability_id": "basic_attack"})


def test_available_abilities_follow_class_and_level() -> None:
    controller, _, _ = _build_battle_controller()
    snapshot = controller.engage(_make_party(_make_member("hero", speed=10)), [_make_enemy("slime", speed=1)])

    ability_ids = {ability.id for ability in controller.available_abilities(snapshot.battle_id)}

    assert {"basic_attack", "defend", "flee", "sage_mend"} <= ability_ids
    assert "knight_heavy_strike" not in ability_ids
    assert "aeromancer_chain_spark" not in ability_ids


def test_available_abilities_hide_multi_target_abilities() -> None:
    controller, _, _ = _build_battle_controller()
    knight = _make_member("hero", speed=10, class_name="KNIGHT")
    snapshot = controller.engage(_make_party(knight), [_make_enemy("slime", speed=1)])

    ability_ids = {ability.id for ability in controller.available_abilities(snapshot.battle_id)}

    assert "knight_heavy_strike" in ability_ids
    assert "knight_taunt" not in ability_ids
    assert "basic_attack" in ability_ids


def _build_battle_controller() -> tuple[BattleController, BattleStore, List[StoryEvent]]:
    """Build a controller over a fresh store, collecting emitted story events."""
    store = BattleStore()
    abilities_repo = AbilitiesRepository()
    service = BattleService(store, abilities_repo, RNG(42))
    events: List[StoryEvent] = []
    controller = BattleController(service, CommandValidator(store, abilities_repo), on_story_event=events.append)
    return controller, store, events


def _make_member(
    member_id: str,
    *,
    hp: int = 20,
    strength: int = 5,
    speed: int = 5,
    class_name: str = "SAGE",
) -> Character:
    return Character(
        id=member_id,
        name=member_id.title(),
        class_name=class_name,
        level=1,
        experience=0,
        stats=Stats(
            hp=hp,
            max_hp=max(hp, 20),
            mp=10,
            max_mp=10,
            strength=strength,
            defense=0,
            magic=5,
            speed=speed,
            spirit=0,
            luck=1,
        ),
    )


def _make_enemy(
    enemy_id: str,
    *,
    hp: int = 20,
    strength: int = 3,
    speed: int = 1,
    story_target_id: str | None = None,
) -> Enemy:
    return Enemy(
        id=enemy_id,
        name=enemy_id.title(),
        stats=Stats(
            hp=hp,
            max_hp=hp,
            mp=0,
            max_mp=0,
            strength=strength,
            defense=0,
            magic=2,
            speed=speed,
            spirit=0,
            luck=1,
        ),
        story_target_id=story_target_id,
    )


def _make_party(*members: Character) -> Party:
    return Party(id="party_1", player_id="player_1", members=list(members))
