from __future__ import annotations

import pytest

from shardfall.core.rng import RNG
from shardfall.data.repositories import AbilitiesRepository
from shardfall.domain.battle_models import Battle, BattleCommand
from shardfall.domain.entities import Character, Enemy, Party, Stats
from shardfall.services.battle_service import BattleService
from shardfall.services.battle_store import BattleStore
from shardfall.services.command_validator import CommandValidator


def test_valid_attack_is_accepted() -> None:
    validator, battle = _make_setup()

    verdict = validator.validate(battle, "player_1", _command("hero", "slime", "basic_attack"))

    assert verdict.ok
    assert verdict.reason is None


def test_self_ability_needs_no_target() -> None:
    validator, battle = _make_setup()
    assert validator.validate(battle, "player_1", _command("hero", None, "defend")).ok


def test_heal_on_ally_is_accepted() -> None:
    validator, battle = _make_setup()
    assert validator.validate(battle, "player_1", _command("hero", "ally", "sage_mend")).ok


@pytest.mark.parametrize(
    ("command", "reason"),
    [
        (BattleCommand(source_id="ally", target_id="slime", ability_id="basic_attack"), "invalid source for active turn"),
        (BattleCommand(source_id="hero", target_id="slime", ability_id="no_such_move"), "unknown ability"),
        (BattleCommand(source_id="hero", target_id="slime", ability_id=None), "unknown ability"),
        (BattleCommand(source_id="hero", target_id=None, ability_id="basic_attack"), "missing target"),
        (BattleCommand(source_id="hero", target_id="ghost", ability_id="basic_attack"), "target not found"),
        (BattleCommand(source_id="hero", target_id="ally", ability_id="basic_attack"), "target must be enemy"),
        (BattleCommand(source_id="hero", target_id="slime", ability_id="sage_mend"), "target must be ally"),
        (BattleCommand(source_id="hero", target_id="slime", ability_id="knight_taunt"), "unsupported target type"),
        (BattleCommand(source_id="hero", target_id="ally", ability_id="crystal_knight_prismatic_aegis"), "unsupported target type"),
    ],
)
def test_rejections(command: BattleCommand, reason: str) -> None:
    validator, battle = _make_setup()

    verdict = validator.validate(battle, "player_1", command)

    assert not verdict.ok
    assert verdict.reason == reason


def test_rejects_missing_or_finished_battle() -> None:
    validator, battle = _make_setup()
    command = _command("hero", "slime", "basic_attack")

    assert validator.validate(None, "player_1", command).reason == "battle not in progress"
    battle.state = "victory"
    assert validator.validate(battle, "player_1", command).reason == "battle not in progress"


def test_rejects_empty_schedule() -> None:
    validator, battle = _make_setup()
    battle.turn_order = []

    verdict = validator.validate(battle, "player_1", _command("hero", "slime", "basic_attack"))

    assert verdict.reason == "no turn order"


def test_rejects_enemy_turn() -> None:
    validator, battle = _make_setup(enemy_speed=20)

    verdict = validator.validate(battle, "player_1", _command("hero", "slime", "basic_attack"))

    assert verdict.reason == "not player turn"


def test_rejects_other_player() -> None:
    validator, battle = _make_setup()

    verdict = validator.validate(battle, "intruder", _command("hero", "slime", "basic_attack"))

    assert verdict.reason == "battle not owned by player"


def test_rejects_missing_source_unit() -> None:
    validator, battle = _make_setup()
    party = validator._store.party_for(battle.battle_id)
    party.members = [member for member in party.members if member.id != "hero"]

    verdict = validator.validate(battle, "player_1", _command("hero", "slime", "basic_attack"))

    assert verdict.reason == "missing source"


def test_rejects_insufficient_mp() -> None:
    validator, battle = _make_setup(hero_mp=4)

    verdict = validator.validate(battle, "player_1", _command("hero", "ally", "sage_mend"))

    assert verdict.reason == "not enough MP"


def test_validation_does_not_mutate() -> None:
    validator, battle = _make_setup()
    log_before = list(battle.log)
    order_before = list(battle.turn_order)

    validator.validate(battle, "player_1", _command("hero", "ally", "basic_attack"))

    assert battle.log == log_before
    assert battle.turn_order == order_before
    assert battle.active_turn_index == 0


def _make_setup(*, enemy_speed: int = 1, hero_mp: int = 10) -> tuple[CommandValidator, Battle]:
    store = BattleStore()
    abilities_repo = AbilitiesRepository()
    service = BattleService(store, abilities_repo, RNG(7))
    party = Party(
        id="party_1",
        player_id="player_1",
        members=[_make_member("hero", speed=10, mp=hero_mp), _make_member("ally", speed=2)],
    )
    enemy = Enemy(id="slime", name="Slime", stats=_make_stats(speed=enemy_speed))
    battle = service.create_battle(party, [enemy])
    return CommandValidator(store, abilities_repo), battle


def _make_member(member_id: str, *, speed: int, mp: int = 10) -> Character:
    return Character(
        id=member_id,
        name=member_id.title(),
        class_name="SAGE",
        level=1,
        experience=0,
        stats=_make_stats(speed=speed, mp=mp),
    )


def _make_stats(*, speed: int, mp: int = 10) -> Stats:
    return Stats(hp=20, max_hp=20, mp=mp, max_mp=10, strength=5, defense=2, magic=5, speed=speed, spirit=2, luck=1)


def _command(source_id: str | None, target_id: str | None, ability_id: str | None) -> BattleCommand:
    return BattleCommand(source_id=source_id, target_id=target_id, ability_id=ability_id)
