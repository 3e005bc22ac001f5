"""Entry-point for a headless demo encounter."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from shardfall.core.config import EngineConfig, load_config
from shardfall.core.rng import RNG
from shardfall.data.repositories import AbilitiesRepository, EnemiesRepository, PartyMembersRepository
from shardfall.services import BattleService, BattleStore, CommandValidator
from shardfall.services.battle_snapshot import BattleSnapshot
from shardfall.services.controllers import BattleController, StoryEvent
from shardfall.services.factories import create_enemy_instance, create_party

DEFAULT_MEMBERS = ("protagonist", "lysa")
PLAYER_ABILITY_ID = "basic_attack"
_MAX_ROUNDS = 200


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a scripted Shardfall encounter and print its battle log.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for instance ids (overrides config).")
    parser.add_argument("--enemy", action="append", default=None, help="Enemy template id; repeatable.")
    parser.add_argument("--members", nargs="+", default=None, help="Roster ids of the party members.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON engine config.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _first_living_enemy_id(snapshot: BattleSnapshot) -> str | None:
    for enemy in snapshot.enemies:
        if enemy.stats.hp > 0:
            return enemy.id
    return None


def run_demo(config: EngineConfig, member_ids: Sequence[str], enemy_ids: Sequence[str]) -> List[str]:
    """Auto-play one encounter with basic attacks and return the final battle log."""
    rng = RNG(config.seed)
    abilities_repo = AbilitiesRepository()
    store = BattleStore()
    service = BattleService(store, abilities_repo, rng, config)
    story_events: List[StoryEvent] = []
    controller = BattleController(
        service,
        CommandValidator(store, abilities_repo),
        on_story_event=story_events.append,
    )

    party = create_party("demo_player", member_ids, PartyMembersRepository(), rng)
    enemies_repo = EnemiesRepository()
    enemies = [create_enemy_instance(template_id, enemies_repo, rng) for template_id in enemy_ids]

    snapshot = controller.engage(party, enemies)
    for _ in range(_MAX_ROUNDS):
        if snapshot.state != "in_progress":
            break
        target_id = _first_living_enemy_id(snapshot)
        result = controller.submit_command(
            snapshot.battle_id,
            party.player_id,
            {"ability_id": PLAYER_ABILITY_ID, "target_id": target_id},
        )
        snapshot = result.snapshot

    log = list(snapshot.log)
    log.extend(f"Story: {event.type} {event.target_id}" for event in story_events)
    return log


def main(argv: Sequence[str] | None = None) -> None:
    """Run the demo encounter from the command line."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed

    for line in run_demo(config, args.members or DEFAULT_MEMBERS, args.enemy or ["wild_enemy"]):
        print(line)


if __name__ == "__main__":
    main()
