"""Factory for creating characters and parties from the roster."""
from __future__ import annotations

from typing import Sequence

from shardfall.core.rng import RNG
from shardfall.data.repositories import PartyMembersRepository
from shardfall.domain.entities import Character, Party
from shardfall.services.errors import FactoryError

from .id_factory import make_instance_id


def create_character(member_id: str, party_members_repo: PartyMembersRepository, rng: RNG) -> Character:
    """Instantiate a roster character with fresh stats and a unique id."""
    try:
        member_def = party_members_repo.get(member_id)
    except KeyError as exc:
        raise FactoryError(f"Party member '{member_id}' not found.") from exc

    return Character(
        id=make_instance_id(f"char_{member_def.name}", rng),
        name=member_def.name,
        class_name=member_def.class_name,
        level=member_def.level,
        experience=0,
        stats=member_def.base_stats.copy(),
        status_effects=[],
        equipped_items=dict(member_def.equipped_items),
        crystal_resonance=dict(member_def.crystal_resonance),
    )


def create_party(
    player_id: str,
    member_ids: Sequence[str],
    party_members_repo: PartyMembersRepository,
    rng: RNG,
) -> Party:
    """Build an overworld party for a player from roster ids."""
    if not member_ids:
        raise FactoryError("A party needs at least one member.")
    members = [create_character(member_id, party_members_repo, rng) for member_id in member_ids]
    return Party(
        id=make_instance_id("party", rng),
        player_id=player_id,
        members=members,
        active_member_index=0,
        current_state="overworld",
    )
