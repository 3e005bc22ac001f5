"""Factory for creating enemy instances from templates."""
from __future__ import annotations

from shardfall.core.rng import RNG
from shardfall.data.repositories import EnemiesRepository
from shardfall.domain.entities import Enemy, Stats
from shardfall.services.errors import FactoryError

from .id_factory import make_instance_id


def create_enemy_instance(
    template_id: str,
    enemies_repo: EnemiesRepository,
    rng: RNG,
    *,
    instance_id: str | None = None,
    hp: int | None = None,
    max_hp: int | None = None,
) -> Enemy:
    """
    Spawn a fresh enemy from a template.

    ``hp`` overrides the template's health (a wounded world enemy keeps its
    wounds) and ``max_hp`` defaults to the resulting hp.
    """
    try:
        template = enemies_repo.get(template_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy template '{template_id}' not found.") from exc

    current_hp = template.hp if hp is None else hp
    maximum_hp = current_hp if max_hp is None else max_hp
    if current_hp < 0 or maximum_hp < 0:
        raise FactoryError(f"Enemy '{template_id}' cannot spawn with negative hp.")

    stats = Stats(
        hp=min(current_hp, maximum_hp),
        max_hp=maximum_hp,
        mp=template.mp,
        max_mp=template.mp,
        strength=template.strength,
        defense=template.defense,
        magic=template.magic,
        speed=template.speed,
        spirit=template.spirit,
        luck=template.luck,
    )
    return Enemy(
        id=instance_id or make_instance_id("enemy", rng),
        name=template.name,
        stats=stats,
        element=template.element,
        status_effects=[],
        template_id=template.id,
        story_target_id=template.story_target_id,
    )
