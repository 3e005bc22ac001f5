"""Enemy template repository."""
from __future__ import annotations

from typing import Dict

from shardfall.data.repositories.base import RepositoryBase
from shardfall.domain.constants import ELEMENTS
from shardfall.domain.defs import EnemyTemplateDef

_STAT_FIELDS = ("hp", "mp", "strength", "defense", "magic", "speed", "spirit", "luck")


class EnemiesRepository(RepositoryBase[EnemyTemplateDef]):
    """Loads and validates enemy templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyTemplateDef]:
        enemies: Dict[str, EnemyTemplateDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            self._assert_required(enemy_data, {"name", *_STAT_FIELDS}, context)
            self._assert_known(enemy_data, {"name", "element", "story_target_id", *_STAT_FIELDS}, context)

            enemies[raw_id] = EnemyTemplateDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                element=self._require_optional_literal(enemy_data.get("element"), ELEMENTS, f"{context} element"),
                hp=self._require_int(enemy_data["hp"], f"{context} hp", minimum=1),
                mp=self._require_int(enemy_data["mp"], f"{context} mp"),
                strength=self._require_int(enemy_data["strength"], f"{context} strength"),
                defense=self._require_int(enemy_data["defense"], f"{context} defense"),
                magic=self._require_int(enemy_data["magic"], f"{context} magic"),
                speed=self._require_int(enemy_data["speed"], f"{context} speed"),
                spirit=self._require_int(enemy_data["spirit"], f"{context} spirit"),
                luck=self._require_int(enemy_data["luck"], f"{context} luck"),
                story_target_id=self._require_optional_str(
                    enemy_data.get("story_target_id"), f"{context} story_target_id"
                ),
            )
        return enemies
