"""Ability catalog repository."""
from __future__ import annotations

from typing import Dict, List

from shardfall.data.errors import DataReferenceError
from shardfall.data.repositories.base import RepositoryBase
from shardfall.domain.constants import CLASS_NAMES, ELEMENTS, STATUS_EFFECTS
from shardfall.domain.defs import AbilityDef

VALID_TARGET_TYPES = {"enemy_single", "enemy_all", "ally_single", "party", "self"}

_REQUIRED_FIELDS = {"name", "element", "mp_cost", "target_type", "power"}
_OPTIONAL_FIELDS = {"description", "status_effect", "class_restriction", "level_requirement"}


class AbilitiesRepository(RepositoryBase[AbilityDef]):
    """Loads the static ability catalog, keyed by ability id."""

    def __init__(self, base_path=None) -> None:
        super().__init__("abilities.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, AbilityDef]:
        abilities: Dict[str, AbilityDef] = {}
        for raw_id, payload in raw.items():
            context = f"ability '{raw_id}'"
            ability_data = self._require_mapping(payload, context)
            self._assert_required(ability_data, _REQUIRED_FIELDS, context)
            self._assert_known(ability_data, _REQUIRED_FIELDS | _OPTIONAL_FIELDS, context)

            class_restriction = None
            if ability_data.get("class_restriction") is not None:
                class_restriction = tuple(
                    self._require_str_list(ability_data["class_restriction"], f"{context} class_restriction")
                )
                unknown_classes = set(class_restriction) - set(CLASS_NAMES)
                if unknown_classes:
                    raise DataReferenceError(f"{context} references unknown classes: {sorted(unknown_classes)}")

            abilities[raw_id] = AbilityDef(
                id=raw_id,
                name=self._require_str(ability_data["name"], f"{context} name"),
                element=self._require_optional_literal(ability_data["element"], ELEMENTS, f"{context} element"),
                mp_cost=self._require_int(ability_data["mp_cost"], f"{context} mp_cost"),
                target_type=self._require_literal(
                    ability_data["target_type"], VALID_TARGET_TYPES, f"{context} target_type"
                ),
                power=self._require_int(ability_data["power"], f"{context} power"),
                description=str(ability_data.get("description", "")),
                status_effect=self._require_optional_literal(
                    ability_data.get("status_effect"), STATUS_EFFECTS, f"{context} status_effect"
                ),
                class_restriction=class_restriction,
                level_requirement=self._require_int(
                    ability_data.get("level_requirement", 1), f"{context} level_requirement", minimum=1
                ),
            )
        return abilities

    def for_class(self, class_name: str) -> List[AbilityDef]:
        """Return the abilities restricted to the given class."""
        return [
            ability
            for ability in self.all()
            if ability.class_restriction is not None and class_name in ability.class_restriction
        ]

    def usable_by(self, class_name: str, level: int) -> List[AbilityDef]:
        """Return every ability a character of this class and level may use."""
        return [ability for ability in self.all() if ability.is_usable_by(class_name, level)]
