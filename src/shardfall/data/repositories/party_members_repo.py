"""Party member roster repository."""
from __future__ import annotations

from typing import Dict

from shardfall.data.errors import DataValidationError
from shardfall.data.repositories.base import RepositoryBase
from shardfall.domain.defs import PartyMemberDef
from shardfall.domain.entities import Stats

_STAT_FIELDS = ("max_hp", "max_mp", "strength", "defense", "magic", "speed", "spirit", "luck")


class PartyMembersRepository(RepositoryBase[PartyMemberDef]):
    """Loads recruitable roster characters."""

    def __init__(self, base_path=None) -> None:
        super().__init__("party_members.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, PartyMemberDef]:
        members: Dict[str, PartyMemberDef] = {}
        for raw_id, payload in raw.items():
            context = f"party member '{raw_id}'"
            member_data = self._require_mapping(payload, context)
            self._assert_required(member_data, {"name", "class_name", "base_stats"}, context)
            base_stats = self._require_mapping(member_data["base_stats"], f"{context} base_stats")
            self._assert_required(base_stats, set(_STAT_FIELDS), f"{context} base_stats")

            stat_values = {
                name: self._require_int(base_stats[name], f"{context} base_stats.{name}") for name in _STAT_FIELDS
            }
            stats = Stats(
                hp=stat_values["max_hp"],
                mp=stat_values["max_mp"],
                **stat_values,
            )

            members[raw_id] = PartyMemberDef(
                id=raw_id,
                name=self._require_str(member_data["name"], f"{context} name"),
                class_name=self._require_str(member_data["class_name"], f"{context} class_name"),
                level=self._require_int(member_data.get("level", 1), f"{context} level", minimum=1),
                base_stats=stats,
                equipped_items=self._build_equipment(member_data.get("equipped_items", {}), context),
                crystal_resonance=self._build_resonance(member_data.get("crystal_resonance", {}), context),
            )
        return members

    def _build_equipment(self, value: object, context: str) -> Dict[str, str | None]:
        equipment = self._require_mapping(value, f"{context} equipped_items")
        return {
            str(slot): self._require_optional_str(item, f"{context} equipped_items.{slot}")
            for slot, item in equipment.items()
        }

    def _build_resonance(self, value: object, context: str) -> Dict[str, float]:
        resonance = self._require_mapping(value, f"{context} crystal_resonance")
        weights: Dict[str, float] = {}
        for key, weight in resonance.items():
            weights[str(key)] = self._require_number(weight, f"{context} crystal_resonance.{key}")
            if weights[str(key)] < 0:
                raise DataValidationError(f"{context} crystal_resonance.{key} must be >= 0.")
        return weights
