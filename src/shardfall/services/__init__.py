"""Service layer exports."""

from .errors import BattleError, BattleNotFoundError, BattleSetupError, BattleStoreError, FactoryError
from .battle_snapshot import BattleSnapshot, build_snapshot
from .battle_store import BattleStore
from .command_validator import CommandValidator
from .battle_service import BattleService

__all__ = [
    "BattleError",
    "BattleNotFoundError",
    "BattleSetupError",
    "BattleStoreError",
    "FactoryError",
    "BattleSnapshot",
    "build_snapshot",
    "BattleStore",
    "CommandValidator",
    "BattleService",
]
