"""Service-layer exceptions."""


class BattleError(Exception):
    """Base class for structural misuse of the battle engine."""


class BattleSetupError(BattleError):
    """Raised when a battle cannot be created from the given party or enemies."""


class BattleNotFoundError(BattleError, KeyError):
    """Raised when a battle id is not present in the store."""


class BattleStoreError(BattleError):
    """Raised when the battle store is used inconsistently."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""
