"""Engine configuration helpers."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SHARDFALL_CONFIG"
DEFAULT_LOG_WINDOW = 50
DEFAULT_ENEMY_ABILITY_ID = "basic_attack"


@dataclass(slots=True)
class EngineConfig:
    """Tunable policy values for the battle engine and its boundary."""

    log_window: int = DEFAULT_LOG_WINDOW
    enemy_ability_id: str = DEFAULT_ENEMY_ABILITY_ID
    seed: int | None = None


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Shardfall"
        return Path.home() / "Shardfall"
    return Path.home() / ".config" / "shardfall"


def get_default_config_path() -> Path:
    """Return the config path, honouring SHARDFALL_CONFIG when set."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_user_data_dir() / "config.json"


def _normalize_log_window(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return DEFAULT_LOG_WINDOW


def _normalize_ability_id(value: object) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_ENEMY_ABILITY_ID


def _normalize_seed(value: object) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def load_config(path: Path | None = None) -> EngineConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return EngineConfig()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return EngineConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_path)
        return EngineConfig()
    return EngineConfig(
        log_window=_normalize_log_window(raw.get("log_window")),
        enemy_ability_id=_normalize_ability_id(raw.get("enemy_ability_id")),
        seed=_normalize_seed(raw.get("seed")),
    )


def save_config(config: EngineConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
