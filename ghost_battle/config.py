from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GHOST_BATTLE_CONFIG_PATH"
LOG_LEVEL_ENV = "GHOST_BATTLE_LOG_LEVEL"

DEFAULT_PARTY_LIMIT = 6
DEFAULT_MAX_MOVE_SLOTS = 4

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_int(value: object, fallback: int) -> int:
    if isinstance(value, bool):
        return fallback
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return fallback


def _clamp(value: int, lo: int, hi: int) -> int:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


@dataclass(frozen=True, slots=True)
class BattleConfig:
    party_limit: int = DEFAULT_PARTY_LIMIT
    max_move_slots: int = DEFAULT_MAX_MOVE_SLOTS
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        return {
            "party_limit": int(self.party_limit),
            "max_move_slots": int(self.max_move_slots),
            "log_level": str(self.log_level),
        }

    @classmethod
    def from_dict(cls, data: object) -> "BattleConfig":
        if not isinstance(data, dict):
            return cls()
        level = str(data.get("log_level", "WARNING")).strip().upper()
        if level not in _LOG_LEVELS:
            level = "WARNING"
        return cls(
            party_limit=_clamp(_as_int(data.get("party_limit"), DEFAULT_PARTY_LIMIT), 1, 12),
            max_move_slots=_clamp(_as_int(data.get("max_move_slots"), DEFAULT_MAX_MOVE_SLOTS), 1, 8),
            log_level=level,
        )


def default_config_path() -> Path:
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit).expanduser()
    return Path.home() / ".ghost_battle_config.json"


def load_config(path: Path | None = None) -> BattleConfig:
    """Read the JSON config; a missing or unreadable file yields defaults."""

    path = default_config_path() if path is None else path
    config = BattleConfig()
    if path.exists():
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable config %s: %s", path, exc)
        else:
            config = BattleConfig.from_dict(payload)

    override = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if override in _LOG_LEVELS:
        config = BattleConfig(
            party_limit=config.party_limit,
            max_move_slots=config.max_move_slots,
            log_level=override,
        )
    return config
