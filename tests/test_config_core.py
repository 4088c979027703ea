from __future__ import annotations

import json
from pathlib import Path

import pytest

from ghost_battle.config import (
    CONFIG_PATH_ENV,
    LOG_LEVEL_ENV,
    BattleConfig,
    default_config_path,
    load_config,
)


def test_missing_file_gives_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    cfg = load_config(tmp_path / "nope.json")
    assert cfg == BattleConfig()
    assert (cfg.party_limit, cfg.max_move_slots, cfg.log_level) == (6, 4, "WARNING")


def test_values_are_clamped_and_validated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"party_limit": 99, "max_move_slots": "2", "log_level": "loud"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.party_limit == 12
    assert cfg.max_move_slots == 2
    assert cfg.log_level == "WARNING"


def test_corrupt_file_falls_back(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == BattleConfig()


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps(BattleConfig(party_limit=3).to_dict()), encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert default_config_path() == path
    cfg = load_config()
    assert cfg.party_limit == 3
    assert cfg.log_level == "DEBUG"


def test_from_dict_tolerates_non_mapping() -> None:
    assert BattleConfig.from_dict([1, 2]) == BattleConfig()
    assert BattleConfig.from_dict({"party_limit": True}).party_limit == 6
