from __future__ import annotations

import pytest

from helix_trainer.config import EngineConfig, ScoringConfig, load_config


def test_defaults_match_scoring_constants() -> None:
    config = load_config()

    assert config.scoring == ScoringConfig(
        base_score=1000,
        keystroke_penalty=10,
        hint_penalty=100,
        time_grace_seconds=30,
        par_tolerance=3,
    )
    assert config.engine.indent_unit == "    "


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HELIX_TRAINER_BASE_SCORE", "2000")
    monkeypatch.setenv("HELIX_TRAINER_PAR_TOLERANCE", "5")
    monkeypatch.setenv("HELIX_TRAINER_INDENT_WIDTH", "2")

    config = load_config()

    assert config.scoring.base_score == 2000
    assert config.scoring.par_tolerance == 5
    assert config.scoring.hint_penalty == 100
    assert config.engine.indent_unit == "  "


def test_invalid_environment_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HELIX_TRAINER_KEYSTROKE_PENALTY", "lots")
    monkeypatch.setenv("HELIX_TRAINER_INDENT_WIDTH", "0")

    config = load_config()

    assert config.scoring.keystroke_penalty == 10
    assert config.engine.indent_unit == " "


def test_indent_unit_must_be_spaces() -> None:
    with pytest.raises(ValueError):
        EngineConfig(indent_unit="\t")
    with pytest.raises(ValueError):
        EngineConfig(indent_unit="")
