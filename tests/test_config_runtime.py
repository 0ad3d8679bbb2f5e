"""Tests for the runtime configuration loader."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from springrope.config import settings


def _write_tmp_config(tmp_path: Path, content: str) -> Path:
    file_path = tmp_path / "conf.yaml"
    file_path.write_text(content, encoding="utf-8")
    return file_path


def test_defaults_match_reference_tuning():
    conf = settings.load_runtime_settings(args=[], env={})
    assert conf.STIFFNESS == 200.0
    assert conf.DAMPING == 10.0
    assert conf.MASS == 1.0
    assert conf.CURVE_STEP == 0.01
    assert conf.DT_CLAMP == pytest.approx(1.0 / 30.0)
    assert conf.DRAG_SMOOTHING == 0.6


def test_env_overrides_take_effect(monkeypatch):
    monkeypatch.setenv("ROPE_STIFFNESS", "350")
    conf = settings.load_runtime_settings(args=[], env=os.environ)
    assert conf.STIFFNESS == 350.0


def test_cli_overrides_take_precedence():
    conf = settings.load_runtime_settings(args=["--damping", "12.5"], env={})
    assert conf.DAMPING == 12.5


def test_config_file_used_when_provided(tmp_path):
    config = _write_tmp_config(tmp_path, "stiffness: 150\nfps: 30\ninput_mode: TILT\n")
    conf = settings.load_runtime_settings(args=["--config", str(config)], env={})
    assert conf.STIFFNESS == 150.0
    assert conf.FPS == 30
    assert conf.INPUT_MODE == "tilt"


def test_env_overrides_config(monkeypatch, tmp_path):
    config = _write_tmp_config(tmp_path, "window_width: 600\n")
    monkeypatch.setenv("ROPE_WINDOW_WIDTH", "640")
    conf = settings.load_runtime_settings(args=["--config", str(config)], env=os.environ)
    assert conf.WINDOW_WIDTH == 640


def test_cli_overrides_config_and_env(monkeypatch, tmp_path):
    config = _write_tmp_config(tmp_path, "window_width: 600\n")
    monkeypatch.setenv("ROPE_WINDOW_WIDTH", "640")
    conf = settings.load_runtime_settings(args=["--config", str(config), "--window-width", "700"], env=os.environ)
    assert conf.WINDOW_WIDTH == 700


def test_hud_flag_and_headless_frames():
    conf = settings.load_runtime_settings(args=["--no-hud"], env={})
    assert conf.SHOW_HUD is False
    assert settings.parse_args(["--headless-frames", "90"]).headless_frames == 90


def test_invalid_field_in_config_raises(tmp_path):
    config = _write_tmp_config(tmp_path, "unknown_value: 1\n")
    with pytest.raises(ValueError, match="Unknown config field"):
        settings.load_runtime_settings(args=["--config", str(config)], env={})


def test_missing_config_file_errors(tmp_path):
    missing = tmp_path / "missing.yaml"
    with pytest.raises(FileNotFoundError):
        settings.load_runtime_settings(args=["--config", str(missing)], env={})


def test_invalid_numeric_range_raises(tmp_path):
    config = _write_tmp_config(tmp_path, "dt_clamp: 2.0\n")
    with pytest.raises(ValueError, match="DT_CLAMP"):
        settings.load_runtime_settings(args=["--config", str(config)], env={})


def test_invalid_choice_raises():
    with pytest.raises(ValueError, match="INPUT_MODE"):
        settings.load_runtime_settings(args=["--input-mode", "keyboard"], env={})


def test_anchor_order_relationship_raises(tmp_path):
    config = _write_tmp_config(tmp_path, "anchor_left_fraction: 0.9\nanchor_right_fraction: 0.1\n")
    with pytest.raises(ValueError, match="ANCHOR_LEFT_FRACTION must be smaller"):
        settings.load_runtime_settings(args=["--config", str(config)], env={})


def test_control_points_must_sit_between_anchors(tmp_path):
    config = _write_tmp_config(tmp_path, "control_left_fraction: 0.05\n")
    with pytest.raises(ValueError, match="CONTROL_LEFT_FRACTION"):
        settings.load_runtime_settings(args=["--config", str(config)], env={})


def test_apply_runtime_settings_updates_module_values():
    original = settings.current_settings()
    try:
        updated = original.with_updates({"FPS": 30, "STIFFNESS": 99.0})
        settings.apply_runtime_settings(updated)
        assert settings.FPS == 30
        assert settings.STIFFNESS == 99.0
        assert settings.current_settings() is updated
    finally:
        settings.apply_runtime_settings(original)


def test_apply_runtime_settings_updates_layout_fractions():
    original = settings.current_settings()
    try:
        updated = original.with_updates(
            {
                "ANCHOR_LEFT_FRACTION": 0.1,
                "ANCHOR_RIGHT_FRACTION": 0.9,
                "ANCHOR_HEIGHT_FRACTION": 0.4,
                "CONTROL_LEFT_FRACTION": 0.3,
                "CONTROL_RIGHT_FRACTION": 0.7,
            }
        )
        settings.apply_runtime_settings(updated)
        assert settings.ANCHOR_LEFT_FRACTION == 0.1
        assert settings.ANCHOR_RIGHT_FRACTION == 0.9
        assert settings.ANCHOR_HEIGHT_FRACTION == 0.4
        assert settings.CONTROL_LEFT_FRACTION == 0.3
        assert settings.CONTROL_RIGHT_FRACTION == 0.7
    finally:
        settings.apply_runtime_settings(original)
