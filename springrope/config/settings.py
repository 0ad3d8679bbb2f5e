"""Configuration constants for the spring rope simulation."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import yaml

from .constants import DEFAULTS

_PATH_FIELDS = {"LOG_DIRECTORY"}
_STRING_FIELDS = {"DEBUG_LOG_FILE", "DEBUG_LOG_LEVEL", "INPUT_MODE", "TILT_MAPPING"}
_BOOL_FIELDS = {"SHOW_HUD"}
_FLOAT_FIELDS = {
    "STIFFNESS",
    "DAMPING",
    "MASS",
    "CURVE_STEP",
    "TANGENT_STEP",
    "TANGENT_LENGTH",
    "DT_CLAMP",
    "ANCHOR_LEFT_FRACTION",
    "ANCHOR_RIGHT_FRACTION",
    "ANCHOR_HEIGHT_FRACTION",
    "CONTROL_LEFT_FRACTION",
    "CONTROL_RIGHT_FRACTION",
    "DRAG_SMOOTHING",
    "TILT_SCALE_X",
    "TILT_SCALE_Y",
}

WINDOW_WIDTH = DEFAULTS["WINDOW_WIDTH"]
WINDOW_HEIGHT = DEFAULTS["WINDOW_HEIGHT"]
FPS = DEFAULTS["FPS"]

WHITE = (255, 255, 255)
RED = (255, 69, 58)

STIFFNESS = float(os.getenv("ROPE_STIFFNESS", "200.0"))
DAMPING = float(os.getenv("ROPE_DAMPING", "10.0"))
MASS = float(os.getenv("ROPE_MASS", "1.0"))

CURVE_STEP = 0.01
TANGENT_STEP = 0.1
TANGENT_LENGTH = 16.0
DT_CLAMP = 1.0 / 30.0

ANCHOR_LEFT_FRACTION = 0.15
ANCHOR_RIGHT_FRACTION = 0.85
ANCHOR_HEIGHT_FRACTION = 0.5
CONTROL_LEFT_FRACTION = 0.35
CONTROL_RIGHT_FRACTION = 0.65

DRAG_SMOOTHING = 0.6
TILT_SCALE_X = 120.0
TILT_SCALE_Y = 80.0
TILT_MAPPING = "offset"
INPUT_MODE = os.getenv("ROPE_INPUT_MODE", "drag")
SHOW_HUD = True

CONFIG_ENV_VAR = "ROPE_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path("configs/default.yaml")
LOG_DIRECTORY = Path(os.getenv("ROPE_LOG_DIR", "logs"))
DEBUG_LOG_FILE = os.getenv("ROPE_DEBUG_LOG", "rope_debug.log")
DEBUG_LOG_LEVEL = os.getenv("ROPE_DEBUG_LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class SimulationSettings:
    WINDOW_WIDTH: int = WINDOW_WIDTH
    WINDOW_HEIGHT: int = WINDOW_HEIGHT
    FPS: int = FPS
    STIFFNESS: float = STIFFNESS
    DAMPING: float = DAMPING
    MASS: float = MASS
    CURVE_STEP: float = CURVE_STEP
    TANGENT_STEP: float = TANGENT_STEP
    TANGENT_LENGTH: float = TANGENT_LENGTH
    DT_CLAMP: float = DT_CLAMP
    ANCHOR_LEFT_FRACTION: float = ANCHOR_LEFT_FRACTION
    ANCHOR_RIGHT_FRACTION: float = ANCHOR_RIGHT_FRACTION
    ANCHOR_HEIGHT_FRACTION: float = ANCHOR_HEIGHT_FRACTION
    CONTROL_LEFT_FRACTION: float = CONTROL_LEFT_FRACTION
    CONTROL_RIGHT_FRACTION: float = CONTROL_RIGHT_FRACTION
    DRAG_SMOOTHING: float = DRAG_SMOOTHING
    TILT_SCALE_X: float = TILT_SCALE_X
    TILT_SCALE_Y: float = TILT_SCALE_Y
    TILT_MAPPING: str = TILT_MAPPING
    INPUT_MODE: str = INPUT_MODE
    SHOW_HUD: bool = SHOW_HUD
    LOG_DIRECTORY: Path = LOG_DIRECTORY
    DEBUG_LOG_FILE: str = DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL: str = DEBUG_LOG_LEVEL

    def with_updates(self, overrides: Dict[str, Any]) -> "SimulationSettings":
        merged = asdict(self)
        merged.update(overrides)
        _validate_settings_dict(merged)
        return SimulationSettings(**merged)


_ACTIVE_SETTINGS = SimulationSettings()
_ENV_VARS: Dict[str, str] = {
    "WINDOW_WIDTH": "ROPE_WINDOW_WIDTH",
    "WINDOW_HEIGHT": "ROPE_WINDOW_HEIGHT",
    "FPS": "ROPE_FPS",
    "STIFFNESS": "ROPE_STIFFNESS",
    "DAMPING": "ROPE_DAMPING",
    "MASS": "ROPE_MASS",
    "CURVE_STEP": "ROPE_CURVE_STEP",
    "TANGENT_STEP": "ROPE_TANGENT_STEP",
    "TANGENT_LENGTH": "ROPE_TANGENT_LENGTH",
    "DT_CLAMP": "ROPE_DT_CLAMP",
    "DRAG_SMOOTHING": "ROPE_DRAG_SMOOTHING",
    "TILT_SCALE_X": "ROPE_TILT_SCALE_X",
    "TILT_SCALE_Y": "ROPE_TILT_SCALE_Y",
    "TILT_MAPPING": "ROPE_TILT_MAPPING",
    "INPUT_MODE": "ROPE_INPUT_MODE",
    "SHOW_HUD": "ROPE_SHOW_HUD",
}


def _coerce(value: str, field: str) -> Any:
    if field in _PATH_FIELDS:
        return Path(value)
    if field in _STRING_FIELDS:
        return value
    if field in _BOOL_FIELDS:
        return value in {"1", "true", "True"}
    if field in _FLOAT_FIELDS:
        return float(value)
    return int(value)


def _collect_env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field, env_name in _ENV_VARS.items():
        raw = env.get(env_name)
        if raw is not None:
            overrides[field] = _coerce(raw, field)
    return overrides


def _normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in {"1", "true", "True", "TRUE"}
    if isinstance(value, (int, float)):
        return bool(value)
    raise ValueError("Invalid boolean value in config")


def _normalize_numeric(value: Any, caster: type[float | int]) -> float | int:
    if isinstance(value, (int, float)):
        return caster(value)
    if isinstance(value, str):
        return caster(float(value) if caster is float else int(float(value)))
    raise ValueError("Invalid numeric value in config")


def _normalize_config_value(field: str, value: Any) -> Any:
    if field in _PATH_FIELDS:
        if isinstance(value, Path):
            return value
        if isinstance(value, str):
            return Path(value)
        raise ValueError(f"Field {field} must be a path or string")
    if field in _STRING_FIELDS:
        if isinstance(value, str):
            return value
        raise ValueError(f"Field {field} must be a string")
    if field in _BOOL_FIELDS:
        return _normalize_bool(value)
    if field in _FLOAT_FIELDS:
        return float(_normalize_numeric(value, float))
    return int(_normalize_numeric(value, int))


_NUMERIC_BOUNDS: Dict[str, tuple[float, float]] = {
    "WINDOW_WIDTH": (200, 7680),
    "WINDOW_HEIGHT": (200, 4320),
    "FPS": (1, 360),
    "STIFFNESS": (0.1, 5000.0),
    "DAMPING": (0.0, 500.0),
    "MASS": (0.01, 100.0),
    "CURVE_STEP": (0.001, 0.5),
    "TANGENT_STEP": (0.01, 1.0),
    "TANGENT_LENGTH": (0.0, 200.0),
    "DT_CLAMP": (0.001, 0.25),
    "ANCHOR_LEFT_FRACTION": (0.0, 1.0),
    "ANCHOR_RIGHT_FRACTION": (0.0, 1.0),
    "ANCHOR_HEIGHT_FRACTION": (0.0, 1.0),
    "CONTROL_LEFT_FRACTION": (0.0, 1.0),
    "CONTROL_RIGHT_FRACTION": (0.0, 1.0),
    "DRAG_SMOOTHING": (0.0, 0.99),
    "TILT_SCALE_X": (0.0, 2000.0),
    "TILT_SCALE_Y": (0.0, 2000.0),
}

_CHOICE_FIELDS: Dict[str, set[str]] = {
    "DEBUG_LOG_LEVEL": {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
    "INPUT_MODE": {"DRAG", "TILT"},
    "TILT_MAPPING": {"OFFSET", "ABSOLUTE"},
}

# Choice fields stored lower-case; the log level keeps the logging module's spelling.
_LOWERCASE_CHOICES = {"INPUT_MODE", "TILT_MAPPING"}


def _validate_settings_dict(values: Dict[str, Any]) -> None:
    for field, (lower, upper) in _NUMERIC_BOUNDS.items():
        current = values.get(field)
        if current is None:
            continue
        if not (lower <= current <= upper):
            raise ValueError(f"{field} must be between {lower} and {upper}, got {current}")
    for field, choices in _CHOICE_FIELDS.items():
        current = values.get(field)
        if current is None:
            continue
        if isinstance(current, str) and current.upper() in choices:
            values[field] = current.lower() if field in _LOWERCASE_CHOICES else current.upper()
            continue
        raise ValueError(f"{field} must be one of {sorted(choices)} (got {current})")
    _validate_relationships(values)


def _validate_relationships(values: Mapping[str, Any]) -> None:
    left = values.get("ANCHOR_LEFT_FRACTION")
    right = values.get("ANCHOR_RIGHT_FRACTION")
    if left is not None and right is not None and left >= right:
        raise ValueError("ANCHOR_LEFT_FRACTION must be smaller than ANCHOR_RIGHT_FRACTION")
    for field in ("CONTROL_LEFT_FRACTION", "CONTROL_RIGHT_FRACTION"):
        current = values.get(field)
        if current is None or left is None or right is None:
            continue
        if not (left < current < right):
            raise ValueError(f"{field} must lie between the anchor fractions")


def _load_config_overrides(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ValueError(f"Invalid YAML in config file {path}") from error
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must define a mapping")
    valid_fields = set(SimulationSettings.__dataclass_fields__.keys())
    overrides: Dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).upper()
        if key not in valid_fields:
            raise ValueError(f"Unknown config field: {raw_key}")
        overrides[key] = _normalize_config_value(key, value)
    return overrides


def _resolve_config_path(cli_value: str | None, env: Mapping[str, str]) -> Path | None:
    candidate_strings = [cli_value, env.get(CONFIG_ENV_VAR)]
    for candidate in candidate_strings:
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the spring rope with runtime overrides")
    parser.add_argument("--config", type=str, help="Path to a YAML config file with runtime settings")
    parser.add_argument("--window-width", type=int, help="Viewport width")
    parser.add_argument("--window-height", type=int, help="Viewport height")
    parser.add_argument("--fps", type=int, help="Target frames per second")
    parser.add_argument("--stiffness", type=float, help="Spring constant k")
    parser.add_argument("--damping", type=float, help="Damping coefficient d")
    parser.add_argument("--mass", type=float, help="Mass of each dynamic control point")
    parser.add_argument("--curve-step", type=float, help="Parameter step used to sample the curve")
    parser.add_argument("--tangent-step", type=float, help="Parameter step between tangent sticks")
    parser.add_argument("--tangent-length", type=float, help="Half-length of a tangent stick in pixels")
    parser.add_argument("--dt-clamp", type=float, help="Upper bound for a single frame delta in seconds")
    parser.add_argument("--drag-smoothing", type=float, help="Low-pass factor applied to drag targets")
    parser.add_argument("--tilt-scale-x", type=float, help="Pixels per radian of roll")
    parser.add_argument("--tilt-scale-y", type=float, help="Pixels per radian of pitch")
    parser.add_argument("--tilt-mapping", type=str, help="Tilt mapping: offset or absolute")
    parser.add_argument("--input-mode", type=str, help="Input source: drag or tilt")
    parser.add_argument("--log-level", type=str, help="Debug log level")
    parser.add_argument(
        "--headless-frames",
        type=int,
        default=None,
        help="Run this many fixed-step frames without opening a window",
    )
    parser.add_argument("--hud", dest="show_hud", action="store_true", help="Show the HUD overlay")
    parser.add_argument("--no-hud", dest="show_hud", action="store_false", help="Hide the HUD overlay")
    parser.set_defaults(show_hud=None)
    return parser


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    return _build_arg_parser().parse_args(args=args)


def load_runtime_settings(args: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> SimulationSettings:
    env_mapping = os.environ if env is None else env
    parsed = parse_args(args)
    overrides: Dict[str, Any] = {}
    config_path = _resolve_config_path(parsed.config, env_mapping)
    if config_path is not None:
        overrides.update(_load_config_overrides(config_path))
    overrides.update(_collect_env_overrides(env_mapping))
    cli_mapping = {
        "WINDOW_WIDTH": parsed.window_width,
        "WINDOW_HEIGHT": parsed.window_height,
        "FPS": parsed.fps,
        "STIFFNESS": parsed.stiffness,
        "DAMPING": parsed.damping,
        "MASS": parsed.mass,
        "CURVE_STEP": parsed.curve_step,
        "TANGENT_STEP": parsed.tangent_step,
        "TANGENT_LENGTH": parsed.tangent_length,
        "DT_CLAMP": parsed.dt_clamp,
        "DRAG_SMOOTHING": parsed.drag_smoothing,
        "TILT_SCALE_X": parsed.tilt_scale_x,
        "TILT_SCALE_Y": parsed.tilt_scale_y,
        "TILT_MAPPING": parsed.tilt_mapping,
        "INPUT_MODE": parsed.input_mode,
        "DEBUG_LOG_LEVEL": parsed.log_level,
        "SHOW_HUD": parsed.show_hud,
    }
    overrides.update({k: v for k, v in cli_mapping.items() if v is not None})
    return _ACTIVE_SETTINGS.with_updates(overrides)


def apply_runtime_settings(new_settings: SimulationSettings) -> SimulationSettings:
    global _ACTIVE_SETTINGS
    global WINDOW_WIDTH, WINDOW_HEIGHT, FPS
    global STIFFNESS, DAMPING, MASS
    global CURVE_STEP, TANGENT_STEP, TANGENT_LENGTH, DT_CLAMP
    global ANCHOR_LEFT_FRACTION, ANCHOR_RIGHT_FRACTION, ANCHOR_HEIGHT_FRACTION
    global CONTROL_LEFT_FRACTION, CONTROL_RIGHT_FRACTION
    global DRAG_SMOOTHING, TILT_SCALE_X, TILT_SCALE_Y, TILT_MAPPING, INPUT_MODE, SHOW_HUD
    global LOG_DIRECTORY, DEBUG_LOG_FILE, DEBUG_LOG_LEVEL

    _ACTIVE_SETTINGS = new_settings
    WINDOW_WIDTH = new_settings.WINDOW_WIDTH
    WINDOW_HEIGHT = new_settings.WINDOW_HEIGHT
    FPS = new_settings.FPS
    STIFFNESS = new_settings.STIFFNESS
    DAMPING = new_settings.DAMPING
    MASS = new_settings.MASS
    CURVE_STEP = new_settings.CURVE_STEP
    TANGENT_STEP = new_settings.TANGENT_STEP
    TANGENT_LENGTH = new_settings.TANGENT_LENGTH
    DT_CLAMP = new_settings.DT_CLAMP
    ANCHOR_LEFT_FRACTION = new_settings.ANCHOR_LEFT_FRACTION
    ANCHOR_RIGHT_FRACTION = new_settings.ANCHOR_RIGHT_FRACTION
    ANCHOR_HEIGHT_FRACTION = new_settings.ANCHOR_HEIGHT_FRACTION
    CONTROL_LEFT_FRACTION = new_settings.CONTROL_LEFT_FRACTION
    CONTROL_RIGHT_FRACTION = new_settings.CONTROL_RIGHT_FRACTION
    DRAG_SMOOTHING = new_settings.DRAG_SMOOTHING
    TILT_SCALE_X = new_settings.TILT_SCALE_X
    TILT_SCALE_Y = new_settings.TILT_SCALE_Y
    TILT_MAPPING = new_settings.TILT_MAPPING
    INPUT_MODE = new_settings.INPUT_MODE
    SHOW_HUD = new_settings.SHOW_HUD
    LOG_DIRECTORY = new_settings.LOG_DIRECTORY
    DEBUG_LOG_FILE = new_settings.DEBUG_LOG_FILE
    DEBUG_LOG_LEVEL = new_settings.DEBUG_LOG_LEVEL
    return _ACTIVE_SETTINGS


def current_settings() -> SimulationSettings:
    return _ACTIVE_SETTINGS
