"""
Configuration loading and validation.

Loads a YAML file with two optional sections and validates every value:

    simulation:
      tick_interval: 0.016
      seed: 42
    forces:
      link_distance: 100.0
      link_strength: 0.7
      charge_strength: -500.0
      center_strength: 0.1
      velocity_decay: 0.9
      alpha_min: 0.001
      alpha_target: 0.0
      cooling_ticks: 300

Missing keys fall back to the dataclass defaults. Values are converted to
the field's type; anything that does not convert raises ConfigError.
"""

from dataclasses import fields
from pathlib import Path
import logging

import yaml

from forcelayout.core.forces import ForceConfig
from forcelayout.core.simulation import SimulationConfig


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file holds invalid values."""


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name}: expected a mapping, got {type(section).__name__}")
    return section


def _to_float(value) -> float:
    if isinstance(value, bool):
        raise TypeError("expected a number, got bool")
    return float(value)


def _to_int(value) -> int:
    number = _to_float(value)
    if not number.is_integer():
        raise ValueError(f"expected an integer, got {value!r}")
    return int(number)


def _to_optional_int(value):
    return None if value is None else _to_int(value)


# Dataclass annotations are strings (postponed evaluation)
_CONVERTERS = {
    "float": _to_float,
    "int": _to_int,
    "Optional[int]": _to_optional_int,
}


def _build(cls, section: dict, name: str, exclude: tuple[str, ...] = ()):
    known = {f.name: f for f in fields(cls) if f.init and f.name not in exclude}
    unknown = set(section) - set(known)
    if unknown:
        raise ConfigError(f"{name}: unknown keys {sorted(unknown)}")

    values = {}
    for key, value in section.items():
        convert = _CONVERTERS[known[key].type]
        try:
            values[key] = convert(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name}.{key}: invalid value {value!r} ({e})") from e
    return cls(**values)


def config_from_dict(raw: dict | None) -> SimulationConfig:
    """
    Build and validate a SimulationConfig from parsed YAML.

    Raises:
        ConfigError: If a section is malformed or a value is out of range.
    """
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Top level must be a mapping, got {type(raw).__name__}")

    forces = _build(ForceConfig, _section(raw, "forces"), "forces")
    simulation = _build(
        SimulationConfig, _section(raw, "simulation"), "simulation", exclude=("forces",)
    )
    simulation.forces = forces

    is_valid, error = simulation.validate()
    if not is_valid:
        raise ConfigError(error)
    return simulation


def load_config(path: Path) -> SimulationConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated SimulationConfig.

    Raises:
        ConfigError: If config is invalid.
        FileNotFoundError: If file doesn't exist.
    """
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    config = config_from_dict(raw)
    logger.debug("Loaded configuration from %s", path)
    return config
