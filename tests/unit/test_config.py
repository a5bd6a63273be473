"""Unit tests for YAML configuration loading."""

import pytest

from forcelayout.config import ConfigError, config_from_dict, load_config
from forcelayout.core.forces import ForceConfig
from forcelayout.core.simulation import SimulationConfig


class TestConfigFromDict:
    """Tests for building configs from parsed YAML."""

    def test_empty_gives_defaults(self):
        cfg = config_from_dict({})
        assert cfg == SimulationConfig()
        assert cfg.forces == ForceConfig()

    def test_none_gives_defaults(self):
        assert config_from_dict(None) == SimulationConfig()

    def test_partial_sections(self):
        cfg = config_from_dict({
            "simulation": {"tick_interval": 0.033},
            "forces": {"link_distance": 80.0, "cooling_ticks": 600},
        })
        assert cfg.tick_interval == 0.033
        assert cfg.forces.link_distance == 80.0
        assert cfg.forces.cooling_ticks == 600
        assert cfg.forces.link_strength == 0.7  # default kept

    def test_out_of_range_value(self):
        with pytest.raises(ConfigError, match="velocity_decay"):
            config_from_dict({"forces": {"velocity_decay": 2.0}})

    def test_negative_tick_interval(self):
        with pytest.raises(ConfigError, match="tick_interval"):
            config_from_dict({"simulation": {"tick_interval": -1}})

    def test_string_force_value(self):
        with pytest.raises(ConfigError, match="forces.link_distance"):
            config_from_dict({"forces": {"link_distance": "far"}})

    def test_string_tick_interval(self):
        with pytest.raises(ConfigError, match="simulation.tick_interval"):
            config_from_dict({"simulation": {"tick_interval": "fast"}})

    @pytest.mark.parametrize("seed", ["abc", 1.5, True])
    def test_invalid_seed(self, seed):
        with pytest.raises(ConfigError, match="simulation.seed"):
            config_from_dict({"simulation": {"seed": seed}})

    def test_fractional_cooling_ticks(self):
        with pytest.raises(ConfigError, match="forces.cooling_ticks"):
            config_from_dict({"forces": {"cooling_ticks": 299.5}})

    def test_values_converted_to_field_types(self):
        cfg = config_from_dict({
            "simulation": {"seed": 7.0, "tick_interval": 0},
            "forces": {"link_distance": 80, "cooling_ticks": 600.0},
        })
        assert cfg.seed == 7 and isinstance(cfg.seed, int)
        assert isinstance(cfg.tick_interval, float)
        assert isinstance(cfg.forces.link_distance, float)
        assert isinstance(cfg.forces.cooling_ticks, int)

    def test_alpha_target(self):
        cfg = config_from_dict({"forces": {"alpha_min": 0.01, "alpha_target": 0.005}})
        assert cfg.forces.alpha_target == 0.005

        with pytest.raises(ConfigError, match="alpha_target"):
            config_from_dict({"forces": {"alpha_target": 0.5}})

    def test_null_seed(self):
        assert config_from_dict({"simulation": {"seed": None}}).seed is None

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="unknown keys"):
            config_from_dict({"forces": {"gravity": 9.81}})

    def test_forces_not_accepted_inside_simulation(self):
        with pytest.raises(ConfigError):
            config_from_dict({"simulation": {"forces": {}}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError, match="mapping"):
            config_from_dict({"forces": [1, 2, 3]})

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ConfigError):
            config_from_dict(["not", "a", "mapping"])

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestLoadConfig:
    """Tests for reading YAML files."""

    def test_load(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text(
            "simulation:\n"
            "  tick_interval: 0.02\n"
            "  seed: 7\n"
            "forces:\n"
            "  charge_strength: -300.0\n"
            "  center_strength: 0.05\n"
        )

        cfg = load_config(path)

        assert cfg.tick_interval == 0.02
        assert cfg.seed == 7
        assert cfg.forces.charge_strength == -300.0
        assert cfg.forces.center_strength == 0.05

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_numeric_in_file(self, tmp_path):
        path = tmp_path / "bad_type.yaml"
        path.write_text("forces:\n  charge_strength: strong\n")
        with pytest.raises(ConfigError, match="charge_strength"):
            load_config(path)

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("forces:\n  alpha_min: 0\n")
        with pytest.raises(ConfigError, match="alpha_min"):
            load_config(path)
