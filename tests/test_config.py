"""Tests for configuration files and logging setup."""

import logging
import os
import tempfile
import pytest
from galaxy_gen.errors import ConfigurationError
from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.utils.config import Config, load_config, save_config
from galaxy_gen.utils.logging_config import setup_logging


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_config_round_trip(suffix):
    """Test saving and loading JSON and YAML configs."""
    config = Config(
        parameters=GalaxyParameters(count=2500, branches=6, outside_color="white"),
        seed=7,
        fps=24,
    )
    
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "galaxy" + suffix)
        save_config(config, path)
        loaded = load_config(path)
    
    assert loaded.parameters.count == 2500
    assert loaded.parameters.branches == 6
    assert loaded.parameters.outside_rgb == (1.0, 1.0, 1.0)
    assert loaded.seed == 7
    assert loaded.fps == 24


def test_config_parameters_from_dict():
    """Test that nested parameter dicts become validated snapshots."""
    config = Config(parameters={"count": 10, "spin": -1.5})
    
    assert isinstance(config.parameters, GalaxyParameters)
    assert config.parameters.spin == -1.5


def _write(tmp, name, text):
    path = os.path.join(tmp, name)
    with open(path, 'w') as f:
        f.write(text)
    return path


def test_load_config_errors():
    """Test rejection of malformed or invalid config files."""
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp, "bad.json", "{not json"))
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp, "unknown.yaml", "colour: red\n"))
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp, "branches.yaml", "parameters:\n  branches: 0\n"))
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp, "list.yaml", "- 1\n- 2\n"))


def test_empty_yaml_gives_defaults():
    """Test that an empty file means all defaults."""
    with tempfile.TemporaryDirectory() as tmp:
        config = load_config(_write(tmp, "empty.yml", ""))
    
    assert config.parameters == GalaxyParameters()


def test_setup_logging_levels():
    """Test logger configuration by name and number."""
    setup_logging("debug")
    logger = logging.getLogger("galaxy_gen")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    
    setup_logging(logging.WARNING)
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    
    with pytest.raises(ValueError):
        setup_logging("chatty")
    
    logger.handlers.clear()


@pytest.mark.parametrize("changes", [
    {"fps": 0},
    {"fps": "fast"},
    {"frames": -1},
    {"frames": 2.5},
    {"max_points": 0},
    {"elevation": float("nan")},
    {"seed": "abc"},
    {"output_path": ""},
    {"log_level": "LOUD"},
    {"parameters": None},
])
def test_config_rejects_invalid_settings(changes):
    """Test validation of the non-generation settings."""
    with pytest.raises(ConfigurationError):
        Config(**changes)


def test_load_config_missing_file():
    """Test that an unreadable path is a configuration error."""
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(ConfigurationError):
            load_config(os.path.join(tmp, "nowhere.json"))
