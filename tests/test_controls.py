"""Tests for the control surface."""

import numpy as np
import pytest
from galaxy_gen.controls import COMMIT, CONTROLS, CONTROLS_BY_NAME, IMMEDIATE, ControlPanel
from galaxy_gen.errors import ConfigurationError
from galaxy_gen.instance import GalaxyInstance
from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.render.scene import Scene


def make_panel(**changes):
    calls = []
    panel = ControlPanel(GalaxyParameters(count=1000).replace(**changes), calls.append)
    return panel, calls


def test_declared_bounds():
    """Test the declared ranges of every control."""
    bounds = {
        spec.name: (spec.minimum, spec.maximum, spec.step, spec.trigger)
        for spec in CONTROLS
    }
    assert bounds == {
        "count": (100, 1000000, 100, COMMIT),
        "size": (0.01, 0.1, 0.01, COMMIT),
        "radius": (0.01, 20, 0.01, COMMIT),
        "branches": (3, 20, 1, COMMIT),
        "spin": (-5, 5, 0.001, COMMIT),
        "randomness": (-2, 2, 0.001, COMMIT),
        "randomness_power": (1, 10, 0.001, COMMIT),
        "inside_color": (None, None, None, IMMEDIATE),
        "outside_color": (None, None, None, IMMEDIATE),
    }


@pytest.mark.parametrize("name, value, expected", [
    ("count", 5, 100),
    ("count", 2000000, 1000000),
    ("count", 1234, 1200),
    ("branches", 7.4, 7),
    ("branches", 1, 3),
    ("size", 0.034, 0.03),
    ("spin", 0.12345, 0.123),
    ("spin", -9.0, -5.0),
    ("randomness_power", 0.2, 1.0),
])
def test_snap_and_clamp(name, value, expected):
    """Test clamping to bounds and rounding onto the step grid."""
    snapped = CONTROLS_BY_NAME[name].snap(value)
    assert snapped == pytest.approx(expected)
    if CONTROLS_BY_NAME[name].integer:
        assert isinstance(snapped, int)


def test_slider_changes_do_not_regenerate():
    """Test that dragging a numeric control only updates the state."""
    panel, calls = make_panel()
    
    panel.set_value("count", 5000)
    panel.set_value("count", 6000)
    
    assert calls == []
    assert panel.params.count == 6000


def test_commit_regenerates_once():
    """Test that finishing an interaction regenerates with the latest snapshot."""
    panel, calls = make_panel()
    
    panel.set_value("radius", 8.0)
    panel.set_value("spin", 2.5)
    panel.finish_change("spin")
    
    assert len(calls) == 1
    assert calls[0] is panel.params
    assert calls[0].radius == 8.0
    assert calls[0].spin == 2.5


def test_color_change_regenerates_immediately():
    """Test that color controls are not debounced."""
    panel, calls = make_panel()
    
    panel.set_color("inside_color", "#00ff00")
    panel.set_color("outside_color", "#0000ff")
    
    assert len(calls) == 2
    assert calls[0].inside_rgb == (0.0, 1.0, 0.0)
    assert calls[1].outside_rgb == (0.0, 0.0, 1.0)


def test_snapshots_are_independent():
    """Test that a snapshot handed out is not affected by later edits."""
    panel, calls = make_panel()
    panel.set_value("branches", 5)
    panel.finish_change("branches")
    
    panel.set_value("branches", 9)
    
    assert calls[0].branches == 5
    assert panel.params.branches == 9


def test_invalid_control_usage():
    """Test errors for unknown names and mismatched control kinds."""
    panel, calls = make_panel()
    
    with pytest.raises(KeyError):
        panel.set_value("arms", 4)
    with pytest.raises(ConfigurationError):
        panel.set_value("count", "many")
    with pytest.raises(ConfigurationError):
        panel.set_value("inside_color", 0.5)
    with pytest.raises(ConfigurationError):
        panel.set_color("spin", "#ffffff")
    with pytest.raises(ConfigurationError):
        panel.set_color("inside_color", "not-a-color")
    
    assert calls == []


def test_panel_drives_regeneration():
    """Test the panel wired to a live galaxy instance."""
    scene = Scene()
    instance = GalaxyInstance(scene)
    rng = np.random.default_rng(5)
    panel = ControlPanel(GalaxyParameters(count=1000), lambda p: instance.regenerate(p, rng))
    
    panel.set_value("count", 500)
    assert instance.points is None
    
    panel.finish_change("count")
    assert instance.buffers.count == 500
    
    panel.set_color("outside_color", "#ffffff")
    assert instance.generation == 2
    assert len(scene) == 1
