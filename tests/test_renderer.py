"""Tests for the matplotlib renderer (offscreen)."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from galaxy_gen.instance import GalaxyInstance
from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.render.renderer_3d import Renderer3D
from galaxy_gen.render.scene import Camera, Scene


def make_renderer(**kwargs):
    return Renderer3D(figsize=(2, 2), dpi=50, interactive=False, **kwargs)


def test_capture_before_render():
    """Test that capturing requires a rendered frame."""
    renderer = make_renderer()
    with pytest.raises(RuntimeError):
        renderer.capture_frame()


def test_render_and_capture():
    """Test offscreen rendering of a small galaxy."""
    scene = Scene()
    instance = GalaxyInstance(scene)
    instance.regenerate(GalaxyParameters(count=200), np.random.default_rng(0))
    renderer = make_renderer()
    
    renderer.render(scene, Camera())
    frame = renderer.capture_frame()
    
    assert frame.shape == (100, 100, 3)
    assert frame.dtype == np.uint8
    assert renderer.is_open()
    assert len(renderer.scatters) == 1
    renderer.close()


def test_render_after_regeneration():
    """Test that only the installed galaxy is drawn."""
    scene = Scene()
    instance = GalaxyInstance(scene)
    renderer = make_renderer(fps_overlay=False)
    camera = Camera(extent=6.0)
    
    instance.regenerate(GalaxyParameters(count=100))
    renderer.render(scene, camera)
    instance.regenerate(GalaxyParameters(count=300))
    renderer.render(scene, camera)
    
    assert len(renderer.scatters) == 1
    assert renderer.ax.get_xlim() == pytest.approx((-6.0, 6.0), rel=0.05)
    renderer.close()


def test_render_empty_scene():
    """Test rendering before any galaxy exists."""
    renderer = make_renderer()
    renderer.render(Scene(), Camera())
    
    assert renderer.scatters == []
    assert renderer.capture_frame().shape == (100, 100, 3)
    renderer.close()


def test_decimation_limits_drawn_points():
    """Test that large clouds are strided down for drawing."""
    renderer = make_renderer(max_points=10)
    
    assert len(renderer._decimate(np.zeros((100, 3)))) <= 10
    assert len(renderer._decimate(np.zeros((5, 3)))) == 5


def test_close_resets_renderer():
    """Test renderer teardown."""
    renderer = make_renderer()
    renderer.render(Scene(), Camera())
    renderer.close()
    
    assert renderer.fig is None
    assert not renderer.initialized
