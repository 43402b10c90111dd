"""Tests for the Tk tweak panel (skipped without a display)."""

import pytest

tk = pytest.importorskip("tkinter")

import matplotlib
matplotlib.use("Agg")

from galaxy_gen.parameters import GalaxyParameters
from galaxy_gen.ui import main as ui_main


@pytest.fixture
def gui():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    app = ui_main.GalaxyGUI(root, params=GalaxyParameters(count=500), seed=0)
    yield app
    app.close()


def _status(app):
    return str(app.status_label.cget("foreground"))


def test_sliders_commit_on_mouse_and_keyboard_release(gui):
    """Test that every slider regenerates on button and key release."""
    for name, scale in gui.scales.items():
        assert scale.bind("<ButtonRelease-1>"), name
        assert scale.bind("<KeyRelease>"), name


def test_commit_regenerates_with_slider_value(gui):
    """Test that a slide followed by a commit installs a new galaxy."""
    generation = gui.instance.generation
    gui._on_slide("spin", "2.5")
    assert gui.instance.generation == generation

    gui._on_commit("spin")
    assert gui.instance.generation == generation + 1
    assert gui.instance.params.spin == 2.5


def test_status_recovers_after_rejected_slide(gui):
    """Test that a successful commit clears an earlier slider error."""
    gui._on_slide("spin", "abc")
    assert _status(gui) == "red"

    gui._on_commit("spin")
    assert _status(gui) == "green"


def test_rejected_regeneration_keeps_galaxy(gui, monkeypatch):
    """Test that invalid parameters leave the installed galaxy and flag the status."""
    shown = []
    monkeypatch.setattr(ui_main.messagebox, "showerror", lambda *args: shown.append(args))
    points = gui.instance.points

    gui.regenerate(GalaxyParameters(count=500, branches=0))

    assert gui.instance.points is points
    assert _status(gui) == "red"
    assert len(shown) == 1
