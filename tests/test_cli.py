"""Tests for the command-line interface."""

import logging
import os
import tempfile
import pytest
from galaxy_gen.cli.main import main
from galaxy_gen.io.buffers_io import load_buffers
from galaxy_gen.utils.config import load_config


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("galaxy_gen").handlers.clear()


def test_generate_and_save(capsys):
    """Test a plain generation run with buffer and config output."""
    with tempfile.TemporaryDirectory() as tmp:
        buffers_path = os.path.join(tmp, "galaxy.npz")
        config_path = os.path.join(tmp, "galaxy.yaml")
        
        code = main([
            "--count", "500", "--branches", "4", "--seed", "1",
            "--save-buffers", buffers_path, "--save-config", config_path,
            "--log-level", "WARNING",
        ])
        
        assert code == 0
        buffers, metadata = load_buffers(buffers_path)
        assert buffers.count == 500
        assert metadata["branches"] == 4
        assert load_config(config_path).parameters.count == 500
    
    out = capsys.readouterr().out
    assert "500 particles" in out


def test_invalid_parameters_exit_code(capsys):
    """Test that configuration errors are reported, not raised."""
    code = main(["--count", "10", "--branches", "0", "--log-level", "ERROR"])
    
    assert code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_config_file_with_overrides():
    """Test that command-line values override the config file."""
    with tempfile.TemporaryDirectory() as tmp:
        config_path = os.path.join(tmp, "in.json")
        with open(config_path, 'w') as f:
            f.write('{"parameters": {"count": 300, "radius": 2.0}, "seed": 3}')
        out_path = os.path.join(tmp, "out.json")
        
        code = main(["--config", config_path, "--radius", "4", "--save-config", out_path,
                     "--log-level", "ERROR"])
        
        assert code == 0
        effective = load_config(out_path)
        assert effective.parameters.count == 300
        assert effective.parameters.radius == 4.0
        assert effective.seed == 3


def test_export_gif():
    """Test offscreen GIF export of the rotating galaxy."""
    pytest.importorskip("imageio")
    with tempfile.TemporaryDirectory() as tmp:
        base = os.path.join(tmp, "spin")
        code = main(["--count", "200", "--export-gif", "--frames", "2", "--fps", "50",
                     "--output", base, "--log-level", "ERROR"])
        
        assert code == 0
        assert os.path.getsize(base + ".gif") > 0


def test_bad_config_file_exit_code(capsys):
    """Test that invalid or missing config files exit with code 2."""
    with tempfile.TemporaryDirectory() as tmp:
        loud_path = os.path.join(tmp, "loud.json")
        with open(loud_path, 'w') as f:
            f.write('{"log_level": "LOUD"}')
        fps_path = os.path.join(tmp, "fps.yaml")
        with open(fps_path, 'w') as f:
            f.write('fps: fast\n')
        
        assert main(["--config", loud_path, "--count", "100"]) == 2
        assert main(["--config", fps_path, "--count", "100"]) == 2
        assert main(["--config", os.path.join(tmp, "missing.yaml")]) == 2
    
    err = capsys.readouterr().err
    assert "LOUD" in err
    assert "missing.yaml" in err


def test_invalid_render_options_exit_code():
    """Test that out-of-range command-line render settings are rejected."""
    assert main(["--count", "100", "--fps", "0", "--log-level", "ERROR"]) == 2
    assert main(["--count", "100", "--frames", "-1", "--log-level", "ERROR"]) == 2
