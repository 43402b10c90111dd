"""CLI main entry point."""

import argparse
import logging
import sys
import time
from typing import List, Optional

from galaxy_gen.animation import AnimationDriver, Clock, FrameContext
from galaxy_gen.errors import ConfigurationError
from galaxy_gen.instance import GalaxyInstance
from galaxy_gen.io.buffers_io import save_buffers
from galaxy_gen.io.gif_exporter import GIFExporter
from galaxy_gen.render.renderer_3d import Renderer3D
from galaxy_gen.render.scene import Camera, Scene
from galaxy_gen.utils.config import Config, load_config, save_config
from galaxy_gen.utils.logging_config import setup_logging
from galaxy_gen.utils.reproducibility import make_rng, set_all_seeds

logger = logging.getLogger(__name__)

PARAMETER_FIELDS = (
    'count', 'size', 'radius', 'branches', 'spin', 'randomness',
    'randomness_power', 'inside_color', 'outside_color',
)


def build_config(args) -> Config:
    """Merge the config file (if any) with command-line overrides."""
    config = load_config(args.config) if args.config else Config()

    overrides = {
        name: getattr(args, name)
        for name in PARAMETER_FIELDS
        if getattr(args, name) is not None
    }
    if overrides:
        config.parameters = config.parameters.replace(**overrides)
    else:
        config.parameters.validate()

    for name in ('seed', 'fps', 'frames', 'elevation', 'azimuth', 'log_level'):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    if args.output is not None:
        config.output_path = args.output
    if args.max_points is not None:
        config.max_points = args.max_points if args.max_points > 0 else None
    return config.validate()


def summarize(instance: GalaxyInstance, elapsed_ms: float):
    """Print a short description of the generated galaxy."""
    buffers = instance.buffers
    params = instance.params
    print(f"Generated galaxy: {buffers.count} particles, {params.branches} branches, "
          f"radius {params.radius}, spin {params.spin}")
    if buffers.count > 0:
        lo = buffers.positions.min(axis=0)
        hi = buffers.positions.max(axis=0)
        print(f"Extent: x [{lo[0]:.3f}, {hi[0]:.3f}]  y [{lo[1]:.3f}, {hi[1]:.3f}]  "
              f"z [{lo[2]:.3f}, {hi[2]:.3f}]")
        mean_color = buffers.colors.mean(axis=0)
        print(f"Mean color: ({mean_color[0]:.3f}, {mean_color[1]:.3f}, {mean_color[2]:.3f})")
    print(f"Generation time: {elapsed_ms:.1f} ms ({buffers.nbytes / 1e6:.2f} MB)")


def run(args) -> int:
    """Generate, then optionally animate, export and save."""
    config = build_config(args)
    if args.log_level is None:
        setup_logging(config.log_level, args.log_file)

    if config.seed is not None:
        logger.info(f"Using seed {config.seed}")
        set_all_seeds(config.seed)
    rng = make_rng(config.seed)

    scene = Scene()
    instance = GalaxyInstance(scene)

    start = time.perf_counter()
    instance.regenerate(config.parameters, rng)
    summarize(instance, (time.perf_counter() - start) * 1000.0)

    if args.save_buffers:
        save_buffers(instance.buffers, args.save_buffers, metadata=config.parameters.to_dict())
        print(f"Buffers saved to {args.save_buffers}")

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Config saved to {args.save_config}")

    if args.render or args.export_gif:
        renderer = Renderer3D(interactive=args.render, max_points=config.max_points)
        camera = Camera(elevation=config.elevation, azimuth=config.azimuth)
        context = FrameContext(renderer, scene, camera, instance, Clock())
        driver = AnimationDriver(context, fps=config.fps)

        gif_exporter = None
        frames = config.frames
        if args.export_gif:
            gif_exporter = GIFExporter(config.output_path + ".gif", fps=config.fps)
            driver.on_frame = lambda ctx: gif_exporter.add_frame(ctx.renderer.capture_frame())
            if frames is None:
                frames = config.fps * 5

        try:
            driver.run(frames)
        finally:
            renderer.close()

        if gif_exporter:
            print(f"Exporting GIF to {gif_exporter.output_path}...")
            gif_exporter.export()

    instance.dispose()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Galaxy Generator - procedural spiral galaxy point clouds")

    parser.add_argument('--config', type=str, default=None,
                       help='Load settings from a .json or .yaml config file')

    # Generation parameters (override the config file)
    parser.add_argument('--count', type=int, default=None,
                       help='Number of particles (default: 100000)')
    parser.add_argument('--size', type=float, default=None,
                       help='Rendered point size (default: 0.01)')
    parser.add_argument('--radius', type=float, default=None,
                       help='Galaxy radius (default: 5)')
    parser.add_argument('--branches', type=int, default=None,
                       help='Number of spiral arms (default: 3)')
    parser.add_argument('--spin', type=float, default=None,
                       help='Twist in radians per unit radius (default: 1)')
    parser.add_argument('--randomness', type=float, default=None,
                       help='Randomness control value; does not change the generated positions (default: 0.2)')
    parser.add_argument('--randomness-power', type=float, default=None,
                       help='Exponent shaping the jitter; higher keeps particles closer to the arms (default: 3)')
    parser.add_argument('--inside-color', type=str, default=None,
                       help='Color at the center, any matplotlib color (default: #ff6030)')
    parser.add_argument('--outside-color', type=str, default=None,
                       help='Color at the rim, any matplotlib color (default: #1b3984)')

    # Rendering
    parser.add_argument('--render', action='store_true',
                       help='Open an animated 3D window')
    parser.add_argument('--frames', type=int, default=None,
                       help='Number of frames to render (default: until the window is closed)')
    parser.add_argument('--fps', type=int, default=None,
                       help='Target frames per second (default: 30)')
    parser.add_argument('--elevation', type=float, default=None,
                       help='Camera elevation in degrees')
    parser.add_argument('--azimuth', type=float, default=None,
                       help='Camera azimuth in degrees')
    parser.add_argument('--max-points', type=int, default=None,
                       help='Draw at most this many points per frame, 0 for all (default: 20000)')

    # Export
    parser.add_argument('--export-gif', action='store_true',
                       help='Export the rotating galaxy to an animated GIF')
    parser.add_argument('--output', type=str, default=None,
                       help='Output file base name (default: galaxy)')
    parser.add_argument('--save-buffers', type=str, default=None,
                       help='Save positions and colors to a .npz or .json file')
    parser.add_argument('--save-config', type=str, default=None,
                       help='Write the effective configuration to a .json or .yaml file')

    # Reproducibility
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed for reproducibility')

    # Logging
    parser.add_argument('--log-level', type=str, default=None,
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level (default: INFO)')
    parser.add_argument('--log-file', type=str, default=None,
                       help='Also write logs to this file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or "INFO", args.log_file)

    try:
        return run(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
