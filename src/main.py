"""Command-line entry point: trace an animated metaball scene and render it."""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from contours.engine import ContourEngine
from domain.profiles import load_profile
from render.contour_renderer import (
    render_frame,
    render_layers,
    save_animation,
    save_image,
)
from scene.generator import make_rng, trace_layers
from shared.constants import APP_NAME, DEFAULT_PROFILE
from shared.diagnostics import log_comprehensive_diagnostics, log_memory_usage

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False) -> Path:
    """Configure logging to stdout and a per-user log file.

    Returns:
        Path of the log file.
    """
    state_base = Path(os.getenv('XDG_STATE_HOME') or Path.home() / '.local' / 'state')
    log_dir = state_base / APP_NAME / 'log'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'metaballs.log'

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(str(log_file), encoding='utf-8'),
        ],
    )
    return log_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Metaballs - marching-squares contours of an animated metaball field'
    )
    parser.add_argument(
        '--profile',
        default=DEFAULT_PROFILE,
        help='Profile name or path to a TOML file',
    )
    parser.add_argument('--output', help='Output image path (overrides the profile)')
    parser.add_argument('--seed', type=int, help='RNG seed (overrides the profile)')
    parser.add_argument(
        '--animate',
        action='store_true',
        help='Write an animated GIF of per-frame outlines instead of a layered image',
    )
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser


def run(args: argparse.Namespace) -> Path:
    settings = load_profile(args.profile)
    overrides = {}
    if args.seed is not None:
        overrides['seed'] = args.seed
    if args.output:
        overrides['output_path'] = args.output
    if overrides:
        settings = settings.model_copy(update=overrides)

    engine = ContourEngine(
        unit=settings.unit,
        width=settings.grid_width,
        height=settings.grid_height,
        threshold=settings.threshold,
    )

    started = time.monotonic()
    layers = trace_layers(engine, settings, make_rng(settings), show_progress=True)
    logger.info('Tracing took %.2fs', time.monotonic() - started)
    log_memory_usage('after tracing')

    if args.animate:
        frames = [render_frame(contours, settings) for contours in layers]
        out = Path(settings.output_path).with_suffix('.gif')
        return save_animation(frames, out)
    return save_image(render_layers(layers, settings), settings.output_path)


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    logger.info('Starting %s', APP_NAME)
    log_comprehensive_diagnostics('startup', level=logging.DEBUG)

    try:
        out = run(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error('%s', e)
        return 1

    logger.info('Done: %s', out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
