#!/usr/bin/env python3
"""
PrismTrace - A Python Ray Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from prismtrace.errors import SceneConfigError
from prismtrace.renderer import Renderer, RenderSettings
from prismtrace.image import save_pixels
from prismtrace.scene_parser import load_scene
from prismtrace.scenes import SCENES, create_scene, default_camera


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='PrismTrace - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --width 1920 --height 1080 --supersample 16 --output hd_render.png
  python main.py --scene scenes/demo.yaml --seed 7 --output demo.png
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 800)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 600)')
    parser.add_argument('--supersample', type=int, default=None, help='Samples per pixel (default: 4)')
    parser.add_argument('--depth', type=int, default=None, help='Max recursion depth (default: 10)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for sample jitter')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='demo',
                        help=f'Built-in scene ({", ".join(SCENES)}) or a YAML/JSON scene file (default: demo)')
    parser.add_argument('--quiet', action='store_true', help='Only print errors')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def load(args: argparse.Namespace):
    """Build (scene, camera, settings) from the command line."""
    if args.scene in SCENES:
        scene = create_scene(args.scene)
        settings = RenderSettings()
        camera = None
    else:
        scene, camera, settings = load_scene(args.scene)

    overrides = {
        'width': args.width,
        'height': args.height,
        'supersample': args.supersample,
        'max_depth': args.depth,
        'num_threads': args.threads,
        'seed': args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    if camera is None:
        camera = default_camera(settings.aspect_ratio)
    else:
        camera = camera.with_aspect_ratio(settings.aspect_ratio)

    return scene, camera, settings


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    def say(*parts, **kwargs):
        if not args.quiet:
            print(*parts, **kwargs)

    try:
        scene, camera, settings = load(args)
    except SceneConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Print header
    say("=" * 60)
    say("PrismTrace Ray Tracer")
    say("=" * 60)

    say(f"\nRender Settings:")
    say(f"  Resolution: {settings.width}x{settings.height}")
    say(f"  Supersample: {settings.supersample}")
    say(f"  Max Depth: {settings.max_depth}")
    say(f"  Threads: {settings.num_threads}")
    say(f"\nScene: {args.scene}")
    say(f"  Primitives in scene: {len(scene)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            say(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    say("\nRendering...")
    result = renderer.render(scene, camera)
    stats = result.stats

    say(f"\nTime elapsed: {stats.duration:.2f} s")
    say(f"Fired {stats.rays_fired} rays")
    say(f"Time per pixel: {stats.time_per_pixel * 1e6:.1f} µs")
    say(f"Time per ray: {stats.time_per_ray * 1e6:.1f} µs")
    say(f"Rays per pixel: {stats.rays_per_pixel:.2f}")

    say(f"\nSaving to: {args.output}")
    save_pixels(result.pixels, result.width, result.height, result.bytes_per_row, Path(args.output))

    say("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
