#!/usr/bin/env python3
"""Render a single frame of the ray-circle demo to a PNG file.

Runs without a display: the frame is rasterized into a Taichi framebuffer
and written with Pillow.

Usage:
    python -m examples.render_snapshot [options]

Options:
    --light X Y         Light position in pixels (default: 400 300)
    --rays N            Number of rays in the fan (default: 360)
    --output OUTPUT     Output file path (default: raycast.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_snapshot --light 150 120 --output corner.png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render one frame of the ray-circle demo to PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--light",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=(400.0, 300.0),
        help="Light position in pixels (default: 400 300)",
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=360,
        help="Number of rays in the fan (default: 360)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="raycast.png",
        help="Output file path (default: raycast.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_snapshot(
    light: tuple[float, float] = (400.0, 300.0),
    num_rays: int = 360,
    output_path: str = "raycast.png",
    quiet: bool = False,
) -> Path:
    """Render one frame with the light at the given position and save it.

    Args:
        light: Light position in pixels.
        num_rays: Number of rays in the fan.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raycast2d.preview.export import save_png
    from src.raycast2d.preview.surface import FrameBuffer
    from src.raycast2d.scene.loop import SceneLoop
    from src.raycast2d.scene.state import SceneParams, SceneState

    params = SceneParams(num_rays=num_rays, default_light=light)
    state = SceneState.from_params(params)
    framebuffer = FrameBuffer(params.width, params.height)

    loop = SceneLoop(state, framebuffer)
    loop.step()

    fan = loop.last_fan
    if not quiet and fan is not None:
        print(f"Light at ({light[0]:.1f}, {light[1]:.1f}): "
              f"{fan.hit_count}/{len(fan)} rays hit the obstacle")

    output_file = Path(output_path)
    save_png(framebuffer, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_snapshot(
            light=(args.light[0], args.light[1]),
            num_rays=args.rays,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
