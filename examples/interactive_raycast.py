#!/usr/bin/env python3
"""Interactive ray-circle intersection demo.

This script opens a window showing a light that emits a fan of rays
toward a fixed circular obstacle. Rays blocked by the circle stop at its
boundary; the rest run to the edge of the scene at a lower alpha.

Usage:
    python -m examples.interactive_raycast [options]

Options:
    --rays N            Number of rays in the fan (default: 360)
    --width WIDTH       Window width in pixels (default: 800)
    --height HEIGHT     Window height in pixels (default: 600)
    --cpu               Force the Taichi CPU backend

Controls:
    - Drag the light (yellow circle) with the left mouse button
    - Escape or closing the window exits
"""

from __future__ import annotations

import argparse
import platform
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
        description="Interactive ray-circle intersection demo.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=360,
        help="Number of rays in the fan (default: 360)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Window width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Window height in pixels (default: 600)",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the Taichi CPU backend",
    )
    return parser.parse_args()


def initialize_taichi(force_cpu: bool = False) -> str:
    """Initialize Taichi with the best available backend.

    On macOS, prefers Metal. Falls back to CPU if GPU is unavailable.

    Returns:
        Name of the backend being used.
    """
    if not force_cpu:
        if platform.system() == "Darwin":
            try:
                ti.init(arch=ti.metal)
                return "Metal (GPU)"
            except Exception:
                pass

        try:
            ti.init(arch=ti.gpu)
            return "GPU"
        except Exception:
            pass

    ti.init(arch=ti.cpu)
    return "CPU"


def main() -> int:
    """Main entry point for the interactive demo.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    # Initialize Taichi first (before importing modules that use ti.kernel)
    backend = initialize_taichi(force_cpu=args.cpu)
    print(f"Taichi backend: {backend}")

    # Import after Taichi initialization
    from src.raycast2d.preview.window import InteractiveWindow
    from src.raycast2d.scene.loop import SceneLoop
    from src.raycast2d.scene.state import ObstacleParams, SceneParams, SceneState

    center = (args.width / 2.0, args.height / 2.0)
    params = SceneParams(
        width=args.width,
        height=args.height,
        num_rays=args.rays,
        obstacle=ObstacleParams(center=center),
        default_light=center,
    )
    try:
        state = SceneState.from_params(params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not InteractiveWindow.is_display_available():
        print("Error: No display available. Cannot open the window.", file=sys.stderr)
        print("Use examples/render_snapshot.py for headless rendering.", file=sys.stderr)
        return 1

    print(f"Opening window ({params.width}x{params.height}, {params.num_rays} rays)...")
    print("  - Drag the light with the left mouse button")
    print("  - Press Escape or close the window to exit")
    print()

    try:
        with InteractiveWindow(params.width, params.height) as window:
            loop = SceneLoop(state, window)
            frames = loop.run(window.poll_events)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 0

    print(f"Window closed after {frames} frames.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
