"""Preview module for drawing and presenting frames.

Components:
    surface: RenderSurface interface and the Taichi FrameBuffer
    window: Taichi GGUI window with pointer input
    export: PNG export via Pillow

Example:
    >>> from src.raycast2d.preview import FrameBuffer, save_png
    >>> fb = FrameBuffer(800, 600)
    >>> fb.clear((0.1, 0.1, 0.1))
    >>> save_png(fb, "frame.png")
"""

from src.raycast2d.preview.surface import (
    MAX_LINES,
    BlendMode,
    FrameBuffer,
    RenderSurface,
    draw_circle_outline,
)
from src.raycast2d.preview.export import image_to_uint8, save_png
from src.raycast2d.preview.window import InteractiveWindow, cursor_to_pixels

__all__ = [
    # Surfaces
    "RenderSurface",
    "FrameBuffer",
    "InteractiveWindow",
    "BlendMode",
    "MAX_LINES",
    "draw_circle_outline",
    "cursor_to_pixels",
    # Export functions
    "save_png",
    "image_to_uint8",
]
