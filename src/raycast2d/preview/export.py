"""PNG export of rendered frames.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.raycast2d.preview.export import save_png
    >>> from src.raycast2d.preview.surface import FrameBuffer
    >>>
    >>> fb = FrameBuffer(800, 600)
    >>> fb.clear((0.1, 0.1, 0.1))
    >>> save_png(fb, "frame.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.raycast2d.preview.surface import FrameBuffer


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to 8-bit, rounding to nearest.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    clipped = np.clip(image, 0.0, 1.0)
    return np.round(clipped * 255.0).astype(np.uint8)


def save_png(framebuffer: FrameBuffer, filepath: str) -> None:
    """Save the framebuffer contents as an 8-bit RGB PNG.

    Pending lines are rasterized first.

    Args:
        framebuffer: The FrameBuffer to save.
        filepath: Output file path (should end in .png).
    """
    image_uint8 = image_to_uint8(framebuffer.to_numpy())
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
