"""Rendering surface interface and a Taichi framebuffer implementation.

The scene loop only needs four operations from whatever it draws on:
clear, blend mode selection, line drawing and presentation. RenderSurface
names that contract; FrameBuffer implements it on a Taichi field so the
same frame can be shown in a GGUI window or written to a PNG.

Lines are queued on the host and rasterized by one kernel when the frame
is flushed. The kernel walks the queue in submission order so that alpha
blending composes exactly as if every line had been drawn immediately.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycast2d.preview.surface import FrameBuffer
    >>> fb = FrameBuffer(64, 48)
    >>> fb.clear((0.1, 0.1, 0.1))
    >>> fb.set_blend_mode("blend")
    >>> fb.draw_line(0, 10, 63, 10, (1.0, 1.0, 0.0, 0.5))
    >>> image = fb.to_numpy()  # (48, 64, 3), row 0 at the top
"""

import math
from typing import Literal, Protocol

import numpy as np
import numpy.typing as npt
import taichi as ti

BlendMode = Literal["none", "blend"]

# Maximum number of lines that can be queued between flushes
MAX_LINES = 4096


class RenderSurface(Protocol):
    """What the scene loop draws on."""

    def clear(self, color: tuple[float, ...]) -> None: ...

    def set_blend_mode(self, mode: BlendMode) -> None: ...

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: tuple[float, float, float, float],
    ) -> None: ...

    def present(self) -> None: ...


def draw_circle_outline(
    surface: RenderSurface,
    center: tuple[float, float],
    radius: float,
    color: tuple[float, float, float, float],
    segments: int = 32,
) -> None:
    """Draw a circle as a closed polyline of straight segments."""
    cx, cy = center
    for i in range(segments):
        angle1 = 2.0 * math.pi * i / segments
        angle2 = 2.0 * math.pi * (i + 1) / segments
        surface.draw_line(
            cx + radius * math.cos(angle1),
            cy + radius * math.sin(angle1),
            cx + radius * math.cos(angle2),
            cy + radius * math.sin(angle2),
            color,
        )


@ti.data_oriented
class FrameBuffer:
    """An RGB float framebuffer with alpha-blended line rasterization.

    Pixel (x, y) uses screen conventions: x grows to the right and y grows
    downward, so it matches pointer coordinates directly.

    Attributes:
        width: Framebuffer width in pixels.
        height: Framebuffer height in pixels.
        pixels: Taichi field of shape (width, height) holding RGB in [0, 1].
        blend_mode: Current blend mode for subsequently drawn lines.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the framebuffer and the line queue.

        Args:
            width: Width in pixels.
            height: Height in pixels.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.blend_mode: BlendMode = "none"

        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

        # Line queue: host staging arrays mirrored into fields at flush time
        self._line_coords = ti.Vector.field(4, dtype=ti.f32, shape=MAX_LINES)
        self._line_colors = ti.Vector.field(4, dtype=ti.f32, shape=MAX_LINES)
        self._line_blend = ti.field(dtype=ti.i32, shape=MAX_LINES)
        self._pending_coords = np.zeros((MAX_LINES, 4), dtype=np.float32)
        self._pending_colors = np.zeros((MAX_LINES, 4), dtype=np.float32)
        self._pending_blend = np.zeros(MAX_LINES, dtype=np.int32)
        self._num_pending = 0

    @property
    def num_pending(self) -> int:
        """Number of lines queued since the last flush."""
        return self._num_pending

    @ti.kernel
    def _fill(self, r: ti.f32, g: ti.f32, b: ti.f32):
        for i, j in self.pixels:
            self.pixels[i, j] = ti.Vector([r, g, b])

    @ti.kernel
    def _rasterize(self, count: ti.i32):
        # Lines overlap, so they must be composited in order. The whole
        # queue runs on a single thread; on GPU backends this kernel costs
        # about as much as on the CPU backend.
        ti.loop_config(serialize=True)
        for k in range(count):
            coords = self._line_coords[k]
            color = self._line_colors[k]
            rgb = ti.Vector([color[0], color[1], color[2]])
            alpha = color[3]
            if self._line_blend[k] == 0:
                alpha = 1.0

            # Endpoints are truncated to integer pixels before stepping
            x0 = ti.cast(coords[0], ti.i32)
            y0 = ti.cast(coords[1], ti.i32)
            dx = ti.cast(coords[2], ti.i32) - x0
            dy = ti.cast(coords[3], ti.i32) - y0
            steps = ti.max(ti.abs(dx), ti.abs(dy))

            for s in range(steps + 1):
                px = x0
                py = y0
                if steps > 0:
                    f = ti.cast(s, ti.f32) / ti.cast(steps, ti.f32)
                    px = x0 + ti.cast(ti.floor(dx * f + 0.5), ti.i32)
                    py = y0 + ti.cast(ti.floor(dy * f + 0.5), ti.i32)
                if px >= 0 and px < self.width and py >= 0 and py < self.height:
                    self.pixels[px, py] = rgb * alpha + self.pixels[px, py] * (1.0 - alpha)

    def clear(self, color: tuple[float, ...]) -> None:
        """Fill the whole framebuffer with an RGB color.

        Lines queued before the clear are discarded. A fourth (alpha)
        component is ignored.
        """
        self._num_pending = 0
        self._fill(float(color[0]), float(color[1]), float(color[2]))

    def set_blend_mode(self, mode: BlendMode) -> None:
        """Select how subsequently drawn lines combine with the framebuffer.

        Args:
            mode: "blend" for src * alpha + dst * (1 - alpha), "none" to
                overwrite pixels and ignore alpha.

        Raises:
            ValueError: If mode is not a known blend mode.
        """
        if mode not in ("none", "blend"):
            raise ValueError(f"Unknown blend mode: {mode}")
        self.blend_mode = mode

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: tuple[float, float, float, float],
    ) -> None:
        """Queue a line segment for rasterization.

        Args:
            x1, y1: Start point in pixels.
            x2, y2: End point in pixels. Parts outside the framebuffer are
                clipped.
            color: RGBA color with components in [0, 1].

        Raises:
            RuntimeError: If more than MAX_LINES lines are queued.
        """
        idx = self._num_pending
        if idx >= MAX_LINES:
            raise RuntimeError(f"Maximum number of queued lines ({MAX_LINES}) exceeded")
        self._pending_coords[idx] = (x1, y1, x2, y2)
        self._pending_colors[idx] = color
        self._pending_blend[idx] = 1 if self.blend_mode == "blend" else 0
        self._num_pending = idx + 1

    def flush(self) -> None:
        """Rasterize every queued line into the framebuffer."""
        count = self._num_pending
        if count == 0:
            return
        self._line_coords.from_numpy(self._pending_coords)
        self._line_colors.from_numpy(self._pending_colors)
        self._line_blend.from_numpy(self._pending_blend)
        self._rasterize(count)
        self._num_pending = 0

    def present(self) -> None:
        """Finish the frame. Without a window this only flushes the queue."""
        self.flush()

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the framebuffer as an (H, W, 3) image with row 0 at the top."""
        self.flush()
        image = self.pixels.to_numpy()
        return np.ascontiguousarray(np.transpose(image, (1, 0, 2)))
