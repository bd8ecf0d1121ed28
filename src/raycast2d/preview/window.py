"""Interactive window using Taichi GGUI.

InteractiveWindow is a RenderSurface backed by a FrameBuffer whose
contents are presented through ti.ui.Window. It also turns GGUI input
into the scene's pointer events.

GGUI reports the cursor in normalized coordinates with the origin at the
bottom-left and has no motion event, so the window converts cursor
positions to pixels (y down) and emits a PointerMove whenever the cursor
position changed since the previous poll.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from src.raycast2d.preview.window import InteractiveWindow
    >>>
    >>> with InteractiveWindow(800, 600) as window:
    ...     while window.is_running():
    ...         events = window.poll_events()
    ...         window.clear((0.1, 0.1, 0.1))
    ...         window.present()
"""

import os
import sys
from typing import Any, Optional

import taichi as ti

from src.raycast2d.preview.surface import BlendMode, FrameBuffer
from src.raycast2d.scene.state import (
    InputEvent,
    PointerDown,
    PointerMove,
    PointerUp,
    WindowClose,
)

# Lazy kernel holder - kernel is created on first use after Taichi is initialized
_flip_copy_kernel: Any = None


def _get_flip_copy_kernel() -> Any:
    """Get or create the kernel that copies a y-down field into a y-up one.

    The kernel is created lazily to ensure Taichi is initialized first.
    """
    global _flip_copy_kernel
    if _flip_copy_kernel is None:

        @ti.kernel
        def _kernel(src: ti.template(), dst: ti.template()):
            height = dst.shape[1]
            for i, j in dst:
                dst[i, j] = src[i, height - 1 - j]

        _flip_copy_kernel = _kernel
    return _flip_copy_kernel


def cursor_to_pixels(
    cursor: tuple[float, float], width: int, height: int
) -> tuple[float, float]:
    """Convert a GGUI cursor position to pixel coordinates.

    Args:
        cursor: Normalized (x, y) in [0, 1] with the origin at bottom-left.
        width: Window width in pixels.
        height: Window height in pixels.

    Returns:
        (x, y) in pixels with the origin at top-left.
    """
    return (cursor[0] * width, (1.0 - cursor[1]) * height)


class InteractiveWindow:
    """A GGUI window that the scene loop can draw on and read input from.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        framebuffer: The FrameBuffer all drawing goes into.
        display_image: Taichi field presented on the canvas (y up).
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "Interactive Raytracer",
    ) -> None:
        """Allocate the framebuffer. The window itself is opened lazily.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title (default: "Interactive Raytracer").
        """
        self.width = width
        self.height = height
        self._title = title
        self._is_initialized = False
        self._closed = False

        self._window: Optional[ti.ui.Window] = None
        self._canvas: Optional[ti.ui.Canvas] = None
        self._last_cursor: Optional[tuple[float, float]] = None

        self.framebuffer = FrameBuffer(width, height)
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        """Open the GGUI window and canvas.

        Raises:
            RuntimeError: If the window cannot be created.
        """
        if self._is_initialized:
            return

        try:
            self._window = ti.ui.Window(
                name=self._title,
                res=(self.width, self.height),
                vsync=True,
            )
        except Exception as e:
            raise RuntimeError(f"Failed to create window: {e}") from e
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> "ti.ui.Window":
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> "ti.ui.Canvas":
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    def __enter__(self) -> "InteractiveWindow":
        self._initialize_window()
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    def is_running(self) -> bool:
        """Check if the window is still open."""
        if self._closed:
            return False
        return self.window.running

    # =========================================================================
    # RenderSurface
    # =========================================================================

    def clear(self, color: tuple[float, ...]) -> None:
        self.framebuffer.clear(color)

    def set_blend_mode(self, mode: BlendMode) -> None:
        self.framebuffer.set_blend_mode(mode)

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: tuple[float, float, float, float],
    ) -> None:
        self.framebuffer.draw_line(x1, y1, x2, y2, color)

    def present(self) -> None:
        """Rasterize pending lines and show the frame (waits for vsync)."""
        self.framebuffer.flush()
        kernel = _get_flip_copy_kernel()
        kernel(self.framebuffer.pixels, self.display_image)
        self.canvas.set_image(self.display_image)
        self.window.show()

    # =========================================================================
    # Input
    # =========================================================================

    def cursor_position(self) -> tuple[float, float]:
        """Current cursor position in pixels (origin at top-left)."""
        x, y = self.window.get_cursor_pos()
        return cursor_to_pixels((x, y), self.width, self.height)

    def poll_events(self) -> list[InputEvent]:
        """Drain the GGUI event queue and translate it into scene events.

        GGUI only reports the cursor position at poll time, so the
        PointerMove for this frame comes first and every button event is
        placed at that same position. A press followed by a fast move
        within one frame is reported where the cursor ended up, so it
        can fall outside the pick radius and not start a drag.

        Returns:
            Events in the order they should be applied. A WindowClose is
            appended when Escape was pressed or the window was closed.
        """
        events: list[InputEvent] = []

        cursor = self.cursor_position()
        if cursor != self._last_cursor:
            events.append(PointerMove(*cursor))
            self._last_cursor = cursor

        for event in self.window.get_events():
            if event.key == ti.ui.LMB:
                if event.type == ti.ui.PRESS:
                    events.append(PointerDown(*cursor))
                elif event.type == ti.ui.RELEASE:
                    events.append(PointerUp())
            elif event.key == ti.ui.ESCAPE and event.type == ti.ui.PRESS:
                events.append(WindowClose())

        if not self.window.running:
            events.append(WindowClose())
        return events

    def close(self) -> None:
        """Close the window and release its resources.

        After calling this, the window cannot be reopened.
        """
        self._closed = True
        if self._window is not None:
            window, self._window, self._canvas = self._window, None, None
            window.running = False
            window.destroy()

    @staticmethod
    def is_display_available() -> bool:
        """Whether a GUI window can be opened in this session.

        Windows always has a desktop. On macOS the desktop is reachable
        unless the session is remote without X forwarding. Elsewhere an
        X11 or Wayland display must be advertised in the environment.
        """
        has_x11_or_wayland = bool(
            os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
        )
        if sys.platform == "win32":
            return True
        if sys.platform == "darwin":
            return has_x11_or_wayland or not os.environ.get("SSH_CONNECTION")
        return has_x11_or_wayland
