"""Tests for the GGUI window adapter.

No window is opened: the GGUI window object is replaced by a stand-in so
event translation and shutdown can be tested headless.
"""

import sys
from types import SimpleNamespace

import numpy as np
import pytest
import taichi as ti


class FakeGuiWindow:
    """Stand-in for ti.ui.Window exposing the input and lifecycle API."""

    def __init__(self, cursor=(0.5, 0.5), events=()):
        self.cursor = cursor
        self.events = list(events)
        self.running = True
        self.destroyed = False
        self.shown = 0

    def get_cursor_pos(self):
        return self.cursor

    def get_events(self):
        events, self.events = self.events, []
        return events

    def show(self):
        self.shown += 1

    def destroy(self):
        self.destroyed = True


class FakeCanvas:
    """Stand-in for ti.ui.Canvas that keeps a copy of the last image."""

    def __init__(self):
        self.image = None

    def set_image(self, field):
        self.image = field.to_numpy()


def _make_window(fake, canvas=None, width=800, height=600):
    from src.raycast2d.preview.window import InteractiveWindow

    window = InteractiveWindow(width, height)
    window._window = fake
    window._canvas = canvas if canvas is not None else FakeCanvas()
    window._is_initialized = True
    return window

class TestCursorConversion:
    """Tests for cursor_to_pixels."""

    @pytest.mark.parametrize(
        "cursor,expected",
        [
            ((0.0, 1.0), (0.0, 0.0)),
            ((1.0, 0.0), (800.0, 600.0)),
            ((0.5, 0.5), (400.0, 300.0)),
            ((0.25, 0.75), (200.0, 150.0)),
        ],
    )
    def test_cursor_to_pixels(self, cursor, expected):
        from src.raycast2d.preview.window import cursor_to_pixels

        assert cursor_to_pixels(cursor, 800, 600) == pytest.approx(expected)


class TestPollEvents:
    """Tests for InteractiveWindow.poll_events."""

    def test_first_poll_reports_cursor(self):
        from src.raycast2d.scene.state import PointerMove

        window = _make_window(FakeGuiWindow(cursor=(0.25, 0.75)))
        assert window.poll_events() == [PointerMove(200.0, 150.0)]

    def test_unchanged_cursor_is_not_a_move(self):
        window = _make_window(FakeGuiWindow())
        window.poll_events()
        assert window.poll_events() == []

    def test_left_button_press_and_release(self):
        from src.raycast2d.scene.state import PointerDown, PointerMove, PointerUp

        fake = FakeGuiWindow(
            cursor=(0.5, 0.5),
            events=[
                SimpleNamespace(key=ti.ui.LMB, type=ti.ui.PRESS),
                SimpleNamespace(key=ti.ui.LMB, type=ti.ui.RELEASE),
            ],
        )
        window = _make_window(fake)

        assert window.poll_events() == [
            PointerMove(400.0, 300.0),
            PointerDown(400.0, 300.0),
            PointerUp(),
        ]

    def test_other_buttons_ignored(self):
        fake = FakeGuiWindow(events=[SimpleNamespace(key=ti.ui.RMB, type=ti.ui.PRESS)])
        window = _make_window(fake)
        window.poll_events()
        fake.events = [SimpleNamespace(key=ti.ui.RMB, type=ti.ui.RELEASE)]
        assert window.poll_events() == []

    def test_escape_requests_close(self):
        from src.raycast2d.scene.state import WindowClose

        fake = FakeGuiWindow(events=[SimpleNamespace(key=ti.ui.ESCAPE, type=ti.ui.PRESS)])
        window = _make_window(fake)
        assert WindowClose() in window.poll_events()

    def test_closed_window_requests_close(self):
        from src.raycast2d.scene.state import WindowClose

        fake = FakeGuiWindow()
        fake.running = False
        window = _make_window(fake)
        assert window.poll_events()[-1] == WindowClose()


class TestClose:
    """Tests for window shutdown."""

    def test_close_destroys_window(self):
        fake = FakeGuiWindow()
        window = _make_window(fake)

        window.close()

        assert fake.destroyed
        assert fake.running is False
        assert window.is_running() is False

    def test_exit_closes_on_error(self):
        fake = FakeGuiWindow()
        window = _make_window(fake)

        with pytest.raises(KeyError):
            with window:
                raise KeyError("boom")

        assert fake.destroyed


class TestPresent:
    """Tests for copying the framebuffer onto the canvas."""

    def test_flip_copy_kernel_reverses_rows(self):
        from src.raycast2d.preview.window import _get_flip_copy_kernel

        src = ti.Vector.field(3, dtype=ti.f32, shape=(4, 3))
        dst = ti.Vector.field(3, dtype=ti.f32, shape=(4, 3))
        values = np.zeros((4, 3, 3), dtype=np.float32)
        for i in range(4):
            for j in range(3):
                values[i, j] = (i, j, i * 10 + j)
        src.from_numpy(values)

        _get_flip_copy_kernel()(src, dst)

        flipped = dst.to_numpy()
        for i in range(4):
            for j in range(3):
                assert tuple(flipped[i, j]) == tuple(values[i, 2 - j])

    def test_flip_copy_kernel_is_cached(self):
        from src.raycast2d.preview.window import _get_flip_copy_kernel

        assert _get_flip_copy_kernel() is _get_flip_copy_kernel()

    def test_present_shows_frame_with_y_up(self):
        """Test that a line near the top of the frame lands at the top of the canvas."""
        fake = FakeGuiWindow()
        canvas = FakeCanvas()
        window = _make_window(fake, canvas, width=16, height=8)

        window.clear((0.0, 0.0, 0.0))
        window.set_blend_mode("none")
        window.draw_line(0, 1, 15, 1, (1.0, 0.0, 0.0, 1.0))
        window.present()

        assert fake.shown == 1
        assert window.framebuffer.num_pending == 0
        # Canvas row index grows upward, so framebuffer row 1 is canvas row 6
        assert np.allclose(canvas.image[:, 6], (1.0, 0.0, 0.0))
        assert np.allclose(canvas.image[:, 1], (0.0, 0.0, 0.0))

    def test_scene_loop_presents_through_window(self):
        from src.raycast2d.scene.loop import SceneLoop
        from src.raycast2d.scene.state import SceneState

        fake = FakeGuiWindow()
        canvas = FakeCanvas()
        window = _make_window(fake, canvas)
        loop = SceneLoop(SceneState.from_params(), window)

        assert loop.step() is True
        assert fake.shown == 1
        assert canvas.image.shape == (800, 600, 3)


class TestDisplayCheck:
    """Tests for InteractiveWindow.is_display_available."""

    @pytest.fixture
    def bare_env(self, monkeypatch):
        for name in ("DISPLAY", "WAYLAND_DISPLAY", "SSH_CONNECTION"):
            monkeypatch.delenv(name, raising=False)
        return monkeypatch

    def test_returns_bool(self):
        from src.raycast2d.preview.window import InteractiveWindow

        assert isinstance(InteractiveWindow.is_display_available(), bool)

    def test_linux_needs_display_variable(self, bare_env):
        from src.raycast2d.preview.window import InteractiveWindow

        bare_env.setattr(sys, "platform", "linux")
        assert InteractiveWindow.is_display_available() is False
        bare_env.setenv("WAYLAND_DISPLAY", "wayland-0")
        assert InteractiveWindow.is_display_available() is True

    def test_macos_over_ssh_without_forwarding(self, bare_env):
        from src.raycast2d.preview.window import InteractiveWindow

        bare_env.setattr(sys, "platform", "darwin")
        assert InteractiveWindow.is_display_available() is True
        bare_env.setenv("SSH_CONNECTION", "10.0.0.1 22 10.0.0.2 22")
        assert InteractiveWindow.is_display_available() is False
        bare_env.setenv("DISPLAY", "localhost:10.0")
        assert InteractiveWindow.is_display_available() is True

    def test_windows_always_has_display(self, bare_env):
        from src.raycast2d.preview.window import InteractiveWindow

        bare_env.setattr(sys, "platform", "win32")
        assert InteractiveWindow.is_display_available() is True
