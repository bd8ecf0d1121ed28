"""Pytest configuration for raycast2d tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def scene_state():
    """A scene with default parameters and the light at its default spot."""
    from src.raycast2d.scene.state import SceneState

    return SceneState.from_params()


@pytest.fixture(scope="session")
def default_caster():
    """A RayCaster with the default 360-ray fan.

    Shared across the session since allocating fields is comparatively slow
    and the caster holds no state between casts.
    """
    from src.raycast2d.scene.caster import RayCaster

    return RayCaster(360, 1000.0)


class RecordingSurface:
    """A RenderSurface that records every call instead of drawing."""

    def __init__(self):
        self.calls = []
        self.presented = 0

    def clear(self, color):
        self.calls.append(("clear", tuple(color)))

    def set_blend_mode(self, mode):
        self.calls.append(("blend", mode))

    def draw_line(self, x1, y1, x2, y2, color):
        self.calls.append(("line", (x1, y1, x2, y2), tuple(color)))

    def present(self):
        self.calls.append(("present",))
        self.presented += 1

    def lines(self):
        return [c for c in self.calls if c[0] == "line"]


@pytest.fixture
def recording_surface():
    """A fresh RecordingSurface."""
    return RecordingSurface()
