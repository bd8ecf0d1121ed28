"""Scene parameters, mutable scene state and input integration.

The scene is one fixed circular obstacle and one draggable light. All
mutable state lives in a SceneState object that the frame loop passes
around explicitly, so input handling can be tested without a window.

Example:
    >>> from src.raycast2d.scene.state import (
    ...     PointerDown, PointerMove, SceneState, apply_event
    ... )
    >>> state = SceneState.from_params()
    >>> apply_event(state, PointerDown(405.0, 305.0))
    True
    >>> apply_event(state, PointerMove(120.0, 80.0))
    True
    >>> state.light.position
    (120.0, 80.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from src.raycast2d.geometry.host import length, sub

# RGBA color with components in [0, 1]
Color = tuple[float, float, float, float]


def rgba(r: int, g: int, b: int, a: int = 255) -> Color:
    """Convert 8-bit channel values to a float RGBA color."""
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


@dataclass(frozen=True)
class ObstacleParams:
    """The single static circular obstacle.

    Attributes:
        center: Circle center in pixel coordinates (y grows downward).
        radius: Circle radius in pixels (>= 0).
    """

    center: tuple[float, float] = (400.0, 300.0)
    radius: float = 50.0


@dataclass(frozen=True)
class SceneParams:
    """Configuration for the ray-casting scene.

    All defaults reproduce the classic demo: an 800x600 window, a circle
    of radius 50 in the middle and one ray per degree.

    Attributes:
        width: Scene width in pixels.
        height: Scene height in pixels.
        num_rays: Number of rays sampled uniformly around the light.
        max_ray_length: Length of unobstructed rays.
        pick_radius: Pointer presses closer than this grab the light.
        light_marker_radius: Radius of the circle drawn for the light.
        circle_segments: Segments used to draw circle outlines.
        obstacle: The fixed obstacle.
        default_light: Light position at startup.
        background_color: Clear color (alpha is ignored).
        obstacle_color: Obstacle outline color.
        hit_ray_color: Color of rays that end on the obstacle.
        miss_ray_color: Color of unobstructed rays.
        light_color: Light marker color.
    """

    width: int = 800
    height: int = 600
    num_rays: int = 360
    max_ray_length: float = 1000.0
    pick_radius: float = 20.0
    light_marker_radius: float = 20.0
    circle_segments: int = 32
    obstacle: ObstacleParams = field(default_factory=ObstacleParams)
    default_light: tuple[float, float] = (400.0, 300.0)
    background_color: Color = rgba(30, 30, 30)
    obstacle_color: Color = rgba(0, 120, 200)
    hit_ray_color: Color = rgba(255, 255, 0, 100)
    miss_ray_color: Color = rgba(255, 255, 0, 50)
    light_color: Color = rgba(255, 255, 0)

    def validate(self) -> None:
        """Check the parameters for values the renderer cannot handle.

        Raises:
            ValueError: If a size, count or radius is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Scene size must be positive, got {self.width}x{self.height}"
            )
        if self.num_rays < 1:
            raise ValueError(f"num_rays must be at least 1, got {self.num_rays}")
        if self.max_ray_length <= 0.0:
            raise ValueError(
                f"max_ray_length must be positive, got {self.max_ray_length}"
            )
        if self.obstacle.radius < 0.0:
            raise ValueError(
                f"Obstacle radius must be non-negative, got {self.obstacle.radius}"
            )
        if self.circle_segments < 3:
            raise ValueError(
                f"circle_segments must be at least 3, got {self.circle_segments}"
            )


@dataclass
class LightSource:
    """The draggable light.

    Attributes:
        position: Current position in pixel coordinates.
        dragging: Whether the pointer currently holds the light.
    """

    position: tuple[float, float]
    dragging: bool = False


@dataclass
class SceneState:
    """Everything that changes between frames, plus the fixed scene setup."""

    params: SceneParams
    light: LightSource

    @classmethod
    def from_params(cls, params: SceneParams | None = None) -> SceneState:
        """Create a scene with the light at its default position.

        Raises:
            ValueError: If the parameters are invalid.
        """
        if params is None:
            params = SceneParams()
        params.validate()
        return cls(params=params, light=LightSource(position=params.default_light))

    @property
    def obstacle(self) -> ObstacleParams:
        return self.params.obstacle

    def reset_light(self) -> None:
        """Put the light back at its default position and release it."""
        self.light.position = self.params.default_light
        self.light.dragging = False


# =============================================================================
# Input events
# =============================================================================


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class WindowClose:
    pass


InputEvent = Union[PointerDown, PointerUp, PointerMove, WindowClose]


def apply_event(state: SceneState, event: InputEvent) -> bool:
    """Integrate one input event into the scene state.

    A press closer than pick_radius to the light starts a drag, a release
    always ends it, and a move during a drag puts the light exactly at the
    pointer.

    Args:
        state: The scene state to mutate.
        event: The event to apply.

    Returns:
        False if the event asks the application to stop, True otherwise.
    """
    light = state.light
    if isinstance(event, WindowClose):
        return False
    if isinstance(event, PointerDown):
        if length(sub((event.x, event.y), light.position)) < state.params.pick_radius:
            light.dragging = True
    elif isinstance(event, PointerUp):
        light.dragging = False
    elif isinstance(event, PointerMove):
        if light.dragging:
            light.position = (event.x, event.y)
    return True
