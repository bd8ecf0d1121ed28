"""Scene module: state, input integration, ray casting and the frame loop.

Components:
    state: SceneParams configuration, SceneState and pointer events
    caster: RayCaster resolving the ray fan in a Taichi kernel
    loop: draw_scene and the SceneLoop frame driver

Data flow per frame:
    events -> apply_event -> RayCaster.cast -> draw_scene -> present
"""

from .state import (
    Color,
    InputEvent,
    LightSource,
    ObstacleParams,
    PointerDown,
    PointerMove,
    PointerUp,
    SceneParams,
    SceneState,
    WindowClose,
    apply_event,
    rgba,
)
from .caster import Hit, Miss, RayCaster, RayFan, RayResult, fan_directions
from .loop import SceneLoop, draw_scene

__all__ = [
    # State module
    "SceneParams",
    "ObstacleParams",
    "SceneState",
    "LightSource",
    "Color",
    "rgba",
    "InputEvent",
    "PointerDown",
    "PointerUp",
    "PointerMove",
    "WindowClose",
    "apply_event",
    # Caster module
    "RayCaster",
    "RayFan",
    "RayResult",
    "Hit",
    "Miss",
    "fan_directions",
    # Loop module
    "SceneLoop",
    "draw_scene",
]
