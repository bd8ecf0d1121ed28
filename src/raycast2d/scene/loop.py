"""The per-frame scene loop.

Each frame integrates pending input into the scene state, casts the full
ray fan from the light's current position and draws the result:

    1. obstacle outline
    2. one segment per ray (hit rays end on the obstacle, misses run to
       max_ray_length at a lower alpha)
    3. the light marker, on top of every ray

Nothing is carried over between frames except the scene state, so every
frame is a pure function of the light position.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycast2d.preview.surface import FrameBuffer
    >>> from src.raycast2d.scene.loop import SceneLoop
    >>> from src.raycast2d.scene.state import PointerDown, PointerMove, SceneState
    >>>
    >>> state = SceneState.from_params()
    >>> loop = SceneLoop(state, FrameBuffer(800, 600))
    >>> loop.step([PointerDown(400.0, 300.0), PointerMove(100.0, 100.0)])
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from src.raycast2d.preview.surface import RenderSurface, draw_circle_outline
from src.raycast2d.scene.caster import Hit, RayCaster, RayFan
from src.raycast2d.scene.state import InputEvent, SceneState, apply_event

# Supplies the events for one frame
EventSource = Callable[[], Iterable[InputEvent]]


def draw_scene(state: SceneState, fan: RayFan, surface: RenderSurface) -> None:
    """Issue the draw calls for one frame.

    Args:
        state: The scene being drawn.
        fan: Rays resolved from the light's current position.
        surface: Where to draw.
    """
    params = state.params
    obstacle = state.obstacle

    surface.clear(params.background_color)
    surface.set_blend_mode("blend")

    draw_circle_outline(
        surface,
        obstacle.center,
        obstacle.radius,
        params.obstacle_color,
        params.circle_segments,
    )

    ox, oy = fan.origin
    for result, end in zip(fan.results(), fan.endpoints):
        color = params.hit_ray_color if isinstance(result, Hit) else params.miss_ray_color
        surface.draw_line(ox, oy, float(end[0]), float(end[1]), color)

    draw_circle_outline(
        surface,
        state.light.position,
        params.light_marker_radius,
        params.light_color,
        params.circle_segments,
    )


class SceneLoop:
    """Drives the scene one frame at a time.

    Attributes:
        state: The mutable scene state.
        surface: The rendering surface frames are drawn on.
        caster: The ray caster resolving the fan each frame.
        frame_count: Number of frames drawn so far.
        last_fan: Rays from the most recent frame, or None before the first.
    """

    def __init__(
        self,
        state: SceneState,
        surface: RenderSurface,
        caster: RayCaster | None = None,
    ) -> None:
        self.state = state
        self.surface = surface
        if caster is None:
            caster = RayCaster(state.params.num_rays, state.params.max_ray_length)
        self.caster = caster
        self.frame_count = 0
        self.last_fan: RayFan | None = None

    def step(self, events: Iterable[InputEvent] = ()) -> bool:
        """Apply the frame's events, then cast, draw and present.

        Args:
            events: Input events received since the previous frame.

        Returns:
            False if a close was requested (no frame is drawn), True otherwise.
        """
        running = True
        for event in events:
            if not apply_event(self.state, event):
                running = False
        if not running:
            return False

        fan = self.caster.cast(self.state.light.position, self.state.obstacle)
        draw_scene(self.state, fan, self.surface)
        self.surface.present()

        self.last_fan = fan
        self.frame_count += 1
        return True

    def run(self, event_source: EventSource) -> int:
        """Step until a close is requested.

        Args:
            event_source: Called once per frame for that frame's events.

        Returns:
            The number of frames drawn.
        """
        while self.step(event_source()):
            pass
        return self.frame_count
