"""Per-frame ray fan casting against the obstacle.

Every frame the light emits num_rays rays at evenly spaced angles
2*pi*i/N. The directions never change, so they are computed once and kept
in a Taichi field; each call to RayCaster.cast() resolves the whole fan in
a single kernel launch (one thread per ray) and copies the results back
to NumPy.

The host consumes the results either as arrays (for drawing in bulk) or
as a list of tagged results, Hit(distance) or Miss.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycast2d.scene.caster import RayCaster
    >>> from src.raycast2d.scene.state import ObstacleParams
    >>> caster = RayCaster(360, 1000.0)
    >>> fan = caster.cast((0.0, 0.0), ObstacleParams((400.0, 300.0), 50.0))
    >>> fan.hit_count
    11
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.raycast2d.geometry.circle import (
    INTERSECT_EPSILON,
    Circle,
    intersect_ray_circle,
)
from src.raycast2d.geometry.vector import add, scale

if TYPE_CHECKING:
    from src.raycast2d.scene.state import ObstacleParams

vec2 = tm.vec2


@dataclass(frozen=True)
class Hit:
    """The ray was blocked by the obstacle after travelling distance."""

    distance: float


@dataclass(frozen=True)
class Miss:
    """The ray left the scene without touching the obstacle."""


RayResult = Union[Hit, Miss]


def fan_directions(num_rays: int) -> npt.NDArray[np.float32]:
    """Unit directions (cos(2*pi*i/N), sin(2*pi*i/N)) for i in [0, N).

    Args:
        num_rays: Number of rays N (must be >= 1).

    Returns:
        Array of shape (N, 2).

    Raises:
        ValueError: If num_rays is less than 1.
    """
    if num_rays < 1:
        raise ValueError(f"num_rays must be at least 1, got {num_rays}")
    angles = 2.0 * np.pi * np.arange(num_rays, dtype=np.float64) / num_rays
    return np.stack([np.cos(angles), np.sin(angles)], axis=1).astype(np.float32)


@dataclass
class RayFan:
    """Resolved rays for one frame.

    Attributes:
        origin: The light position all rays start from.
        directions: Unit directions, shape (N, 2).
        hit: Boolean mask, True where the ray was blocked, shape (N,).
        distances: Distance to the obstacle, NaN for misses, shape (N,).
        endpoints: Where each drawn segment ends, shape (N, 2).
    """

    origin: tuple[float, float]
    directions: npt.NDArray[np.float32]
    hit: npt.NDArray[np.bool_]
    distances: npt.NDArray[np.float32]
    endpoints: npt.NDArray[np.float32]

    def __len__(self) -> int:
        return int(self.hit.shape[0])

    @property
    def hit_count(self) -> int:
        """Number of rays blocked by the obstacle."""
        return int(np.count_nonzero(self.hit))

    def results(self) -> list[RayResult]:
        """Per-ray tagged results in fan order."""
        return [
            Hit(float(d)) if h else Miss()
            for h, d in zip(self.hit, self.distances)
        ]


@ti.data_oriented
class RayCaster:
    """Casts a fixed fan of rays from a moving origin against one circle.

    Attributes:
        num_rays: Number of rays in the fan.
        max_ray_length: Length given to rays that miss.
        directions: Taichi field of unit ray directions.
    """

    def __init__(self, num_rays: int, max_ray_length: float) -> None:
        """Allocate the per-ray fields and upload the fan directions.

        Args:
            num_rays: Number of rays in the fan (>= 1).
            max_ray_length: Length of unobstructed rays (> 0).

        Raises:
            ValueError: If either argument is out of range.
        """
        if max_ray_length <= 0.0:
            raise ValueError(f"max_ray_length must be positive, got {max_ray_length}")
        directions = fan_directions(num_rays)

        self.num_rays = num_rays
        self.max_ray_length = max_ray_length

        self.directions = ti.Vector.field(2, dtype=ti.f32, shape=num_rays)
        self.hit = ti.field(dtype=ti.i32, shape=num_rays)
        self.distance = ti.field(dtype=ti.f32, shape=num_rays)
        self.endpoint = ti.Vector.field(2, dtype=ti.f32, shape=num_rays)

        self.directions.from_numpy(directions)

    @ti.kernel
    def _cast_kernel(
        self,
        origin_x: ti.f32,
        origin_y: ti.f32,
        center_x: ti.f32,
        center_y: ti.f32,
        radius: ti.f32,
        max_length: ti.f32,
    ):
        origin = vec2(origin_x, origin_y)
        circle = Circle(center=vec2(center_x, center_y), radius=radius)
        for i in self.directions:
            direction = self.directions[i]
            record = intersect_ray_circle(origin, direction, circle, INTERSECT_EPSILON)
            self.hit[i] = record.hit
            self.distance[i] = record.t
            reach = max_length
            if record.hit == 1:
                reach = record.t
            self.endpoint[i] = add(origin, scale(direction, reach))

    def cast(self, origin: tuple[float, float], obstacle: "ObstacleParams") -> RayFan:
        """Resolve every ray of the fan from origin against the obstacle.

        Args:
            origin: The light position.
            obstacle: The circle to test against.

        Returns:
            The resolved RayFan for this frame.
        """
        self._cast_kernel(
            float(origin[0]),
            float(origin[1]),
            float(obstacle.center[0]),
            float(obstacle.center[1]),
            float(obstacle.radius),
            float(self.max_ray_length),
        )
        hit = self.hit.to_numpy().astype(bool)
        distances = self.distance.to_numpy()
        distances[~hit] = np.nan
        return RayFan(
            origin=(float(origin[0]), float(origin[1])),
            directions=self.directions.to_numpy(),
            hit=hit,
            distances=distances,
            endpoints=self.endpoint.to_numpy(),
        )
