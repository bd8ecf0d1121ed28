"""Host-side geometry on plain Python tuples.

The scene state lives on the host, so pointer picking uses these
functions instead of launching a kernel. ``intersect_ray_circle`` follows
the same root selection as ``circle.intersect_ray_circle`` and serves as
its double-precision reference.
"""

from __future__ import annotations

import math

from src.raycast2d.geometry.circle import INTERSECT_EPSILON

Vec2 = tuple[float, float]


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def length(v: Vec2) -> float:
    """Euclidean length of v."""
    return math.hypot(v[0], v[1])


def intersect_ray_circle(
    origin: Vec2,
    direction: Vec2,
    center: Vec2,
    radius: float,
    t_min: float = INTERSECT_EPSILON,
) -> float | None:
    """Distance along the ray to the accepted circle root, or None on a miss."""
    oc = sub(origin, center)
    a = dot(direction, direction)
    b = 2.0 * dot(oc, direction)
    c = dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c
    if a == 0.0 or discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    for t in ((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a)):
        if t > t_min:
            return t
    return None
