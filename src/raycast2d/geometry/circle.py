"""Circle primitive and ray-circle intersection.

The intersection is the closed-form solution of

    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic a*t^2 + b*t + c = 0 with

    oc = origin - center
    a  = dot(direction, direction)
    b  = 2 * dot(oc, direction)
    c  = dot(oc, oc) - radius^2

The leading coefficient is computed rather than assumed to be 1, so the
test stays correct for non-unit directions.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycast2d.geometry.circle import Circle, intersect_ray_circle, vec2
    >>> # Use intersect_ray_circle within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.raycast2d.geometry.vector import dot, sub

# Type alias for 2D vectors using Taichi's math module
vec2 = tm.vec2

# Roots at or below this distance are rejected as self-intersection
INTERSECT_EPSILON = 0.001


@ti.dataclass
class Circle:
    """A circle defined by center point and radius.

    Attributes:
        center: The center point of the circle (vec2).
        radius: The radius of the circle (>= 0).
    """

    center: vec2
    radius: ti.f32


@ti.dataclass
class RayHit:
    """Result of a ray-circle intersection test.

    Attributes:
        hit: 1 if the ray hit the circle ahead of its origin, 0 otherwise.
        t: Distance along the ray (in units of the direction's length) to
            the accepted root. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def make_circle(center: vec2, radius: ti.f32) -> Circle:
    """Create a circle from center and radius inside a Taichi kernel."""
    return Circle(center=center, radius=radius)


@ti.func
def intersect_ray_circle(
    origin: vec2,
    direction: vec2,
    circle: Circle,
    t_min: ti.f32,
) -> RayHit:
    """Test a ray against a circle and return the nearest accepted root.

    The near root (-b - sqrt(disc)) / 2a is tried first; for an origin
    outside the circle this is the entry point. When it is not beyond
    t_min (the origin lies inside the circle or on its boundary) the far
    root is tried, which is where the ray leaves the circle. A ray whose
    circle lies entirely behind it reports a miss.

    Args:
        origin: The starting point of the ray.
        direction: The ray direction. Need not be unit length; a zero
            direction always misses.
        circle: The circle to test against.
        t_min: Roots must be strictly greater than this value, normally
            INTERSECT_EPSILON.

    Returns:
        A RayHit with hit == 1 and the accepted t, or hit == 0.
    """
    oc = sub(origin, circle.center)
    a = dot(direction, direction)
    b = 2.0 * dot(oc, direction)
    c = dot(oc, oc) - circle.radius * circle.radius
    discriminant = b * b - 4.0 * a * c

    did_hit = 0
    hit_t = 0.0

    if a > 0.0 and discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t = (-b - sqrt_d) / (2.0 * a)
        if t > t_min:
            did_hit = 1
            hit_t = t
        else:
            t = (-b + sqrt_d) / (2.0 * a)
            if t > t_min:
                did_hit = 1
                hit_t = t

    return RayHit(hit=did_hit, t=hit_t)
