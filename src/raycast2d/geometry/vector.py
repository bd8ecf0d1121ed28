"""2D vector utilities for use inside Taichi kernels.

All functions are ``@ti.func`` and operate on ``taichi.math.vec2`` values.
They are pure and total: ``normalize`` of a zero vector returns the
vector unchanged instead of dividing by zero.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycast2d.geometry.vector import normalize, vec2
    >>> @ti.kernel
    ... def unit() -> ti.f32:
    ...     return normalize(vec2(3.0, 4.0)).x
    >>> unit()  # 0.6
"""

import taichi as ti
import taichi.math as tm

# Type alias for 2D vectors using Taichi's math module
vec2 = tm.vec2


@ti.func
def add(a: vec2, b: vec2) -> vec2:
    """Componentwise sum a + b."""
    return vec2(a.x + b.x, a.y + b.y)


@ti.func
def sub(a: vec2, b: vec2) -> vec2:
    """Componentwise difference a - b."""
    return vec2(a.x - b.x, a.y - b.y)


@ti.func
def scale(a: vec2, s: ti.f32) -> vec2:
    """Multiply every component of a by the scalar s."""
    return vec2(a.x * s, a.y * s)


@ti.func
def dot(a: vec2, b: vec2) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y


@ti.func
def length_squared(v: vec2) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return dot(v, v)


@ti.func
def length(v: vec2) -> ti.f32:
    """Compute the Euclidean length of a vector (always >= 0)."""
    return ti.sqrt(length_squared(v))


@ti.func
def normalize(v: vec2) -> vec2:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. If v has zero length it
        is returned unchanged.
    """
    result = v
    len_v = length(v)
    if len_v > 0.0:
        result = vec2(v.x / len_v, v.y / len_v)
    return result
