"""Geometry module for 2D vectors and the ray-circle intersection test.

Components:
    vector: vec2 arithmetic as Taichi functions
    circle: Circle primitive and intersect_ray_circle
    host: Tuple versions of the picking math and a reference intersection

Kernel-side intersection follows the pattern:
    record = intersect_ray_circle(origin, direction, circle, INTERSECT_EPSILON)
"""

from .circle import INTERSECT_EPSILON, Circle, RayHit, intersect_ray_circle, make_circle
from .vector import add, dot, length, length_squared, normalize, scale, sub, vec2

__all__ = [
    "Circle",
    "RayHit",
    "INTERSECT_EPSILON",
    "intersect_ray_circle",
    "make_circle",
    "vec2",
    "add",
    "sub",
    "scale",
    "dot",
    "length",
    "length_squared",
    "normalize",
]
