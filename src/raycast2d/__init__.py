"""Interactive 2D ray-circle intersection demo built on Taichi.

A draggable light point emits a fan of rays that are tested against a
fixed circular obstacle every frame. Blocked rays end at the obstacle
boundary; unobstructed rays run to the edge of the scene at a lower alpha.

Subpackages:
    geometry: 2D vector utilities and the ray-circle intersection test
    scene: Scene state, input handling, ray casting and the frame loop
    preview: Taichi framebuffer, GGUI window and PNG export
"""

__version__ = "0.1.0"
