"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point, a unit direction and the
distance it may travel before it stops counting hits.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
import math

from .vec3 import Vec3, Point3


class Ray:
    """A ray with origin, unit direction and maximum travel distance.

    Primary and secondary rays are unbounded. Shadow rays are bounded by
    the distance to the light so that occluders behind the light are ignored.
    """

    __slots__ = ('origin', 'direction', 'max_distance')

    def __init__(self, origin: Point3, direction: Vec3, max_distance: float = math.inf):
        """Create a ray.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (normalized here)
            max_distance: Upper bound on useful hit distances
        """
        self.origin = origin
        self.direction = direction.normalize()
        self.max_distance = max_distance

    @classmethod
    def towards(cls, origin: Point3, target: Point3) -> Ray:
        """Build a ray from origin to target, bounded by their distance."""
        offset = target - origin
        return cls(origin, offset, offset.length())

    def at(self, t: float) -> Point3:
        """Get the point along the ray at distance t."""
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction}, max_distance={self.max_distance})"
