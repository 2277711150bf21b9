"""
Geometric primitives and the scene they live in.

Each primitive implements the Primitive interface with an `intersect`
method returning an optional HitRecord. The Scene is a plain ordered
list scanned linearly for every query.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import math

from .errors import SceneConfigError
from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


# Offset applied to hit points along the facing normal. Rays spawned from
# a hit point must not re-hit the surface they start on.
SURFACE_EPSILON = 1e-6

# Below this |dot(normal, direction)| a ray counts as parallel to a plane.
PARALLEL_EPSILON = 1e-12


@dataclass
class HitRecord:
    """Stores information about a ray-primitive intersection.

    Attributes:
        point: Intersection point, nudged off the surface towards the ray origin
        normal: Unit surface normal, flipped to face the incoming ray
        distance: Distance along the ray to the true surface point
        primitive: The primitive that was hit
        front_face: True if the ray hit the outside of the surface
    """
    point: Point3
    normal: Vec3
    distance: float
    primitive: Primitive
    front_face: bool = True

    @classmethod
    def at_distance(cls, ray: Ray, distance: float, outward_normal: Vec3, primitive: Primitive) -> HitRecord:
        """Build a record from a ray distance and the outward surface normal."""
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        point = ray.at(distance) + normal * SURFACE_EPSILON
        return cls(point=point, normal=normal, distance=distance,
                   primitive=primitive, front_face=front_face)

    @property
    def material(self) -> Material:
        return self.primitive.material

    @property
    def inner_point(self) -> Point3:
        """The hit point nudged to the far side of the surface.

        Transmitted rays start here so they leave the surface behind.
        """
        return self.point - self.normal * (2 * SURFACE_EPSILON)


class Primitive(ABC):
    """Interface for everything a ray can hit."""

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        """Test if ray intersects this primitive.

        Returns:
            HitRecord for the nearest hit at a positive distance, None otherwise
        """
        pass


class Sphere(Primitive):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        if radius <= 0:
            raise SceneConfigError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material
        self._radius_squared = radius * radius

    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        """Geometric ray-sphere intersection.

        Projects the origin-to-center vector onto the ray (tca) and compares
        the squared perpendicular distance against radius squared, which stays
        accurate near grazing incidence.
        """
        to_center = self.center - ray.origin
        tca = to_center.dot(ray.direction)
        center_dist_sq = to_center.length_squared()
        outside = center_dist_sq > self._radius_squared

        # Origin outside and sphere behind it
        if outside and tca < 0:
            return None

        # Miss, or a tangent graze
        d2 = center_dist_sq - tca * tca
        if d2 >= self._radius_squared:
            return None

        thc = math.sqrt(self._radius_squared - d2)
        t = tca - thc
        if t <= 0:
            t = tca + thc
            if t <= 0:
                return None

        outward_normal = (ray.at(t) - self.center) / self.radius
        return HitRecord.at_distance(ray, t, outward_normal, self)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Plane(Primitive):
    """An infinite plane defined by a point and normal."""

    def __init__(self, point: Point3, normal: Vec3, material: Material):
        if normal.near_zero():
            raise SceneConfigError("Plane normal must not be the zero vector")
        self.point = point
        self.normal = normal.normalize()
        self.material = material

    def intersect(self, ray: Ray) -> Optional[HitRecord]:
        denom = self.normal.dot(ray.direction)

        # Ray is parallel to plane
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = (self.point - ray.origin).dot(self.normal) / denom
        if t <= 0:
            return None

        return HitRecord.at_distance(ray, t, self.normal, self)

    def __repr__(self) -> str:
        return f"Plane(point={self.point}, normal={self.normal})"


class Scene:
    """An ordered collection of primitives.

    Built once before rendering and only read while rendering.
    """

    def __init__(self, primitives: Optional[list[Primitive]] = None):
        self.primitives: list[Primitive] = list(primitives) if primitives is not None else []

    def add(self, primitive: Primitive) -> None:
        """Add a primitive to the scene."""
        self.primitives.append(primitive)

    def nearest_hit(self, ray: Ray) -> Optional[HitRecord]:
        """Find the closest intersection among all primitives.

        The first primitive wins ties.
        """
        closest: Optional[HitRecord] = None
        for primitive in self.primitives:
            hit = primitive.intersect(ray)
            if hit is not None and (closest is None or hit.distance < closest.distance):
                closest = hit
        return closest

    def occluded(self, ray: Ray) -> bool:
        """True if any primitive is hit strictly closer than ray.max_distance."""
        for primitive in self.primitives:
            hit = primitive.intersect(ray)
            if hit is not None and hit.distance < ray.max_distance:
                return True
        return False

    def __len__(self) -> int:
        return len(self.primitives)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)
