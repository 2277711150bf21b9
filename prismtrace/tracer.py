"""
Recursive Whitted-style tracer.

trace() turns a ray into a color: it finds the nearest hit, shades it with
the Phong model and hard shadows, and recurses for mirror reflection and
dielectric transmission until the depth bound is reached.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .vec3 import Color
from .ray import Ray
from .shapes import Scene, HitRecord
from .materials import ambient_term, diffuse_term, specular_term

if TYPE_CHECKING:
    from .renderer import RenderSettings


class Tracer:
    """Traces rays through a read-only scene.

    A tracer keeps a private count of the rays it has fired, so each worker
    should use its own instance and the counts are summed afterwards.
    """

    def __init__(self, scene: Scene, settings: RenderSettings):
        self.scene = scene
        self.settings = settings
        self.light = settings.light
        self.rays_fired = 0

    def trace(self, ray: Ray, current_ior: float, previous_ior: float, depth: int = 0) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace
            current_ior: Index of refraction of the medium the ray travels in
            previous_ior: Index of refraction of the medium outside that one
            depth: Number of bounces taken to reach this ray

        Returns:
            The (unclamped) color for this ray
        """
        if depth >= self.settings.max_depth:
            return self.settings.background

        self.rays_fired += 1
        hit = self.scene.nearest_hit(ray)
        if hit is None:
            return self.settings.background

        return self.shade(ray, hit, current_ior, previous_ior, depth)

    def shade(self, ray: Ray, hit: HitRecord, current_ior: float, previous_ior: float, depth: int) -> Color:
        """Local Phong lighting plus reflected and transmitted light."""
        material = hit.material
        view_dir = -ray.direction

        color = ambient_term(material, hit.point, self.light.ambient)

        if material.reflecting:
            reflected = Ray(hit.point, ray.direction.reflect(hit.normal))
            color = color + material.reflecting_power * self.trace(
                reflected, current_ior, previous_ior, depth + 1
            )

        if material.refracts:
            color = color + self._transmit(ray, hit, current_ior, previous_ior, depth)

        shadow_ray = Ray.towards(hit.point, self.light.position)
        if self.scene.occluded(shadow_ray):
            return color

        light_dir = shadow_ray.direction
        return (
            color
            + diffuse_term(material, hit.normal, light_dir, self.light.diffuse)
            + specular_term(material, hit.normal, light_dir, view_dir, self.light.specular)
        )

    def _transmit(self, ray: Ray, hit: HitRecord, current_ior: float, previous_ior: float, depth: int) -> Color:
        """Light arriving through a dielectric boundary.

        Entering a medium pushes its IoR and remembers the one we came from.
        Leaving restores the remembered IoR. Total internal reflection sends
        the energy back into the current medium along the mirror direction.
        """
        if hit.front_face:
            next_ior, after_ior = hit.material.ior, current_ior
        else:
            next_ior, after_ior = previous_ior, self.settings.ambient_ior

        direction = ray.direction.refract(hit.normal, current_ior / next_ior)
        if direction is None:
            reflected = Ray(hit.point, ray.direction.reflect(hit.normal))
            return self.trace(reflected, current_ior, previous_ior, depth + 1)

        transmitted = Ray(hit.inner_point, direction)
        return self.trace(transmitted, next_ior, after_ior, depth + 1)
