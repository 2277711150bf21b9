"""
The point light used for local illumination and hard shadows.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .errors import SceneConfigError
from .vec3 import Vec3, Point3, Color


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Point lights emit light equally in all directions from a single point.
    They produce hard shadows. There is no distance falloff.

    Attributes:
        position: Position of the light
        ambient: Global ambient light color
        diffuse: Color used for the diffuse term
        specular: Color used for the specular term
    """
    position: Point3 = field(default_factory=lambda: Point3(5, 10, -5))
    ambient: Color = field(default_factory=lambda: Color(1, 1, 1) * 0.1)
    diffuse: Color = field(default_factory=lambda: Color(1, 1, 1) * 0.4)
    specular: Color = field(default_factory=lambda: Color(1, 1, 1) * 0.8)

    def __post_init__(self):
        for name in ('ambient', 'diffuse', 'specular'):
            color: Vec3 = getattr(self, name)
            if min(color) < 0:
                raise SceneConfigError(f"Light {name} color must be non-negative, got {color}")
