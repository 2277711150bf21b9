"""
Phong materials.

Implements:
- Ambient, diffuse and specular reflectance with a shininess exponent
- Mirror reflection and dielectric refraction flags
- A procedural checkerboard that replaces the ambient color
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
import math

from .errors import SceneConfigError
from .vec3 import Vec3, Point3, Color


@dataclass(frozen=True)
class Material:
    """Surface response of a primitive. Immutable once created.

    Attributes:
        ambient: Ambient reflectance (scaled by the light's ambient color)
        diffuse: Lambertian reflectance
        specular: Phong specular reflectance
        shininess: Phong exponent
        reflecting: Spawn a mirror reflection ray
        reflecting_power: Weight of the reflected color
        refracts: Spawn a transmitted ray through the surface
        ior: Index of refraction of the material's interior
        checkerboard: Replace the ambient term with a checker pattern
        checker_size: Edge length of a checker tile (world units)
        checker_even: Tint of tiles whose x and z indices share parity
        checker_odd: Tint of the remaining tiles
    """
    ambient: Color = field(default_factory=lambda: Color(0.1, 0.1, 0.1))
    diffuse: Color = field(default_factory=lambda: Color(0.5, 0.5, 0.5))
    specular: Color = field(default_factory=lambda: Color(0, 0, 0))
    shininess: float = 0.0
    reflecting: bool = False
    reflecting_power: Color = field(default_factory=lambda: Color(1, 1, 1))
    refracts: bool = False
    ior: float = 1.0
    checkerboard: bool = False
    checker_size: float = 10.0
    checker_even: Color = field(default_factory=lambda: Color(1, 0, 0))
    checker_odd: Color = field(default_factory=lambda: Color(0, 0, 1))

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Vec3) and min(value) < 0:
                raise SceneConfigError(f"Material {f.name} must be non-negative, got {value}")
        if self.shininess < 0:
            raise SceneConfigError(f"Material shininess must be >= 0, got {self.shininess}")
        if self.ior <= 0:
            raise SceneConfigError(f"Material ior must be positive, got {self.ior}")
        if self.checker_size <= 0:
            raise SceneConfigError(f"Material checker_size must be positive, got {self.checker_size}")

    def checker_color(self, point: Point3) -> Color:
        """Tint of the checker tile containing point (tiles on the xz-plane)."""
        u = math.floor(point.x / self.checker_size)
        v = math.floor(point.z / self.checker_size)
        if (u % 2 == 0) == (v % 2 == 0):
            return self.checker_even
        return self.checker_odd


def ambient_term(material: Material, point: Point3, light_ambient: Color) -> Color:
    """Ambient contribution, using the checker tint when enabled."""
    if material.checkerboard:
        return material.checker_color(point) * light_ambient
    return material.ambient * light_ambient


def diffuse_term(material: Material, normal: Vec3, light_dir: Vec3, light_diffuse: Color) -> Color:
    """Lambertian contribution for a unit direction towards the light."""
    return material.diffuse * max(0.0, light_dir.dot(normal)) * light_diffuse


def specular_term(material: Material, normal: Vec3, light_dir: Vec3, view_dir: Vec3,
                  light_specular: Color) -> Color:
    """Phong highlight: reflected light direction against the view direction."""
    reflected = (-light_dir).reflect(normal)
    return material.specular * (max(0.0, reflected.dot(view_dir)) ** material.shininess) * light_specular


# Materials used by the built-in scenes

def diffuse(color: Color, ambient: float = 1.0, specular: float = 0.0, shininess: float = 0.0) -> Material:
    """An opaque Phong material tinted by color."""
    return Material(
        ambient=color * ambient,
        diffuse=color,
        specular=Color(1, 1, 1) * specular,
        shininess=shininess,
    )


def mirror(color: Color, power: Color = None, shininess: float = 40.0) -> Material:
    """A Phong material with a mirror reflection on top."""
    return Material(
        ambient=color * 3,
        diffuse=color,
        specular=Color(1, 0, 1),
        shininess=shininess,
        reflecting=True,
        reflecting_power=power if power is not None else Color(1, 1, 1),
    )


def glass(ior: float = 1.5) -> Material:
    """A faint dielectric that transmits most of what it sees."""
    return Material(
        ambient=Color(0.1, 0.1, 0.1),
        diffuse=Color(0.1, 0.1, 0.1),
        specular=Color(0.1, 0.1, 0.1),
        shininess=100,
        refracts=True,
        ior=ior,
    )


def checkerboard(size: float = 10.0, even: Color = None, odd: Color = None) -> Material:
    """A white Phong floor whose ambient term follows a checker pattern."""
    return Material(
        ambient=Color(0.1, 0.1, 0.1),
        diffuse=Color(1, 1, 1),
        specular=Color(1, 1, 1),
        shininess=100,
        checkerboard=True,
        checker_size=size,
        checker_even=even if even is not None else Color(1, 0, 0),
        checker_odd=odd if odd is not None else Color(0, 0, 1),
    )
