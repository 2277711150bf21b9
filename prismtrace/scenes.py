"""
Built-in scenes.

The demo shows every feature at once: mirror spheres, a glass lens in
front of them and a checkerboard floor. The single sphere scene is a
small, predictable setup for checking the renderer end to end.
"""

from __future__ import annotations

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, Plane, Scene
from .materials import Material, mirror, glass, checkerboard

SCENES = ('demo', 'single')


def create_demo_scene() -> Scene:
    """Three red mirror spheres, a glass lens and a checkerboard floor."""
    red_mirror = mirror(Color(1, 0, 0))
    lens = glass(1.5)
    floor = checkerboard(10.0)

    scene = Scene()
    scene.add(Sphere(Point3(2, 2, 0), 2, red_mirror))
    scene.add(Sphere(Point3(4, -1, -1), 1, red_mirror))
    scene.add(Sphere(Point3(-6, 2, 0), 4, red_mirror))
    scene.add(Sphere(Point3(0, 1.5, -4), 1.2, lens))
    scene.add(Plane(Point3(0, -5, 0), Vec3(0, 1, 0), floor))
    return scene


def create_single_sphere_scene() -> Scene:
    """An opaque red sphere at the origin above a grey ground plane."""
    red = Material(
        ambient=Color(1, 0, 0),
        diffuse=Color(1, 0, 0),
        specular=Color(0, 0, 0),
        shininess=10,
    )
    ground = Material(
        ambient=Color(0.2, 0.2, 0.2),
        diffuse=Color(0.5, 0.5, 0.5),
    )

    scene = Scene()
    scene.add(Sphere(Point3(0, 0, 0), 2, red))
    scene.add(Plane(Point3(0, -5, 0), Vec3(0, 1, 0), ground))
    return scene


def default_camera(aspect_ratio: float, fov: float = 75.0) -> Camera:
    """Camera at (0, 0, -10) looking at the origin."""
    return Camera(
        position=Point3(0, 0, -10),
        look_at=Point3(0, 0, 0),
        up=Vec3(0, 1, 0),
        fov=fov,
        aspect_ratio=aspect_ratio
    )


def create_scene(name: str) -> Scene:
    """Look up a built-in scene by name."""
    if name == 'demo':
        return create_demo_scene()
    if name == 'single':
        return create_single_sphere_scene()
    raise KeyError(f"Unknown built-in scene: {name}")
