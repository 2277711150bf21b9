"""
PrismTrace - A Python Whitted-style Ray Tracer

Recursive ray tracing of analytic primitives with:
- Phong shading with hard shadows from a point light
- Mirror reflection and dielectric refraction with IoR tracking
- Procedural checkerboard floors
- Jittered supersampling rendered in parallel across rows
- Packed RGBA output saved through Pillow
"""

__version__ = "0.1.0"
__author__ = "PrismTrace Team"

from .errors import SceneConfigError, RenderCancelled
from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import HitRecord, Primitive, Sphere, Plane, Scene
from .materials import Material
from .lights import PointLight
from .camera import Camera
from .tracer import Tracer
from .renderer import (
    Renderer, RenderSettings, RenderResult, RenderStats,
    pack_color, unpack_pixel, encode_channel
)
from .image import save_pixels, to_pil
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import create_demo_scene, create_single_sphere_scene, default_camera, create_scene
