"""
Scene description parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- A single point light
- Materials library
- Objects (spheres and planes with materials)

Example scene file:
```yaml
camera:
  position: [0, 0, -10]
  look_at: [0, 0, 0]
  up: [0, 1, 0]
  fov: 75

render:
  width: 800
  height: 600
  supersample: 4
  max_depth: 10
  background: [0, 0, 0]

light:
  position: [5, 10, -5]
  ambient: 0.1
  diffuse: 0.4
  specular: 0.8

materials:
  red:
    type: phong
    ambient: [3, 0, 0]
    diffuse: [1, 0, 0]
    specular: [1, 0, 1]
    shininess: 40
    reflecting: true

  lens:
    type: glass
    ior: 1.5

objects:
  - type: sphere
    center: [2, 2, 0]
    radius: 2
    material: red

  - type: plane
    point: [0, -5, 0]
    normal: [0, 1, 0]
    material: {type: checkerboard, size: 10}
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Tuple, Union
import yaml

from .errors import SceneConfigError
from .vec3 import Vec3, Color
from .camera import Camera
from .shapes import Sphere, Plane, Scene
from .materials import Material, glass, mirror, checkerboard
from .lights import PointLight
from .renderer import RenderSettings

LOGGER = logging.getLogger(__name__)


class SceneParseError(SceneConfigError):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.scene = Scene()
        self.light = PointLight()
        self.settings = RenderSettings()
        self.camera: Camera = None

    def parse_file(self, filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping")

        LOGGER.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if data.get('light') is not None:
            self._parse_light(self._section(data, 'light'))

        # Settings carry the light, and the camera needs their aspect ratio
        self._parse_settings(self._section(data, 'render'))

        # Parse materials first (objects reference them)
        if data.get('materials') is not None:
            self._parse_materials(data['materials'])

        if data.get('objects') is not None:
            self._parse_objects(data['objects'])

        self._parse_camera(self._section(data, 'camera'))

        LOGGER.debug("Parsed scene with %d primitives and %d materials",
                     len(self.scene), len(self.materials))
        return self.scene, self.camera, self.settings

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Return a mapping section, treating an empty key as no settings."""
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise SceneParseError(f"{name} must be a mapping, got {section!r}")
        return section

    def _parse_bool(self, data: Any, name: str) -> bool:
        if not isinstance(data, bool):
            raise SceneParseError(f"{name} must be true or false, got {data!r}")
        return data

    def _parse_float(self, data: Any, name: str) -> float:
        try:
            return float(data)
        except (TypeError, ValueError):
            raise SceneParseError(f"{name} must be a number, got {data!r}") from None

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(self._parse_float(c, 'Vec3 component') for c in data))
        elif isinstance(data, dict):
            return Vec3(
                self._parse_float(data.get('x', 0), 'x'),
                self._parse_float(data.get('y', 0), 'y'),
                self._parse_float(data.get('z', 0), 'z')
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, a mapping, a hex string or a grey level."""
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return Color(data, data, data)
        if isinstance(data, (list, tuple)):
            return self._parse_vec3(data)
        elif isinstance(data, dict):
            return Color(
                self._parse_float(data.get('r', 0), 'r'),
                self._parse_float(data.get('g', 0), 'g'),
                self._parse_float(data.get('b', 0), 'b')
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#') and len(data) == 7:
                try:
                    r, g, b = (int(data[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
                except ValueError:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from None
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        """Build one material from its description."""
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got {mat_data!r}")
        mat_type = str(mat_data.get('type', 'phong')).lower()

        if mat_type == 'phong':
            return Material(
                ambient=self._parse_color(mat_data.get('ambient', 0.1)),
                diffuse=self._parse_color(mat_data.get('diffuse', 0.5)),
                specular=self._parse_color(mat_data.get('specular', 0.0)),
                shininess=self._parse_float(mat_data.get('shininess', 0.0), 'shininess'),
                reflecting=self._parse_bool(mat_data.get('reflecting', False), 'reflecting'),
                reflecting_power=self._parse_color(mat_data.get('reflecting_power', 1.0)),
                refracts=self._parse_bool(mat_data.get('refracts', False), 'refracts'),
                ior=self._parse_float(mat_data.get('ior', 1.0), 'ior'),
                checkerboard=self._parse_bool(mat_data.get('checkerboard', False), 'checkerboard'),
                checker_size=self._parse_float(mat_data.get('checker_size', 10.0), 'checker_size'),
                checker_even=self._parse_color(mat_data.get('checker_even', [1, 0, 0])),
                checker_odd=self._parse_color(mat_data.get('checker_odd', [0, 0, 1])),
            )

        elif mat_type == 'mirror':
            color = self._parse_color(mat_data.get('color', [1, 0, 0]))
            power = self._parse_color(mat_data.get('reflecting_power', 1.0))
            shininess = self._parse_float(mat_data.get('shininess', 40.0), 'shininess')
            return mirror(color, power, shininess)

        elif mat_type == 'glass':
            return glass(self._parse_float(mat_data.get('ior', 1.5), 'ior'))

        elif mat_type == 'checkerboard':
            return checkerboard(
                self._parse_float(mat_data.get('size', 10.0), 'size'),
                self._parse_color(mat_data.get('even', [1, 0, 0])),
                self._parse_color(mat_data.get('odd', [0, 0, 1])),
            )

        else:
            raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("materials must be a mapping of name to material")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            raise SceneParseError("Every object needs a material")
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("objects must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object must be a mapping, got {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._parse_float(obj_data.get('radius', 1.0), 'radius')
                self.scene.add(Sphere(center, radius, material))

            elif obj_type == 'plane':
                point = self._parse_vec3(obj_data.get('point', [0, 0, 0]))
                normal = self._parse_vec3(obj_data.get('normal', [0, 1, 0]))
                self.scene.add(Plane(point, normal, material))

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_light(self, light_data: Dict[str, Any]) -> None:
        """Parse the point light section."""
        defaults = PointLight()
        self.light = PointLight(
            position=self._parse_vec3(light_data.get('position', list(defaults.position))),
            ambient=self._parse_color(light_data.get('ambient', list(defaults.ambient))),
            diffuse=self._parse_color(light_data.get('diffuse', list(defaults.diffuse))),
            specular=self._parse_color(light_data.get('specular', list(defaults.specular))),
        )

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        self.camera = Camera(
            position=self._parse_vec3(camera_data.get('position', [0, 0, -10])),
            look_at=self._parse_vec3(camera_data.get('look_at', [0, 0, 0])),
            up=self._parse_vec3(camera_data.get('up', [0, 1, 0])),
            fov=self._parse_float(camera_data.get('fov', 75), 'fov'),
            aspect_ratio=self.settings.aspect_ratio
        )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        seed = settings_data.get('seed')
        try:
            self.settings = RenderSettings(
                width=int(settings_data.get('width', 800)),
                height=int(settings_data.get('height', 600)),
                supersample=int(settings_data.get('supersample', 4)),
                max_depth=int(settings_data.get('max_depth', 10)),
                num_threads=int(settings_data.get('threads', 0)),
                background=self._parse_color(settings_data.get('background', [0, 0, 0])),
                light=self.light,
                ambient_ior=float(settings_data.get('ambient_ior', 1.0)),
                gamma=float(settings_data.get('gamma', 2.2)),
                seed=int(seed) if seed is not None else None
            )
        except SceneConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
