"""Tests for the built-in scenes."""

import pytest
from prismtrace.vec3 import Vec3, Point3
from prismtrace.ray import Ray
from prismtrace.shapes import Sphere, Plane
from prismtrace.scenes import (
    SCENES, create_scene, create_demo_scene, create_single_sphere_scene, default_camera
)


class TestBuiltInScenes:
    """Test scene construction."""

    def test_demo_contents(self):
        scene = create_demo_scene()
        kinds = [type(p) for p in scene]
        assert kinds.count(Sphere) == 4
        assert kinds.count(Plane) == 1
        assert any(p.material.refracts for p in scene)
        assert any(p.material.reflecting for p in scene)
        assert any(p.material.checkerboard for p in scene)

    def test_single_sphere(self):
        scene = create_single_sphere_scene()
        sphere = scene.primitives[0]
        assert sphere.center == Point3(0, 0, 0)
        assert sphere.radius == 2
        assert not sphere.material.reflecting

    def test_default_camera_sees_sphere(self):
        scene = create_single_sphere_scene()
        camera = default_camera(4 / 3)
        hit = scene.nearest_hit(camera.get_ray(0.5, 0.5))
        assert hit.primitive is scene.primitives[0]
        assert hit.distance == pytest.approx(8.0)

    @pytest.mark.parametrize("name", SCENES)
    def test_lookup(self, name):
        assert len(create_scene(name)) > 0

    def test_unknown(self):
        with pytest.raises(KeyError):
            create_scene('cornell')
