"""Tests for the point light."""

import pytest
from prismtrace.errors import SceneConfigError
from prismtrace.vec3 import Point3, Color
from prismtrace.lights import PointLight


class TestPointLight:
    """Test PointLight configuration."""

    def test_defaults(self):
        light = PointLight()
        assert light.position == Point3(5, 10, -5)
        assert light.ambient == Color(0.1, 0.1, 0.1)
        assert light.diffuse == Color(0.4, 0.4, 0.4)
        assert light.specular == Color(0.8, 0.8, 0.8)

    def test_custom(self):
        light = PointLight(position=Point3(0, 1, 2), diffuse=Color(1, 0, 0))
        assert light.position == Point3(0, 1, 2)
        assert light.diffuse == Color(1, 0, 0)

    def test_negative_color(self):
        with pytest.raises(SceneConfigError):
            PointLight(specular=Color(0, -1, 0))

    def test_immutable(self):
        light = PointLight()
        with pytest.raises(AttributeError):
            light.position = Point3(0, 0, 0)
