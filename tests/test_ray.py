"""Tests for Ray class."""

import pytest
import math
from prismtrace.vec3 import Vec3, Point3
from prismtrace.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_direction_is_normalized(self):
        ray = Ray(Point3(0, 0, 0), Vec3(0, 3, 4))
        assert abs(ray.direction.length() - 1.0) < 1e-12
        assert ray.direction == Vec3(0, 0.6, 0.8)

    def test_unbounded_by_default(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.max_distance == math.inf

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin


class TestRayTowards:
    """Test bounded rays between two points."""

    def test_bounded_by_target_distance(self):
        ray = Ray.towards(Point3(0, 0, 0), Point3(0, 10, 0))
        assert ray.max_distance == pytest.approx(10.0)
        assert ray.direction == Vec3(0, 1, 0)

    def test_reaches_target(self):
        start, end = Point3(1, 1, 1), Point3(4, 5, 1)
        ray = Ray.towards(start, end)
        assert ray.at(ray.max_distance) == end


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(2, 0, 0))
        assert ray.at(5) == Point3(5, 0, 0)
