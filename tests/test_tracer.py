"""Tests for the recursive tracer and shading model."""

import pytest
from prismtrace.vec3 import Vec3, Point3, Color
from prismtrace.ray import Ray
from prismtrace.shapes import Sphere, Plane, Scene
from prismtrace.materials import Material, glass, mirror
from prismtrace.lights import PointLight
from prismtrace.renderer import RenderSettings
from prismtrace.tracer import Tracer


class RecordingTracer(Tracer):
    """Tracer that remembers every call to trace()."""

    def __init__(self, scene, settings):
        super().__init__(scene, settings)
        self.calls = []

    def trace(self, ray, current_ior, previous_ior, depth=0):
        self.calls.append((ray, current_ior, previous_ior, depth))
        return super().trace(ray, current_ior, previous_ior, depth)


def make_settings(**kwargs):
    params = dict(width=4, height=4, num_threads=1)
    params.update(kwargs)
    return RenderSettings(**params)


class TestTraceTermination:
    """Test the depth bound and misses."""

    def test_max_depth_returns_background(self):
        background = Color(0.2, 0.3, 0.4)
        settings = make_settings(max_depth=3, background=background)
        scene = Scene([Sphere(Point3(0, 0, 0), 1.0, Material())])
        tracer = Tracer(scene, settings)

        color = tracer.trace(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 1.0, 1.0, depth=3)
        assert color == background
        assert tracer.rays_fired == 0

    def test_miss_returns_background(self):
        background = Color(0.2, 0.3, 0.4)
        tracer = Tracer(Scene(), make_settings(background=background))

        color = tracer.trace(Ray(Point3(0, 0, 0), Vec3(0, 0, 1)), 1.0, 1.0)
        assert color == background
        assert tracer.rays_fired == 1

    def test_facing_mirrors_stop_at_max_depth(self):
        settings = make_settings(max_depth=5)
        both_ways = mirror(Color(1, 1, 1))
        scene = Scene([
            Plane(Point3(0, 0, 0), Vec3(0, 0, 1), both_ways),
            Plane(Point3(0, 0, 5), Vec3(0, 0, -1), both_ways),
        ])
        tracer = RecordingTracer(scene, settings)

        tracer.trace(Ray(Point3(0, 0, 2.5), Vec3(0, 0, 1)), 1.0, 1.0)

        assert tracer.rays_fired == 5
        assert max(depth for _, _, _, depth in tracer.calls) == 5


class TestShading:
    """Test shadows and local illumination."""

    def setup_method(self):
        self.floor = Material(
            ambient=Color(1, 1, 1),
            diffuse=Color(1, 1, 1),
            specular=Color(0, 0, 0),
        )
        self.light = PointLight(position=Point3(0, 10, 0))
        self.settings = make_settings(light=self.light)
        self.ray = Ray(Point3(3, 5, 0), Vec3(-3, -5, 0))

    def trace(self, *extra):
        scene = Scene([Plane(Point3(0, 0, 0), Vec3(0, 1, 0), self.floor), *extra])
        return Tracer(scene, self.settings).trace(self.ray, 1.0, 1.0)

    def test_unoccluded(self):
        color = self.trace()
        # ambient 0.1 plus diffuse 0.4 with the light straight above
        assert color == Color(0.5, 0.5, 0.5)

    def test_occluded_is_ambient_only(self):
        blocker = Sphere(Point3(0, 5, 0), 1.0, Material())
        color = self.trace(blocker)
        assert color == Color(0.1, 0.1, 0.1)
        assert sum(color) < sum(self.trace())

    def test_occluder_beyond_light_casts_no_shadow(self):
        beyond = Sphere(Point3(0, 15, 0), 1.0, Material())
        assert self.trace(beyond) == self.trace()

    def test_checkerboard_ambient(self):
        self.floor = Material(
            diffuse=Color(0, 0, 0),
            checkerboard=True,
            checker_even=Color(0, 1, 0),
        )
        # Hit point (5, 0, 5) lies in tile (0, 0)
        self.ray = Ray(Point3(5, 5, 5), Vec3(0, -1, 0))
        assert self.trace() == Color(0, 0.1, 0)


class TestReflection:
    """Test the mirror term."""

    def test_reflected_background_is_weighted(self):
        plate = Material(
            ambient=Color(0, 0, 0),
            diffuse=Color(0, 0, 0),
            specular=Color(0, 0, 0),
            reflecting=True,
            reflecting_power=Color(0.5, 0.25, 0),
        )
        scene = Scene([Plane(Point3(0, 0, 0), Vec3(0, 0, -1), plate)])
        settings = make_settings(background=Color(1, 1, 1))
        tracer = RecordingTracer(scene, settings)

        color = tracer.trace(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 1.0, 1.0)

        assert color == Color(0.5, 0.25, 0)
        reflected = tracer.calls[1][0]
        assert reflected.direction == Vec3(0, 0, -1)
        assert tracer.calls[1][3] == 1

    def test_reflection_adds_to_local_shading(self):
        base = dict(ambient=Color(1, 1, 1), diffuse=Color(0, 0, 0))
        dull = Material(**base)
        shiny = Material(**base, reflecting=True, reflecting_power=Color(0.5, 0.5, 0.5))
        settings = make_settings(background=Color(0.2, 0.2, 0.2))
        ray = Ray(Point3(0, 0, -5), Vec3(0, 0, 1))

        dull_color = Tracer(Scene([Plane(Point3(0, 0, 0), Vec3(0, 0, -1), dull)]), settings).trace(ray, 1.0, 1.0)
        shiny_color = Tracer(Scene([Plane(Point3(0, 0, 0), Vec3(0, 0, -1), shiny)]), settings).trace(ray, 1.0, 1.0)

        assert shiny_color == dull_color + Color(0.1, 0.1, 0.1)


class TestRefraction:
    """Test transmission and IoR bookkeeping."""

    def test_round_trip_restores_ambient_ior(self):
        scene = Scene([Sphere(Point3(0, 0, 0), 1.0, glass(1.5))])
        tracer = RecordingTracer(scene, make_settings())

        tracer.trace(Ray(Point3(0, 0, -5), Vec3(0, 0, 1)), 1.0, 1.0)

        iors = [(current, previous, depth) for _, current, previous, depth in tracer.calls]
        assert iors == [(1.0, 1.0, 0), (1.5, 1.0, 1), (1.0, 1.0, 2)]

        inside, exited = tracer.calls[1][0], tracer.calls[2][0]
        assert inside.origin.length() < 1.0
        assert exited.origin.z > 1.0
        assert exited.direction == Vec3(0, 0, 1)

    def test_exit_returns_to_enclosing_medium(self):
        # A glass bead inside a water drop: leaving the bead lands in water
        scene = Scene([Sphere(Point3(0, 0, 0), 0.5, glass(1.5))])
        settings = make_settings(ambient_ior=1.0)
        tracer = RecordingTracer(scene, settings)

        tracer.trace(Ray(Point3(0, 0, -0.9), Vec3(0, 0, 1)), 1.33, 1.0)

        iors = [(current, previous) for _, current, previous, _ in tracer.calls]
        assert iors == [(1.33, 1.0), (1.5, 1.33), (1.33, 1.0)]

    def test_refracted_ray_bends_towards_normal(self):
        scene = Scene([Plane(Point3(0, 0, 0), Vec3(0, 1, 0), glass(1.5))])
        tracer = RecordingTracer(scene, make_settings())

        tracer.trace(Ray(Point3(-5, 5, 0), Vec3(1, -1, 0)), 1.0, 1.0)

        transmitted, current, previous, _ = tracer.calls[1]
        assert (current, previous) == (1.5, 1.0)
        assert transmitted.origin.y < 0
        assert transmitted.direction.x == pytest.approx((0.5 ** 0.5) / 1.5)

    def test_total_internal_reflection_stays_inside(self):
        scene = Scene([Sphere(Point3(0, 0, 0), 1.0, glass(1.5))])
        tracer = RecordingTracer(scene, make_settings(max_depth=3))

        tracer.trace(Ray(Point3(0, 0.9, 0), Vec3(0, 0, 1)), 1.5, 1.0)

        bounce, current, previous, depth = tracer.calls[1]
        assert depth == 1
        assert (current, previous) == (1.5, 1.0)
        assert bounce.direction.y < 0
        assert bounce.direction.z < 1.0
        assert bounce.origin.length() < 1.0
