"""
Camera module for generating primary rays.

A pinhole camera looking at a target point. The screen plane sits at the
focal distance (the distance to the target) and its size follows from the
horizontal field of view and the image aspect ratio.
"""

from __future__ import annotations
import math
from .errors import SceneConfigError
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with an orthonormal forward/right/up basis."""

    def __init__(
        self,
        position: Point3,
        look_at: Point3,
        up: Vec3 = None,
        fov: float = 75.0,
        aspect_ratio: float = 4.0 / 3.0
    ):
        """Create a camera.

        Args:
            position: Camera position in world space
            look_at: Point the camera is looking at, sets the focal distance
            up: World up vector (usually (0, 1, 0))
            fov: Horizontal field of view in degrees
            aspect_ratio: Width / Height ratio of the image

        Raises:
            SceneConfigError: If the basis is degenerate or the optics invalid
        """
        if up is None:
            up = Vec3(0, 1, 0)
        if not 0 < fov < 180:
            raise SceneConfigError(f"Field of view must be in (0, 180) degrees, got {fov}")
        if aspect_ratio <= 0:
            raise SceneConfigError(f"Aspect ratio must be positive, got {aspect_ratio}")

        view = look_at - position
        self.focal_distance = view.length()
        if self.focal_distance < 1e-9:
            raise SceneConfigError("Camera position and look-at point coincide")

        # Compute orthonormal camera basis
        self.forward = view / self.focal_distance
        right = up.cross(self.forward)
        if right.length() < 1e-9:
            raise SceneConfigError("Camera up vector is parallel to the view direction")
        self.right = right.normalize()
        self.up = self.forward.cross(self.right)

        self.position = position
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.width = 2.0 * self.focal_distance * math.tan(math.radians(fov) / 2.0)
        self.height = self.width / aspect_ratio

    def with_aspect_ratio(self, aspect_ratio: float) -> Camera:
        """Return a copy of this camera for an image of another shape."""
        return Camera(
            self.position,
            self.position + self.forward * self.focal_distance,
            self.up,
            self.fov,
            aspect_ratio
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a primary ray through the screen plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = top, 1 = bottom)

        Returns:
            An unbounded ray from the camera position through the screen point
        """
        x_screen = self.width * (s - 0.5)
        y_screen = self.height * (0.5 - t)
        screen_point = (
            self.position
            + self.forward * self.focal_distance
            + self.right * x_screen
            + self.up * y_screen
        )
        return Ray(self.position, screen_point - self.position)

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, forward={self.forward}, fov={self.fov})"
