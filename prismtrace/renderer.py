"""
Renderer module - maps pixels to camera rays and collects their colors.

Implements:
- Jittered supersampling with per-row random generators
- Multi-threaded row-based rendering
- Gamma encoding into packed 32-bit RGBA pixels
- Ray count and timing statistics
"""

from __future__ import annotations
import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Callable
import numpy as np

from .errors import SceneConfigError, RenderCancelled
from .vec3 import Color
from .camera import Camera
from .lights import PointLight
from .shapes import Scene
from .tracer import Tracer

LOGGER = logging.getLogger(__name__)

# Packed pixels are little-endian so the byte lanes read R, G, B, A.
PIXEL_DTYPE = np.dtype('<u4')
ALPHA_MASK = 0xFF << 24


@dataclass(frozen=True)
class RenderSettings:
    """Render-wide configuration shared read-only by every worker."""
    width: int = 800
    height: int = 600
    supersample: int = 4
    max_depth: int = 10
    num_threads: int = 0  # 0 = auto-detect
    background: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))
    light: PointLight = field(default_factory=PointLight)
    ambient_ior: float = 1.0  # Air
    gamma: float = 2.2
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise SceneConfigError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.supersample < 1:
            raise SceneConfigError(f"Supersample count must be >= 1, got {self.supersample}")
        if self.max_depth < 1:
            raise SceneConfigError(f"Max depth must be >= 1, got {self.max_depth}")
        if self.num_threads < 0:
            raise SceneConfigError(f"Thread count must be >= 0, got {self.num_threads}")
        if self.gamma <= 0:
            raise SceneConfigError(f"Gamma must be positive, got {self.gamma}")
        if self.ambient_ior <= 0:
            raise SceneConfigError(f"Ambient IoR must be positive, got {self.ambient_ior}")
        if self.num_threads == 0:
            object.__setattr__(self, 'num_threads', os.cpu_count() or 4)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass
class RenderStats:
    """Observational numbers gathered after a render."""
    rays_fired: int
    duration: float
    pixel_count: int

    @property
    def time_per_pixel(self) -> float:
        return self.duration / self.pixel_count if self.pixel_count else 0.0

    @property
    def time_per_ray(self) -> float:
        return self.duration / self.rays_fired if self.rays_fired else 0.0

    @property
    def rays_per_pixel(self) -> float:
        return self.rays_fired / self.pixel_count if self.pixel_count else 0.0


@dataclass
class RenderResult:
    """A finished render: packed pixels plus statistics."""
    pixels: np.ndarray
    stats: RenderStats

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def bytes_per_row(self) -> int:
        return self.width * PIXEL_DTYPE.itemsize

    def rgba(self) -> np.ndarray:
        """The pixel buffer viewed as (height, width, 4) uint8 RGBA."""
        return self.pixels.view(np.uint8).reshape(self.height, self.width, 4)


def encode_channel(value: float, gamma: float = 2.2) -> int:
    """Clamp a linear channel to [0, 1], gamma encode it and scale to 8 bits."""
    clamped = min(max(value, 0.0), 1.0)
    return int(round(clamped ** (1.0 / gamma) * 255))


def pack_color(color: Color, gamma: float = 2.2) -> int:
    """Pack a linear color into a 32-bit pixel with R in the lowest byte."""
    r = encode_channel(color.r, gamma)
    g = encode_channel(color.g, gamma)
    b = encode_channel(color.b, gamma)
    return r | g << 8 | b << 16 | ALPHA_MASK


def unpack_pixel(pixel: int) -> tuple[int, int, int, int]:
    """Split a packed pixel into its (r, g, b, a) bytes."""
    pixel = int(pixel)
    return pixel & 0xFF, (pixel >> 8) & 0xFF, (pixel >> 16) & 0xFF, (pixel >> 24) & 0xFF


class Renderer:
    """Row-parallel supersampling renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Camera, cancel: Optional[threading.Event] = None) -> RenderResult:
        """Render the scene into a packed RGBA pixel buffer.

        Args:
            scene: The scene to render, not modified during the render
            camera: The camera to render from
            cancel: Optional event; rows not yet started are skipped once set

        Returns:
            RenderResult holding a (height, width) uint32 array and statistics

        Raises:
            RenderCancelled: If cancel was set before every row finished
        """
        settings = self.settings
        width, height = settings.width, settings.height
        pixels = np.zeros((height, width), dtype=PIXEL_DTYPE)

        # One independent generator per row keeps jitter thread-safe and
        # reproducible for a given seed whatever order the rows run in.
        row_seeds = np.random.SeedSequence(settings.seed).spawn(height)

        lock = threading.Lock()
        completed_rows = [0]

        def render_row(y: int) -> int:
            """Render one row into pixels[y] and return its ray count."""
            if cancel is not None and cancel.is_set():
                return 0

            tracer = Tracer(scene, settings)
            rng = np.random.default_rng(row_seeds[y])
            row = pixels[y]

            for x in range(width):
                row[x] = pack_color(self._sample_pixel(tracer, camera, rng, x, y), settings.gamma)

            with lock:
                completed_rows[0] += 1
                if self._progress_callback:
                    self._progress_callback(completed_rows[0] / height)

            return tracer.rays_fired

        LOGGER.debug("Rendering %dx%d, %d samples, %d threads, %d primitives",
                     width, height, settings.supersample, settings.num_threads, len(scene))
        start = time.perf_counter()

        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                ray_counts = list(executor.map(render_row, range(height)))
        else:
            ray_counts = [render_row(y) for y in range(height)]

        duration = time.perf_counter() - start

        if cancel is not None and completed_rows[0] < height:
            LOGGER.debug("Render cancelled after %d of %d rows", completed_rows[0], height)
            raise RenderCancelled(f"Render cancelled after {completed_rows[0]} of {height} rows")

        stats = RenderStats(rays_fired=sum(ray_counts), duration=duration, pixel_count=width * height)
        LOGGER.debug("Rendered in %.3fs, %d rays", duration, stats.rays_fired)
        return RenderResult(pixels=pixels, stats=stats)

    def _sample_pixel(self, tracer: Tracer, camera: Camera, rng: np.random.Generator, x: int, y: int) -> Color:
        """Average the traced color of the jittered samples in one pixel."""
        settings = self.settings
        samples = settings.supersample
        color = Color(0, 0, 0)

        for _ in range(samples):
            if samples > 1:
                offset_x, offset_y = rng.uniform(-0.5, 0.5, size=2)
            else:
                offset_x = offset_y = 0.0
            s = (x + 0.5 + offset_x) / settings.width
            t = (y + 0.5 + offset_y) / settings.height

            ray = camera.get_ray(s, t)
            color = color + tracer.trace(ray, settings.ambient_ior, settings.ambient_ior)

        return color / samples
