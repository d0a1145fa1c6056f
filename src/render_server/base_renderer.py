import copy
import enum
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from core.camera import camera
from core.hittable import hittable
from core.interval import interval
from util.color import color, resolve_pixel
from util.ray import Ray


class RenderState(enum.Enum):
    """Lifecycle of a renderer. Only ever advances SETUP -> ACTIVE -> COMPLETE."""
    SETUP = 0
    ACTIVE = 1
    COMPLETE = 2


class RenderError(RuntimeError):
    """A render failed in a way that cannot be recovered (worker crash, lost pixel)"""


@dataclass
class PathStatistics:
    """Per-path counters, accumulated per pixel and merged into the renderer's totals"""
    total_paths: int = 0
    total_path_depth: int = 0
    max_depth_terminations: int = 0
    absorbed: int = 0
    escaped: int = 0

    def merge(self, other: 'PathStatistics'):
        self.total_paths += other.total_paths
        self.total_path_depth += other.total_path_depth
        self.max_depth_terminations += other.max_depth_terminations
        self.absorbed += other.absorbed
        self.escaped += other.escaped


class BaseRenderer(ABC):
    """Abstract base class for renderers: owns the scene snapshot and the path tracing integrator"""

    def __init__(self, world: hittable, cam: camera):
        self.world = self._compile(world)

        self.cam = copy.deepcopy(cam)
        self.cam.initialize()

        # Rendering parameters
        self.max_depth = self.cam.max_depth
        self.t_min = 0.001                          # Shadow acne guard
        self.sky_bottom = color(1.0, 1.0, 1.0)
        self.sky_top = color(0.5, 0.7, 1.0)

        # Gamma corrected linear color per pixel, indexed [y, x], row 0 at the top
        self.framebuffer = np.zeros((self.cam.img_height, self.cam.img_width, 3), dtype=np.float64)

        self.statistics = PathStatistics()

    def _compile(self, world: hittable) -> hittable:
        """
        Hook for renderer-specific world preparation.
        The default takes a private copy so caller edits cannot reach an in-flight render.
        """
        return copy.deepcopy(world)

    @property
    def width(self) -> int:
        return self.cam.img_width

    @property
    def height(self) -> int:
        return self.cam.img_height

    def sky_color(self, r: Ray) -> color:
        """Vertical white to sky-blue gradient for rays that escape the scene"""
        t = 0.5 * (r.direction.y + 1.0)
        return (1.0 - t) * self.sky_bottom + t * self.sky_top

    def ray_color(self, r: Ray, depth: int, rng: random.Random,
                  stats: Optional[PathStatistics] = None) -> color:
        """
        Radiance arriving along r, estimated by path tracing.

        max_depth limits bounces, not primary rays: a ray that misses returns
        the sky at any depth, a hit with no bounces left returns black.
        The bounce loop carries the attenuation product instead of recursing.

        Args:
            r: Ray to trace
            depth: Number of bounces already taken
            rng: Random stream for this pixel
            stats: Optional counters updated when the path ends
        """
        throughput = color(1.0, 1.0, 1.0)

        while True:
            rec = self.world.hit(r, interval.from_floats(self.t_min, math.inf))
            if rec is None:
                self._end_path(stats, depth, 'escaped')
                return throughput * self.sky_color(r)

            if depth >= self.max_depth:
                self._end_path(stats, depth, 'max_depth_terminations')
                return color(0, 0, 0)

            scattered = rec.material.scatter(r, rec, rng)
            if scattered is None:
                self._end_path(stats, depth, 'absorbed')
                return color(0, 0, 0)

            throughput = throughput * scattered.attenuation
            r = scattered.scattered
            depth += 1

    @staticmethod
    def _end_path(stats: Optional[PathStatistics], depth: int, outcome: str):
        if stats is None:
            return
        stats.total_paths += 1
        stats.total_path_depth += depth
        setattr(stats, outcome, getattr(stats, outcome) + 1)

    def sample_pixel(self, x: int, y: int, rng: random.Random,
                     stats: Optional[PathStatistics] = None) -> color:
        """Average samples_per_pixel jittered paths through pixel (x, y) and gamma correct"""
        accum = color(0, 0, 0)
        for _ in range(self.cam.samples_per_pixel):
            r = self.cam.get_pixel_ray(x, y, rng)
            accum += self.ray_color(r, 0, rng, stats)
        return resolve_pixel(accum, self.cam.samples_per_pixel)

    @property
    @abstractmethod
    def state(self) -> RenderState:
        pass

    @abstractmethod
    def progress(self) -> float:
        """Fraction of pixels finished, in [0, 1]"""
        pass

    @abstractmethod
    def render_async(self):
        """Start rendering in the background. Calling it again is a no-op."""
        pass

    @abstractmethod
    def is_complete(self) -> bool:
        pass

    @abstractmethod
    def copy_snapshot(self) -> Image.Image:
        """Return an independent RGBA image of the current progress"""
        pass

    def get_statistics(self) -> dict:
        """Return rendering statistics as a dictionary"""
        stats = self.statistics
        if stats.total_paths == 0:
            return {}

        return {
            'average_path_depth': stats.total_path_depth / stats.total_paths,
            'max_depth': self.max_depth,
            'max_depth_terminations': stats.max_depth_terminations,
            'max_depth_percentage': stats.max_depth_terminations / stats.total_paths * 100,
            'absorbed': stats.absorbed,
            'escaped': stats.escaped,
            'total_paths': stats.total_paths,
        }

    def print_statistics(self):
        """Print rendering statistics to console"""
        stats = self.get_statistics()
        if not stats:
            return

        print(f"\nDepth Statistics:")
        print(f"  Average path depth: {stats['average_path_depth']:.2f} (max: {stats['max_depth']})")
        print(f"  Max depth terminations: {stats['max_depth_terminations']:,} ({stats['max_depth_percentage']:.1f}%)")
        print(f"  Absorbed: {stats['absorbed']:,} | Escaped to sky: {stats['escaped']:,}")
        print(f"  Total paths traced: {stats['total_paths']:,}")
