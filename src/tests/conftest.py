import random

import pytest

from core import camera, hittable_list, Sphere
from core.material import lambertian
from util import color, point3, vec3


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_camera():
    def _make_camera(width, height, samples=1, depth=1, vfov=90.0):
        """Pinhole camera at the origin looking down -Z"""
        cam = camera()
        cam.img_width = width
        cam.img_height = height
        cam.samples_per_pixel = samples
        cam.max_depth = depth
        cam.vfov = vfov
        cam.lookfrom = point3(0, 0, 0)
        cam.lookat = point3(0, 0, -1)
        cam.vup = vec3(0, 1, 0)
        return cam
    return _make_camera


GROUND_RADIUS = 1.0e5
GROUND_GAP = 0.01


@pytest.fixture
def ground_world():
    """
    Ground sphere so large it is effectively a plane just below the camera at
    the origin: rays pointing more than a fraction of a degree downward hit its
    top surface, rays pointing upward escape to the sky, and a diffuse bounce
    off the top surface always escapes.
    """
    world = hittable_list()
    world.add(Sphere.stationary(point3(0, -GROUND_RADIUS - GROUND_GAP, 0), GROUND_RADIUS,
                                lambertian.from_color(color(0.5, 0.5, 0.5))))
    return world
