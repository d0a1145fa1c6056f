import math
import random

from util.ray import Ray
from util.sampling import random_in_unit_disk
from util.vec3 import vec3, point3, cross, unit_vector


class camera:
    """
    Thin-lens camera.

    Configure by setting attributes, then call initialize() to validate them
    and build the look-at frame:

        cam = camera()
        cam.img_width = 400
        cam.aspect_ratio = 16.0 / 9.0
        cam.lookfrom = point3(13, 2, 3)
        cam.initialize()

    img_height may be given directly; otherwise it is derived from aspect_ratio.
    """

    def __init__(self):
        self.aspect_ratio = 1.0
        self.img_width = 100
        self.img_height = None
        self.samples_per_pixel = 10
        self.max_depth = 10

        self.vfov = 90.0                    # Vertical field of view in degrees
        self.lookfrom = point3(0, 0, 0)
        self.lookat = point3(0, 0, -1)
        self.vup = vec3(0, 1, 0)

        self.aperture = 0.0                 # Lens diameter; 0 gives a pinhole camera
        self.focus_distance = None          # None focuses on lookat

        self._initialized = False

    @property
    def resolution(self) -> tuple:
        return (self.img_width, self.img_height)

    def initialize(self):
        if self.img_height is None:
            self.img_height = max(1, int(self.img_width / self.aspect_ratio))

        if self.img_width < 1 or self.img_height < 1:
            raise ValueError(f"image resolution must be at least 1x1, got {self.img_width}x{self.img_height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be >= 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must lie strictly between 0 and 180 degrees, got {self.vfov}")
        if self.aperture < 0.0:
            raise ValueError(f"aperture must be >= 0, got {self.aperture}")

        view = self.lookfrom - self.lookat
        if view.near_zero():
            raise ValueError("lookfrom and lookat must be distinct points")

        focus_distance = self.focus_distance if self.focus_distance is not None else view.length()
        if focus_distance <= 0.0:
            raise ValueError(f"focus_distance must be positive, got {focus_distance}")

        theta = math.radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = viewport_height * (self.img_width / self.img_height)

        # Orthonormal basis of the camera frame
        self.w = unit_vector(view)
        self.u = unit_vector(cross(self.vup, self.w))
        if self.u.near_zero():
            raise ValueError("vup must not be parallel to the viewing direction")
        self.v = cross(self.w, self.u)

        self.origin = self.lookfrom
        self.horizontal = focus_distance * viewport_width * self.u
        self.vertical = focus_distance * viewport_height * self.v
        self.lower_left_corner = (self.origin - self.horizontal / 2 - self.vertical / 2
                                  - focus_distance * self.w)
        self.lens_radius = self.aperture / 2

        self._initialized = True

    def get_ray(self, s: float, t: float, rng: random.Random = None) -> Ray:
        """
        Ray through normalized image plane coordinate (s, t), where (0, 0) is the
        lower left corner and (1, 1) the upper right.
        """
        if not self._initialized:
            raise RuntimeError("camera.initialize() must be called before generating rays")

        origin = self.origin
        if self.lens_radius > 0.0:
            rd = self.lens_radius * random_in_unit_disk(rng or random)
            origin = origin + self.u * rd.x + self.v * rd.y

        direction = self.lower_left_corner + s * self.horizontal + t * self.vertical - origin
        return Ray(origin, direction)

    def get_pixel_ray(self, i: int, j: int, rng: random.Random) -> Ray:
        """Jittered ray through pixel (i, j); row j = 0 is the top of the image"""
        s = (i + rng.random()) / self.img_width
        t = 1.0 - (j + rng.random()) / self.img_height
        return self.get_ray(s, t, rng)
