import math
from typing import Optional

from core.hittable import hittable, hit_record
from core.interval import interval
from util.ray import Ray
from util.vec3 import point3, dot, unit_vector


class Sphere(hittable):
    """
    Sphere primitive.

    center, radius and material can be reassigned between renders. Changing
    them while a render is active is a caller error; renderers work on their
    own snapshot of the scene.
    """

    def __init__(self, center: point3, radius: float, material=None):
        self.center = center
        self.radius = radius
        self.material = material

    @classmethod
    def stationary(cls, center: point3, radius: float, material):
        return cls(center, radius, material)

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float):
        if value <= 0:
            raise ValueError(f"Sphere radius must be positive, got {value}")
        self._radius = float(value)

    def hit(self, r: Ray, ray_t: interval) -> Optional[hit_record]:
        if r.is_degenerate:
            return None

        oc = r.origin - self.center
        a = r.direction.length_squared()
        half_b = dot(oc, r.direction)
        c = oc.length_squared() - self._radius * self._radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None
        sqrtd = math.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrtd) / a
        if not ray_t.contains(root):
            root = (-half_b + sqrtd) / a
            if not ray_t.contains(root):
                return None

        p = r.at(root)
        outward_normal = unit_vector(p - self.center)
        return hit_record.from_outward_normal(r, root, p, outward_normal, self.material)

    def __repr__(self):
        return f"Sphere({self.center!r}, {self._radius}, {self.material!r})"
