from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from core.interval import interval
from util.ray import Ray
from util.vec3 import vec3, point3, dot


@dataclass(frozen=True)
class hit_record:
    """
    Result of a successful intersection test.

    normal is unit length and always faces against the incoming ray;
    front_face tells whether the ray arrived from outside the surface.
    """
    p: point3
    normal: vec3
    t: float
    front_face: bool
    material: Any = None

    @classmethod
    def from_outward_normal(cls, r: Ray, t: float, p: point3, outward_normal: vec3, material=None):
        front_face = dot(r.direction, outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(p=p, normal=normal, t=t, front_face=front_face, material=material)


class hittable(ABC):
    """Anything a ray can be tested against"""

    @abstractmethod
    def hit(self, r: Ray, ray_t: interval) -> Optional[hit_record]:
        pass
