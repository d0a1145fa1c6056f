import random
from typing import Optional

from core.hittable import hit_record
from core.material.material import material, scatter_record, check_albedo
from util.color import color
from util.ray import Ray
from util.sampling import random_unit_vector
from util.vec3 import dot, reflect, clamp


class metal(material):
    """Specular reflector; fuzz (roughness) in [0, 1] perturbs the mirror direction"""

    def __init__(self, albedo: color, fuzz: float = 0.0):
        self.albedo = check_albedo(albedo)
        self.fuzz = clamp(fuzz, 0.0, 1.0)

    def scatter(self, r_in: Ray, rec: hit_record, rng: random.Random) -> Optional[scatter_record]:
        reflected = reflect(r_in.direction, rec.normal)
        if self.fuzz > 0.0:
            reflected = reflected + self.fuzz * random_unit_vector(rng)

        # Absorb rays that would leave below the surface
        if dot(reflected, rec.normal) <= 0:
            return None
        return scatter_record(self.albedo, Ray(rec.p, reflected))

    def __repr__(self):
        return f"metal({self.albedo!r}, {self.fuzz})"
