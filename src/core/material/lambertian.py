import random
from typing import Optional

from core.hittable import hit_record
from core.material.material import material, scatter_record, check_albedo
from util.color import color
from util.ray import Ray
from util.sampling import random_unit_vector


class lambertian(material):
    """Diffuse surface"""

    def __init__(self, albedo: color):
        self.albedo = check_albedo(albedo)

    @classmethod
    def from_color(cls, albedo: color):
        return cls(albedo)

    def scatter(self, r_in: Ray, rec: hit_record, rng: random.Random) -> Optional[scatter_record]:
        scatter_direction = rec.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return scatter_record(self.albedo, Ray(rec.p, scatter_direction))

    def __repr__(self):
        return f"lambertian({self.albedo!r})"
