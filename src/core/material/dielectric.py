import math
import random
from typing import Optional

from core.hittable import hit_record
from core.material.material import material, scatter_record
from util.color import color
from util.ray import Ray
from util.vec3 import dot, reflect, refract


class dielectric(material):
    """
    Clear refractive material such as glass or water.

    ir is the refractive index relative to the enclosing medium. The surface
    never absorbs: each scatter either reflects or refracts, picked with
    Schlick's approximation of the Fresnel term.
    """

    def __init__(self, ir: float):
        if ir <= 0:
            raise ValueError(f"refractive index must be positive, got {ir}")
        self.ir = float(ir)

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for Fresnel reflectance"""
        r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
        r0 = r0 * r0
        return r0 + (1.0 - r0) * math.pow(1.0 - cosine, 5)

    def scatter(self, r_in: Ray, rec: hit_record, rng: random.Random) -> Optional[scatter_record]:
        attenuation = color(1.0, 1.0, 1.0)
        refraction_ratio = (1.0 / self.ir) if rec.front_face else self.ir

        unit_direction = r_in.direction
        cos_theta = min(dot(-unit_direction, rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or rng.random() < self.reflectance(cos_theta, refraction_ratio):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return scatter_record(attenuation, Ray(rec.p, direction))

    def __repr__(self):
        return f"dielectric({self.ir})"
