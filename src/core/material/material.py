import random
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from core.hittable import hit_record
from util.color import color
from util.ray import Ray


class scatter_record(NamedTuple):
    attenuation: color
    scattered: Ray


class material(ABC):
    """Decides how an incoming ray leaves a surface, or that it is absorbed"""

    @abstractmethod
    def scatter(self, r_in: Ray, rec: hit_record, rng: random.Random) -> Optional[scatter_record]:
        pass


def check_albedo(albedo: color) -> color:
    if not all(0.0 <= c <= 1.0 for c in albedo):
        raise ValueError(f"albedo components must lie in [0, 1], got {albedo!r}")
    return albedo
