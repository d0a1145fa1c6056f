from typing import Optional

from core.hittable import hittable, hit_record
from core.interval import interval
from util.ray import Ray


class hittable_list(hittable):
    """Scene: an ordered collection of hittables queried by linear scan"""

    def __init__(self, objects=None):
        self.objects = list(objects) if objects is not None else []

    def add(self, obj: hittable):
        self.objects.append(obj)

    def __len__(self):
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, r: Ray, ray_t: interval) -> Optional[hit_record]:
        closest = None
        closest_so_far = ray_t.max

        for obj in self.objects:
            rec = obj.hit(r, interval(ray_t.min, closest_so_far))
            # Strict comparison so the first object found wins exact ties
            if rec is not None and (closest is None or rec.t < closest.t):
                closest = rec
                closest_so_far = rec.t

        return closest
