from core.interval import interval
from core.hittable import hittable, hit_record
from core.sphere import Sphere
from core.hittable_list import hittable_list
from core.camera import camera

__all__ = ['interval', 'hittable', 'hit_record', 'Sphere', 'hittable_list', 'camera']
