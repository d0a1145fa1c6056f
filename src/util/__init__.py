from util.vec3 import vec3, point3, dot, cross, unit_vector, reflect, refract, clamp
from util.color import color, linear_to_gamma, resolve_pixel, to_rgba8
from util.ray import Ray
from util.sampling import (
    random_double,
    random_in_unit_sphere,
    random_unit_vector,
    random_in_unit_disk,
    pixel_seeds,
)

__all__ = [
    'vec3', 'point3', 'color', 'Ray',
    'dot', 'cross', 'unit_vector', 'reflect', 'refract', 'clamp',
    'linear_to_gamma', 'resolve_pixel', 'to_rgba8',
    'random_double', 'random_in_unit_sphere', 'random_unit_vector',
    'random_in_unit_disk', 'pixel_seeds',
]
