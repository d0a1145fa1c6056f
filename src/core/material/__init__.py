from core.material.material import material, scatter_record
from core.material.lambertian import lambertian
from core.material.metal import metal
from core.material.dielectric import dielectric

__all__ = ['material', 'scatter_record', 'lambertian', 'metal', 'dielectric']
