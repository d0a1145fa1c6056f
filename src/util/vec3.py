import math
import random


class vec3:
    """Three component float vector used for points, directions and colors."""

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def random(cls, min: float = 0.0, max: float = 1.0, rng: random.Random = None):
        rng = rng or random
        return cls(rng.uniform(min, max), rng.uniform(min, max), rng.uniform(min, max))

    def __add__(self, other):
        return vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __iadd__(self, other):
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def __sub__(self, other):
        return vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self):
        return vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        # vec3 * vec3 is the component-wise (Hadamard) product, used for color attenuation
        if isinstance(other, vec3):
            return vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, t: float):
        return vec3(self.x / t, self.y / t, self.z / t)

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y, self.z)[i]

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if not isinstance(other, vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self):
        return f"vec3({self.x}, {self.y}, {self.z})"

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def near_zero(self) -> bool:
        """True if the vector is close to zero in all dimensions"""
        s = 1e-8
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)


point3 = vec3


def dot(u: vec3, v: vec3) -> float:
    return u.x * v.x + u.y * v.y + u.z * v.z


def cross(u: vec3, v: vec3) -> vec3:
    return vec3(u.y * v.z - u.z * v.y,
                u.z * v.x - u.x * v.z,
                u.x * v.y - u.y * v.x)


def unit_vector(v: vec3) -> vec3:
    """Normalize v. A zero-length vector stays zero rather than dividing by zero."""
    length = v.length()
    if length == 0.0:
        return vec3(0, 0, 0)
    return v / length


def reflect(v: vec3, n: vec3) -> vec3:
    """Reflect vector v around normal n"""
    return v - 2.0 * dot(v, n) * n


def refract(uv: vec3, n: vec3, etai_over_etat: float) -> vec3:
    """Snell's law refraction of unit vector uv through a surface with normal n"""
    cos_theta = min(dot(-uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * n
    return r_out_perp + r_out_parallel


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
