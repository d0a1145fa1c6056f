from util.vec3 import vec3, point3, unit_vector


class Ray:
    """
    Half-line from origin along direction.

    The direction is normalized once here, so the parameter t of at(t) is the
    distance travelled along the ray. A zero direction marks the ray degenerate.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: point3, direction: vec3):
        self.origin = origin
        self.direction = unit_vector(direction)

    def at(self, t: float) -> point3:
        return self.origin + self.direction * t

    @property
    def is_degenerate(self) -> bool:
        return self.direction.length_squared() == 0.0

    def __repr__(self):
        return f"Ray({self.origin!r}, {self.direction!r})"
