import math


class interval:
    """Closed range of ray parameters [min, max]"""

    def __init__(self, min: float = math.inf, max: float = -math.inf):
        self.min = min
        self.max = max

    @classmethod
    def from_floats(cls, min: float, max: float):
        return cls(min, max)

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def __repr__(self):
        return f"interval({self.min}, {self.max})"
