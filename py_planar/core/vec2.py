"""2D vector primitives used by every geometry routine."""

import math
from typing import NamedTuple


class Vec2(NamedTuple):
    """
    Immutable 2D point / vector.

    Arithmetic is exposed as named methods rather than operators because
    tuple ``+`` already means concatenation.
    """
    x: float = 0.0
    y: float = 0.0

    def sub(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def add(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def scale(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def cross(self, other: "Vec2") -> float:
        """Signed area of the parallelogram spanned by self and other."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        # hypot avoids overflow in the intermediate squares
        return math.hypot(self.x, self.y)
