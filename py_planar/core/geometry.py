"""
Segment and ray intersection predicates.

Both predicates solve for the parametric coordinates of the crossing point
using cross products. A zero denominator (parallel or collinear inputs)
yields a non-finite parameter and is reported as "no intersection", so
collinear overlaps are never detected.
"""

import math
from typing import Optional

import numpy as np

from .vec2 import Vec2


def _parameter(numerator: float, denominator: float) -> float:
    """Divide like IEEE floats do: x/0 gives inf or nan instead of raising."""
    if denominator == 0:
        return math.nan
    return numerator / denominator


def segments_intersect(a0: Vec2, a1: Vec2, b0: Vec2, b1: Vec2) -> bool:
    """
    Test whether segment a0-a1 intersects segment b0-b1.

    Endpoints count as part of the segment, so segments touching at a
    single point intersect. Callers that want to allow shared endpoints
    must exclude those pairs themselves.

    Args:
        a0, a1: Endpoints of the first segment
        b0, b1: Endpoints of the second segment

    Returns:
        True if both parametric coordinates are finite and lie in [0, 1]
    """
    r = a1.sub(a0)
    s = b1.sub(b0)
    denominator = r.cross(s)
    q = b0.sub(a0)

    ta = _parameter(q.cross(s), denominator)
    tb = _parameter(q.cross(r), denominator)

    if not (math.isfinite(ta) and math.isfinite(tb)):
        return False

    return 0 <= ta <= 1 and 0 <= tb <= 1


def ray_segment_intersection(
    origin: Vec2, direction: Vec2, v0: Vec2, v1: Vec2
) -> Optional[Vec2]:
    """
    Intersect the ray origin + t * direction (t >= 0) with segment v0-v1.

    Returns:
        The intersection point, or None when the ray misses the segment
        or runs parallel to it
    """
    segment = v1.sub(v0)
    denominator = direction.cross(segment)
    origin_to_segment = v0.sub(origin)

    t_ray = _parameter(origin_to_segment.cross(segment), denominator)
    t_segment = _parameter(origin_to_segment.cross(direction), denominator)

    if not (math.isfinite(t_ray) and math.isfinite(t_segment)):
        return None
    if t_ray < 0 or t_segment < 0 or t_segment > 1:
        return None

    return Vec2(origin.x + direction.x * t_ray, origin.y + direction.y * t_ray)


def segments_intersect_many(
    a0: Vec2, a1: Vec2, starts: np.ndarray, ends: np.ndarray
) -> np.ndarray:
    """
    Vectorized segments_intersect of one segment against many.

    Args:
        a0, a1: Endpoints of the query segment
        starts: (n, 2) array of segment start points
        ends: (n, 2) array of segment end points

    Returns:
        Boolean array of length n
    """
    if len(starts) == 0:
        return np.zeros(0, dtype=bool)

    rx = a1.x - a0.x
    ry = a1.y - a0.y
    sx = ends[:, 0] - starts[:, 0]
    sy = ends[:, 1] - starts[:, 1]
    qx = starts[:, 0] - a0.x
    qy = starts[:, 1] - a0.y

    denominator = rx * sy - ry * sx

    with np.errstate(divide="ignore", invalid="ignore"):
        ta = (qx * sy - qy * sx) / denominator
        tb = (qx * ry - qy * rx) / denominator

    return (
        np.isfinite(ta)
        & np.isfinite(tb)
        & (ta >= 0) & (ta <= 1)
        & (tb >= 0) & (tb <= 1)
    )
