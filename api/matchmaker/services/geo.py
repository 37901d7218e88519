import math

from ..config import EARTH_RADIUS


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def distance(lat1: float, lon1: float, lat2: float, lon2: float, radius: float = EARTH_RADIUS) -> float:
    """Great-circle distance by the spherical law of cosines.

    Inputs are degrees. The result is in the unit of ``radius`` (statute miles
    unless DISTANCE_UNIT=km). The cosine is clamped to [-1, 1] so nearly
    coincident points never produce NaN from floating-point overshoot;
    identical points are exactly 0.0.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlambda = math.radians(lon2) - math.radians(lon1)
    cos_angle = math.cos(phi1) * math.cos(phi2) * math.cos(dlambda) + math.sin(phi1) * math.sin(phi2)
    return radius * math.acos(_clamp(cos_angle))
