"""
modules/tool_usage/distance_tool.py
-------------------------------------
Arithmetic tool: great-circle distance between two geographic coordinates.
Local computation, no external API.

  - haversine_m  : metres, used for antenna range checks (antenna ranges are metres)
  - DistanceTool : km or miles, used for edge distances of route networks
"""

from __future__ import annotations
import math
import config


# Earth radius constants (mean radius, same value map libraries use)
_EARTH_RADIUS_M = 6371000.0
_EARTH_RADIUS_KM = 6371.0
_KM_TO_MILES = 0.621371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between (lat1, lon1) and (lat2, lon2), in degrees."""
    lat1_rad, lat2_rad = math.radians(lat1), math.radians(lat2)
    half_dlat = math.radians(lat2 - lat1) / 2
    half_dlon = math.radians(lon2 - lon1) / 2

    h = math.sin(half_dlat) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(half_dlon) ** 2
    return 2 * _EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in metres."""
    return haversine_km(lat1, lon1, lat2, lon2) * (_EARTH_RADIUS_M / _EARTH_RADIUS_KM)


class DistanceTool:
    """
    Wraps distance calculation logic for network building.
    """

    def __init__(self, unit: str = config.DISTANCE_UNIT):
        self.unit = unit

    def calculate(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """
        Compute distance between two geographic points.

        Args:
            lat1, lon1: Start point (decimal degrees).
            lat2, lon2: End point (decimal degrees).

        Returns:
            Distance in self.unit ("km" or "miles").
        """
        km = haversine_km(lat1, lon1, lat2, lon2)
        if self.unit == "miles":
            return km * _KM_TO_MILES
        return km  # default: km
