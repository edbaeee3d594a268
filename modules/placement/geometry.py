"""
modules/placement/geometry.py
-------------------------------
Planar helpers over (lat, lng) polygons.

  point_in_polygon : even-odd ray casting, no validation of the polygon
  bounding_box     : min/max lat and lng over the vertices
  coverage_grid    : lazy grid of inside points at a fixed degree spacing
"""

from __future__ import annotations
import random
from typing import Iterator

from schemas.placement import BoundingBox, LatLng, Polygon


def point_in_polygon(point: LatLng, polygon: Polygon) -> bool:
    """
    Even-odd crossing test over consecutive vertex pairs (last → first wraps).

    Self-intersecting or < 3 vertex polygons return whatever the raw rule
    gives; nothing is raised.
    """
    coords = polygon.coordinates
    inside = False
    j = len(coords) - 1
    for i in range(len(coords)):
        xi, yi = coords[i].lat, coords[i].lng
        xj, yj = coords[j].lat, coords[j].lng
        if (yi > point.lng) != (yj > point.lng) and \
                point.lat < (xj - xi) * (point.lng - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def bounding_box(polygon: Polygon) -> BoundingBox:
    """
    Raises:
        ValueError if the polygon has no vertices.
    """
    if not polygon.coordinates:
        raise ValueError("Cannot compute bounding box of an empty polygon")
    lats = [c.lat for c in polygon.coordinates]
    lngs = [c.lng for c in polygon.coordinates]
    return BoundingBox(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))


def random_point_in_box(box: BoundingBox, rng: random.Random) -> LatLng:
    lat = rng.random() * (box.north - box.south) + box.south
    lng = rng.random() * (box.east - box.west) + box.west
    return LatLng(lat, lng)


def coverage_grid(polygon: Polygon, step: float) -> Iterator[LatLng]:
    """
    Yield grid points south → north, west → east, spaced by step degrees,
    that fall inside the polygon. Nothing is cached.

    Coordinates are computed as corner + k × step so the point count does
    not drift with accumulated rounding.

    Raises:
        ValueError if step is not positive.
    """
    if step <= 0.0:
        raise ValueError(f"Grid step must be positive, got {step}")
    if not polygon.coordinates:
        return
    box = bounding_box(polygon)

    i = 0
    lat = box.south
    while lat <= box.north:
        k = 0
        lng = box.west
        while lng <= box.east:
            point = LatLng(lat, lng)
            if point_in_polygon(point, polygon):
                yield point
            k += 1
            lng = box.west + k * step
        i += 1
        lat = box.south + i * step
