"""
schemas/placement.py
--------------------
Dataclass definitions for the antenna placement problem.

Units:
  - coordinates : decimal degrees (lat, lng)
  - range       : metres
  - cost        : abstract cost units
  - intensity   : [0, 1], carried with each antenna but not used by scoring
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

import config


@dataclass(frozen=True)
class LatLng:
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class Polygon:
    """
    Ordered vertex ring. The closing edge (last → first) is implicit, so the
    first and last vertex need not repeat.
    """
    coordinates: list[LatLng] = field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, float]]) -> "Polygon":
        return cls([LatLng(lat, lng) for lat, lng in pairs])


@dataclass
class BoundingBox:
    south: float = 0.0
    west: float = 0.0
    north: float = 0.0
    east: float = 0.0


@dataclass
class Device:
    """A placed antenna."""
    location: LatLng = field(default_factory=LatLng)
    range: float = 0.0        # metres
    cost: float = 0.0
    intensity: float = 0.0    # inert


@dataclass
class SolutionScore:
    coverage_percent: float = 0.0   # [0, 100]
    total_cost: float = 0.0


@dataclass
class OptimizationConfig:
    """
    Inputs of one placement run.

    Every default comes from config.py.
    """
    polygon: Polygon = field(default_factory=Polygon)
    max_devices: int = config.BCO_MAX_DEVICES
    max_iterations: int = config.BCO_MAX_ITERATIONS
    initial_population_size: int = config.BCO_INITIAL_POPULATION
    max_range: float = config.BCO_MAX_RANGE_METERS
    max_cost: float = config.BCO_MAX_COST
    perturbation: float = config.BCO_PERTURBATION_DEG
    grid_step: float = config.BCO_GRID_STEP_DEG


@dataclass
class OptimizationResult:
    devices: list[Device] = field(default_factory=list)
    coverage_percent: float = 0.0
    total_cost: float = 0.0
