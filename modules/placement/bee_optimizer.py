"""
modules/placement/bee_optimizer.py
------------------------------------
Bee colony style search that places antennas inside a polygon.

  1. population : initial_population_size draws in the bounding box; draws
                  inside the polygon become antennas with
                  range ~ U[0, max_range), cost ~ U[0, max_cost), intensity ~ U[0, 1)
                  (draws outside are dropped, so the population can be smaller)
  2. best       : first max_devices antennas of the population
  3. score      : coverage% = covered grid points / grid points × 100
                  cost      = Σ antenna cost
  4. generation : move every antenna by (U − 0.5) × perturbation per axis,
                  keep the old location if the move leaves the polygon,
                  score the first max_devices antennas and accept them if
                  coverage is strictly higher OR cost is strictly lower

The acceptance rule is not Pareto: a candidate can win on cost while losing
coverage. That is the demo's behaviour and is kept.
"""

from __future__ import annotations
import logging
import random
from dataclasses import replace
from typing import Callable, Optional

import config
from schemas.placement import (
    Device,
    LatLng,
    OptimizationConfig,
    OptimizationResult,
    Polygon,
    SolutionScore,
)
from modules.placement.geometry import (
    bounding_box,
    coverage_grid,
    point_in_polygon,
    random_point_in_box,
)
from modules.tool_usage.distance_tool import haversine_m

log = logging.getLogger(__name__)

StopCallback = Callable[[], bool]


# ─────────────────────────────────────────────────────────────────────────────
# Population
# ─────────────────────────────────────────────────────────────────────────────

def generate_initial_population(
    polygon: Polygon,
    population_size: int,
    max_range: float,
    max_cost: float,
    rng: random.Random,
) -> list[Device]:
    """
    Sample population_size candidate locations and keep those inside polygon.

    Returns:
        Between 0 and population_size antennas.
    """
    if not polygon.coordinates:
        return []
    box = bounding_box(polygon)

    devices: list[Device] = []
    for _ in range(population_size):
        location = random_point_in_box(box, rng)
        if point_in_polygon(location, polygon):
            devices.append(Device(
                location=location,
                range=rng.random() * max_range,
                cost=rng.random() * max_cost,
                intensity=rng.random(),
            ))
    return devices


def _explore(
    population: list[Device],
    polygon: Polygon,
    perturbation: float,
    rng: random.Random,
) -> list[Device]:
    """Exploratory move of every antenna; moves leaving the polygon are reverted."""
    moved: list[Device] = []
    for device in population:
        location = LatLng(
            device.location.lat + (rng.random() - 0.5) * perturbation,
            device.location.lng + (rng.random() - 0.5) * perturbation,
        )
        if point_in_polygon(location, polygon):
            moved.append(replace(device, location=location))
        else:
            moved.append(device)
    return moved


# ─────────────────────────────────────────────────────────────────────────────
# Fitness
# ─────────────────────────────────────────────────────────────────────────────

def evaluate_solution(
    devices: list[Device],
    polygon: Polygon,
    grid_step: float = config.BCO_GRID_STEP_DEG,
) -> SolutionScore:
    """
    Score a set of antennas against a fresh coverage grid of polygon.

    A grid point is covered when its great-circle distance to some antenna
    is ≤ that antenna's range (metres).

    Returns:
        SolutionScore. An empty grid scores 0% coverage.
    """
    total = 0
    covered = 0
    for point in coverage_grid(polygon, grid_step):
        total += 1
        if any(
            haversine_m(point.lat, point.lng, d.location.lat, d.location.lng) <= d.range
            for d in devices
        ):
            covered += 1

    coverage = covered / total * 100.0 if total else 0.0
    return SolutionScore(
        coverage_percent=coverage,
        total_cost=sum(d.cost for d in devices),
    )


def _improves(candidate: SolutionScore, best: SolutionScore) -> bool:
    return (
        candidate.coverage_percent > best.coverage_percent
        or candidate.total_cost < best.total_cost
    )


# ─────────────────────────────────────────────────────────────────────────────
# Optimizer
# ─────────────────────────────────────────────────────────────────────────────

def optimize_placement(
    opt_config: OptimizationConfig,
    rng: Optional[random.Random] = None,
    should_stop: Optional[StopCallback] = None,
) -> OptimizationResult:
    """
    Run the bee colony placement search.

    Args:
        opt_config  : Polygon, antenna budget and search settings.
        rng         : Random source; a fresh one seeded from config.RANDOM_SEED
                      when omitted.
        should_stop : Optional callback checked once before every generation;
                      a truthy return ends the search with the best so far.

    Returns:
        OptimizationResult with at most max_devices antennas. An empty antenna
        list with 0% coverage means the polygon could not be sampled.
    """
    rng = rng if rng is not None else random.Random(config.RANDOM_SEED)
    polygon = opt_config.polygon

    population = generate_initial_population(
        polygon,
        opt_config.initial_population_size,
        opt_config.max_range,
        opt_config.max_cost,
        rng,
    )
    if not population:
        log.warning("No antenna could be placed inside the polygon (%d vertices)",
                    len(polygon.coordinates))

    best = population[:opt_config.max_devices]
    best_score = evaluate_solution(best, polygon, opt_config.grid_step)

    for generation in range(opt_config.max_iterations):
        if should_stop is not None and should_stop():
            log.info("Placement search stopped after %d generations", generation)
            break

        population = _explore(population, polygon, opt_config.perturbation, rng)
        candidate = population[:opt_config.max_devices]
        score = evaluate_solution(candidate, polygon, opt_config.grid_step)

        if _improves(score, best_score):
            best, best_score = candidate, score
            log.debug(
                "generation %d: accepted coverage=%.2f%% cost=%.2f",
                generation, score.coverage_percent, score.total_cost,
            )

    log.info(
        "Placement search: %d antennas, coverage=%.2f%%, cost=%.2f",
        len(best), best_score.coverage_percent, best_score.total_cost,
    )
    return OptimizationResult(
        devices=list(best),
        coverage_percent=best_score.coverage_percent,
        total_cost=best_score.total_cost,
    )
