import random

import pytest

from schemas.placement import (
    Device,
    LatLng,
    OptimizationConfig,
    OptimizationResult,
    Polygon,
    SolutionScore,
)
from modules.placement.bee_optimizer import (
    _improves,
    evaluate_solution,
    generate_initial_population,
    optimize_placement,
)
from modules.placement.geometry import coverage_grid, point_in_polygon

GRID = 0.001


@pytest.fixture
def campus():
    # roughly 1.1 km × 1.1 km
    return Polygon.from_pairs([
        (4.700, -74.900),
        (4.700, -74.890),
        (4.710, -74.890),
        (4.710, -74.900),
    ])


def make_config(polygon, **overrides) -> OptimizationConfig:
    values = dict(
        polygon=polygon,
        max_devices=5,
        max_iterations=10,
        initial_population_size=30,
        max_range=500.0,
        max_cost=1000.0,
        perturbation=0.01,
        grid_step=GRID,
    )
    values.update(overrides)
    return OptimizationConfig(**values)


# ── Population ───────────────────────────────────────────────────────────────

def test_initial_population_inside_polygon(campus):
    population = generate_initial_population(campus, 40, 500.0, 1000.0, random.Random(1))
    assert 0 < len(population) <= 40
    for d in population:
        assert point_in_polygon(d.location, campus)
        assert 0.0 <= d.range < 500.0
        assert 0.0 <= d.cost < 1000.0
        assert 0.0 <= d.intensity < 1.0


def test_initial_population_drops_draws_outside():
    # triangle covering half of its bounding box
    triangle = Polygon.from_pairs([(0.0, 0.0), (0.0, 0.01), (0.01, 0.0)])
    population = generate_initial_population(triangle, 200, 100.0, 10.0, random.Random(2))
    assert 40 < len(population) < 160


# ── Fitness ──────────────────────────────────────────────────────────────────

def test_evaluate_full_and_empty_coverage(campus):
    center = LatLng(4.705, -74.895)
    full = evaluate_solution([Device(center, range=5000.0, cost=12.0)], campus, GRID)
    assert full.coverage_percent == 100.0
    assert full.total_cost == 12.0

    far = Device(LatLng(10.0, 10.0), range=10.0, cost=3.0)
    none = evaluate_solution([far, far], campus, GRID)
    assert none.coverage_percent == 0.0
    assert none.total_cost == 6.0


def test_evaluate_partial_coverage(campus):
    corner = Device(LatLng(4.700, -74.900), range=300.0, cost=1.0)
    score = evaluate_solution([corner], campus, GRID)
    assert 0.0 < score.coverage_percent < 50.0


def test_evaluate_counts_against_grid(campus):
    points = list(coverage_grid(campus, GRID))
    device = Device(points[0], range=0.0, cost=0.0)
    score = evaluate_solution([device], campus, GRID)
    assert score.coverage_percent == pytest.approx(100.0 / len(points))


def test_intensity_does_not_affect_score(campus):
    loc = LatLng(4.703, -74.897)
    dim = evaluate_solution([Device(loc, 400.0, 5.0, intensity=0.0)], campus, GRID)
    bright = evaluate_solution([Device(loc, 400.0, 5.0, intensity=1.0)], campus, GRID)
    assert dim == bright


def test_evaluate_empty_grid_scores_zero():
    assert evaluate_solution([], Polygon(), GRID) == SolutionScore(0.0, 0.0)


@pytest.mark.parametrize("candidate, accepted", [
    (SolutionScore(60.0, 900.0), True),   # more coverage, more cost
    (SolutionScore(40.0, 100.0), True),   # less coverage, less cost
    (SolutionScore(50.0, 500.0), False),  # tie
    (SolutionScore(40.0, 600.0), False),  # worse on both
])
def test_acceptance_rule(candidate, accepted):
    assert _improves(candidate, SolutionScore(50.0, 500.0)) is accepted


# ── Optimizer ────────────────────────────────────────────────────────────────

def test_zero_iterations_returns_initial_slice(campus):
    cfg = make_config(campus, max_iterations=0, max_devices=4)
    result = optimize_placement(cfg, rng=random.Random(7))

    population = generate_initial_population(
        campus, cfg.initial_population_size, cfg.max_range, cfg.max_cost, random.Random(7),
    )
    expected = population[:4]
    score = evaluate_solution(expected, campus, GRID)

    assert len(result.devices) == min(4, len(population))
    assert result.devices == expected
    assert result.coverage_percent == score.coverage_percent
    assert result.total_cost == score.total_cost


def test_same_seed_same_result(campus):
    cfg = make_config(campus)
    first = optimize_placement(cfg, rng=random.Random(42))
    second = optimize_placement(cfg, rng=random.Random(42))
    assert first == second


def test_result_respects_budget_and_polygon(campus):
    cfg = make_config(campus, max_devices=3)
    result = optimize_placement(cfg, rng=random.Random(5))
    assert isinstance(result, OptimizationResult)
    assert len(result.devices) <= 3
    assert 0.0 <= result.coverage_percent <= 100.0
    assert result.total_cost == pytest.approx(sum(d.cost for d in result.devices))
    assert all(point_in_polygon(d.location, campus) for d in result.devices)


def test_moves_only_change_locations(campus):
    cfg = make_config(campus, max_iterations=20, perturbation=0.004)
    result = optimize_placement(cfg, rng=random.Random(9))
    initial = generate_initial_population(
        campus, cfg.initial_population_size, cfg.max_range, cfg.max_cost, random.Random(9),
    )[:cfg.max_devices]
    assert [(d.range, d.cost, d.intensity) for d in result.devices] == \
           [(d.range, d.cost, d.intensity) for d in initial]


def test_should_stop_before_first_generation(campus):
    cfg = make_config(campus, max_iterations=50)
    stopped = optimize_placement(cfg, rng=random.Random(3), should_stop=lambda: True)
    baseline = optimize_placement(make_config(campus, max_iterations=0), rng=random.Random(3))
    assert stopped == baseline


def test_degenerate_polygon_gives_empty_result():
    flat = Polygon.from_pairs([(1.0, 1.0), (1.0, 1.0), (1.0, 1.0)])
    result = optimize_placement(make_config(flat), rng=random.Random(0))
    assert result == OptimizationResult(devices=[], coverage_percent=0.0, total_cost=0)
