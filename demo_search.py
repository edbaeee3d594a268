"""
demo_search.py
────────────────────────────────────────────────────────────────────────────
Classroom demo: runs both colony searches on small built-in maps and prints
what each one found.

Scenarios:
  1. Ant colony: cheapest-looking flight path between two Colombian airports
  2. Bee colony: antenna placement over a small campus polygon

Run:
    python demo_search.py            # random run
    RANDOM_SEED=7 python demo_search.py
────────────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import logging
import random

import config
from schemas.graph import ACOParameters, NetworkNode, NetworkRoute
from schemas.placement import OptimizationConfig, Polygon
from modules.optimization.aco_optimizer import ACOPathFinder
from modules.planning.network_builder import build_network_graph
from modules.placement.bee_optimizer import optimize_placement

# ─────────────────────────────────────────────────────────────────────────────
# Display helpers
# ─────────────────────────────────────────────────────────────────────────────

WIDTH = 66

def _banner(title: str) -> None:
    print("\n" + "═" * WIDTH)
    print(f"  {title}")
    print("═" * WIDTH)

def _row(label: str, value: object) -> None:
    print(f"  {label:<22}{value}")


# ─────────────────────────────────────────────────────────────────────────────
# Sample data
# ─────────────────────────────────────────────────────────────────────────────

AIRPORTS = [
    NetworkNode(1, "Bogotá El Dorado",          4.7016,  -74.1469),
    NetworkNode(2, "Medellín José María Córdova", 6.1645, -75.4231),
    NetworkNode(3, "Cali Alfonso Bonilla Aragón", 3.5432, -76.3816),
    NetworkNode(4, "Cartagena Rafael Núñez",   10.4424,  -75.5130),
    NetworkNode(5, "Barranquilla Ernesto Cortissoz", 10.8896, -74.7808),
    NetworkNode(6, "Santa Marta Simón Bolívar", 11.1196, -74.2306),
    NetworkNode(7, "Bucaramanga Palonegro",     7.1265,  -73.1848),
    NetworkNode(8, "Pereira Matecaña",          4.8127,  -75.7395),
]

_ROUTE_PAIRS = [
    (1, 2), (1, 3), (1, 4), (1, 5), (1, 7), (1, 8),
    (2, 4), (2, 5), (2, 3), (3, 8), (8, 2), (7, 5),
    (5, 6), (4, 6), (3, 4),
]
# every pair flies both ways
ROUTES = [NetworkRoute(a, b) for a, b in _ROUTE_PAIRS] + \
         [NetworkRoute(b, a) for a, b in _ROUTE_PAIRS]

CAMPUS = Polygon.from_pairs([
    (4.7000, -74.9050),
    (4.7000, -74.8960),
    (4.7060, -74.8940),
    (4.7090, -74.9000),
    (4.7060, -74.9060),
])


# ─────────────────────────────────────────────────────────────────────────────
# Scenarios
# ─────────────────────────────────────────────────────────────────────────────

def run_path_demo(rng: random.Random) -> None:
    _banner("SCENARIO 1: ant colony path search (Cali → Santa Marta)")
    names = {a.node_id: a.name for a in AIRPORTS}
    graph = build_network_graph(AIRPORTS, ROUTES)
    params = ACOParameters(iterations=30, agents_per_round=50)

    result = ACOPathFinder(graph, params, rng).run(source=3, target=6)
    _row("Reached target:", result.reached_target)
    _row("Distance (km):", f"{result.cost:,.1f}")
    _row("Fit agents:", result.fit_agents)
    for hop, node_id in enumerate(result.path):
        _row(f"  stop {hop}:", names[node_id])


def run_placement_demo(rng: random.Random) -> None:
    _banner("SCENARIO 2: bee colony antenna placement (campus)")
    opt_config = OptimizationConfig(
        polygon=CAMPUS,
        max_devices=10,
        max_iterations=30,
        initial_population_size=50,
    )
    result = optimize_placement(opt_config, rng=rng)
    _row("Antennas placed:", len(result.devices))
    _row("Coverage:", f"{result.coverage_percent:.1f}%")
    _row("Total cost:", f"{result.total_cost:,.0f}")
    for i, d in enumerate(result.devices):
        _row(f"  antenna {i}:", f"({d.location.lat:.5f}, {d.location.lng:.5f}) r={d.range:.0f} m")


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    rng = random.Random(config.RANDOM_SEED)
    run_path_demo(rng)
    run_placement_demo(rng)
    print()


if __name__ == "__main__":
    main()
