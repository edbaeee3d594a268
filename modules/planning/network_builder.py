"""
modules/planning/network_builder.py
-------------------------------------
Turns located nodes (e.g. airports) plus directed routes into a PheromoneGraph,
and maps a found path back to coordinates for drawing.

Rules:
  - every node becomes a vertex, even without routes
  - edge distance = great-circle distance between the two nodes (DistanceTool)
  - routes naming an unknown node are skipped
  - self-routes and zero-length routes are skipped (the graph rejects them)
  - a repeated source → target route replaces the earlier one
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional

import config
from schemas.graph import InvalidNode, NetworkNode, NetworkRoute, PheromoneGraph
from modules.tool_usage.distance_tool import DistanceTool

log = logging.getLogger(__name__)


def build_network_graph(
    nodes: Iterable[NetworkNode],
    routes: Iterable[NetworkRoute],
    evaporation_rate: float = config.ACO_EVAPORATION_RATE,
    initial_pheromone: float = config.ACO_INITIAL_PHEROMONE,
    distance_tool: Optional[DistanceTool] = None,
) -> PheromoneGraph:
    """
    Args:
        nodes             : Located vertices, keyed by node_id.
        routes            : Directed connections between node ids.
        evaporation_rate  : Passed to the PheromoneGraph.
        initial_pheromone : Passed to the PheromoneGraph.
        distance_tool     : Distance provider (default: km haversine).

    Returns:
        PheromoneGraph with one edge per usable route.
    """
    distance_tool = distance_tool or DistanceTool()
    by_id = {n.node_id: n for n in nodes}

    adjacency: dict[int, dict[int, float]] = {node_id: {} for node_id in by_id}
    skipped = 0
    for route in routes:
        source = by_id.get(route.source)
        target = by_id.get(route.target)
        if source is None or target is None:
            skipped += 1
            continue
        if source.node_id == target.node_id:
            skipped += 1
            continue

        distance = distance_tool.calculate(source.lat, source.lng, target.lat, target.lng)
        if distance <= 0.0:
            log.warning("Skipping zero-length route %s -> %s", source.node_id, target.node_id)
            skipped += 1
            continue
        adjacency[source.node_id][target.node_id] = distance

    if skipped:
        log.warning("Skipped %d unusable route(s)", skipped)

    return PheromoneGraph(
        adjacency,
        evaporation_rate=evaporation_rate,
        initial_pheromone=initial_pheromone,
    )


def path_to_coordinates(path: list[int], nodes: Iterable[NetworkNode]) -> list[tuple[float, float]]:
    """
    Map node ids to (lat, lng) pairs, in path order.

    Raises:
        InvalidNode if an id in path has no matching node.
    """
    by_id = {n.node_id: n for n in nodes}
    coords: list[tuple[float, float]] = []
    for node_id in path:
        node = by_id.get(node_id)
        if node is None:
            raise InvalidNode(node_id)
        coords.append((node.lat, node.lng))
    return coords
