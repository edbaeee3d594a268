"""
schemas/graph.py
----------------
Typed pheromone graph used by the ant colony path search.

Entities:
  GraphEdge       : (source, target, distance, pheromone)
  PheromoneGraph  : adjacency {source: {target: GraphEdge}}
  ACOParameters   : search hyperparameters (defaults from config.py)
  NetworkNode     : geographic node before it becomes a graph vertex
  NetworkRoute    : directed connection between two NetworkNodes

Pheromone rules:
  - every edge starts at initial_pheromone
  - deposit: τ_ij += (1 − evaporation_rate) × amount
  - evaporation is applied to the deposit only; there is no global decay pass,
    so τ_ij never decreases during a search. This mirrors the map demo's
    behaviour and is kept on purpose.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, KeysView, Mapping, Optional

import config


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class GraphError(ValueError):
    """Base class for graph lookups and construction failures."""


class InvalidNode(GraphError):
    """Raised when a node id is not part of the graph."""

    def __init__(self, node: int):
        self.node = node
        super().__init__(f"Invalid node {node}")


class InvalidEdge(GraphError):
    """Raised when an edge is missing or cannot be added."""

    def __init__(self, source: int, target: int, reason: str = "no such edge"):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid edge {source} -> {target}: {reason}")


# ─────────────────────────────────────────────────────────────────────────────
# Graph entities
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class GraphEdge:
    """A directed edge (i,j) with fixed distance and mutable pheromone τ_ij."""
    source: int = 0
    target: int = 0
    distance: float = 1.0
    pheromone: float = 0.0


class PheromoneGraph:
    """
    Directed weighted graph holding one pheromone level per edge.

    The graph is owned by the caller; searches only mutate pheromone levels.

    Usage:
        graph = PheromoneGraph({0: {1: 2.5, 2: 4.0}, 1: {2: 1.0}})
        graph.deposit_pheromone(0, 1, 0.4)
    """

    def __init__(
        self,
        adjacency: Optional[Mapping[int, Mapping[int, float]]] = None,
        evaporation_rate: float = config.ACO_EVAPORATION_RATE,
        initial_pheromone: float = config.ACO_INITIAL_PHEROMONE,
    ):
        """
        Args:
            adjacency         : {source: {target: distance}}. Nodes with an empty
                                mapping are kept as isolated vertices.
            evaporation_rate  : Fraction discounted from every deposit.
            initial_pheromone : τ assigned to every edge at construction.
        """
        self.evaporation_rate = evaporation_rate
        self.initial_pheromone = initial_pheromone
        self._adjacency: dict[int, dict[int, GraphEdge]] = {}

        for source, targets in (adjacency or {}).items():
            self.add_node(source)
            for target, distance in targets.items():
                self.add_edge(source, target, distance)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[int, int, float]],
        nodes: Iterable[int] = (),
        evaporation_rate: float = config.ACO_EVAPORATION_RATE,
        initial_pheromone: float = config.ACO_INITIAL_PHEROMONE,
    ) -> "PheromoneGraph":
        """Build a graph from (source, target, distance) triples. Duplicates are rejected."""
        graph = cls(evaporation_rate=evaporation_rate, initial_pheromone=initial_pheromone)
        for node in nodes:
            graph.add_node(node)
        for source, target, distance in edges:
            graph.add_edge(source, target, distance)
        return graph

    # ── Construction ──────────────────────────────────────────────────────────

    def add_node(self, node: int) -> None:
        self._adjacency.setdefault(node, {})

    def add_edge(self, source: int, target: int, distance: float) -> GraphEdge:
        if source == target:
            raise InvalidEdge(source, target, "self-referential edge")
        if distance <= 0.0:
            raise InvalidEdge(source, target, f"distance must be positive, got {distance}")
        if target in self._adjacency.get(source, {}):
            raise InvalidEdge(source, target, "duplicate edge")

        edge = GraphEdge(
            source=source,
            target=target,
            distance=float(distance),
            pheromone=self.initial_pheromone,
        )
        self.add_node(source)
        self.add_node(target)
        self._adjacency[source][target] = edge
        return edge

    # ── Lookups ───────────────────────────────────────────────────────────────

    @property
    def nodes(self) -> list[int]:
        return list(self._adjacency)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def edges(self) -> Iterator[GraphEdge]:
        for targets in self._adjacency.values():
            yield from targets.values()

    def neighbors(self, node: int) -> KeysView[int]:
        """
        Return the set of successors of node, in insertion order.

        Raises:
            InvalidNode if node is not in the graph.
        """
        if node not in self._adjacency:
            raise InvalidNode(node)
        return self._adjacency[node].keys()

    def get_edge(self, source: int, target: int) -> GraphEdge:
        try:
            return self._adjacency[source][target]
        except KeyError:
            raise InvalidEdge(source, target) from None

    def edge(self, source: int, target: int) -> tuple[float, float]:
        """Return (distance, pheromone) of edge source → target."""
        e = self.get_edge(source, target)
        return e.distance, e.pheromone

    def distance(self, source: int, target: int) -> float:
        return self.get_edge(source, target).distance

    def pheromone(self, source: int, target: int) -> float:
        return self.get_edge(source, target).pheromone

    # ── Pheromone updates ─────────────────────────────────────────────────────

    def set_pheromone(self, source: int, target: int, value: float) -> None:
        if value < 0.0:
            raise ValueError(f"Pheromone must be non-negative, got {value}")
        self.get_edge(source, target).pheromone = value

    def deposit_pheromone(self, source: int, target: int, amount: float) -> float:
        """
        τ_ij ← τ_ij + (1 − evaporation_rate) × amount

        Evaporation only discounts the new deposit; existing pheromone never
        decays, so τ_ij is non-decreasing over a search. The result is floored
        at 0 so a negative amount cannot break τ_ij ≥ 0.

        Returns:
            The updated τ_ij.
        """
        edge = self.get_edge(source, target)
        edge.pheromone = max(0.0, edge.pheromone + (1.0 - self.evaporation_rate) * amount)
        return edge.pheromone


# ─────────────────────────────────────────────────────────────────────────────
# Search parameters
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ACOParameters:
    """
    Tunable parameters for the ant colony path search.

    evaporation_rate and initial_pheromone only apply when the search builds
    its own PheromoneGraph from a plain adjacency mapping.
    """
    iterations: int = config.ACO_ITERATIONS              # exploration rounds
    agents_per_round: int = config.ACO_AGENTS_PER_ROUND  # ants spawned per round
    max_steps: int = config.ACO_MAX_STEPS                # step budget per ant
    alpha: float = config.ACO_ALPHA                      # pheromone weight
    beta: float = config.ACO_BETA                        # inverse-distance weight
    evaporation_rate: float = config.ACO_EVAPORATION_RATE
    initial_pheromone: float = config.ACO_INITIAL_PHEROMONE


# ─────────────────────────────────────────────────────────────────────────────
# Geographic network input
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class NetworkNode:
    """A located vertex, e.g. an airport."""
    node_id: int = 0
    name: str = ""
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class NetworkRoute:
    """A directed connection source → target between two NetworkNodes."""
    source: int = 0
    target: int = 0
