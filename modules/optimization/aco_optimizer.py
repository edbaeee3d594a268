"""
modules/optimization/aco_optimizer.py
---------------------------------------
Ant Colony Optimization (ACO) path search between two nodes of a PheromoneGraph.

  agent_state:
    current    : i ∈ V, position of the agent
    visited    : set[node_id], nodes already stepped through (no revisits)
    path       : ordered list[node_id] from the source
    path_cost  : Σ D_ij over the steps taken
    status     : WALKING → FIT (current == target) | STUCK (no unvisited successor)

  selection:
    search agents   : roulette wheel over w_ij = τ_ij^α + (1/D_ij)^β
    solution agent  : argmax τ_ij^α

  reinforcement (after each round):
    every FIT agent deposits 1 / path_cost on each edge of its path
    (deposit discounted by the graph's evaporation rate, see schemas/graph.py)

  result:
    after all rounds a single greedy solution agent walks the reinforced graph
    (step cap: max_steps × 10). Its path is returned verbatim, even when it
    stalls before the target. Callers check path[-1] == target.

Defaults: iterations=100, agents_per_round=100, max_steps=100,
          α=0.7, β=0.3, evaporation=0.1, τ_init=1.0
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping, Optional, Union

import config
from schemas.graph import ACOParameters, InvalidNode, PheromoneGraph
from modules.optimization.heuristic import exploitation_weight, exploration_weight

log = logging.getLogger(__name__)

StopCallback = Callable[[], bool]

# Step budget multiplier for the final greedy walk
SOLUTION_STEP_FACTOR: int = 10


# ─────────────────────────────────────────────────────────────────────────────
# Search agent
# ─────────────────────────────────────────────────────────────────────────────

class AgentStatus(str, Enum):
    WALKING = "WALKING"
    FIT = "FIT"
    STUCK = "STUCK"


class SearchAgent:
    """
    A random walker from source towards target.

    A STUCK agent has no unvisited successor left; further steps are no-ops
    for the rest of its round.
    """

    def __init__(
        self,
        graph: PheromoneGraph,
        source: int,
        target: int,
        alpha: float,
        beta: float,
        rng: random.Random,
        is_solution_agent: bool = False,
    ):
        self.graph = graph
        self.source = source
        self.target = target
        self.alpha = alpha
        self.beta = beta
        self.rng = rng
        self.is_solution_agent = is_solution_agent

        self.current = source
        self.visited: set[int] = set()
        self.path: list[int] = [source]
        self.path_cost: float = 0.0
        self.status = AgentStatus.FIT if source == target else AgentStatus.WALKING

    @property
    def is_fit(self) -> bool:
        return self.status is AgentStatus.FIT

    def reached_target(self) -> bool:
        return self.current == self.target

    def take_step(self) -> bool:
        """
        Advance one edge. Returns False when the agent could not move
        (already at target or stuck).
        """
        if self.status is not AgentStatus.WALKING:
            return False

        self.visited.add(self.current)
        candidates = [n for n in self.graph.neighbors(self.current) if n not in self.visited]
        if not candidates:
            self.status = AgentStatus.STUCK
            return False

        if self.is_solution_agent:
            nxt = self._choose_best(candidates)
        else:
            nxt = self._choose_by_probability(candidates)

        self.path_cost += self.graph.distance(self.current, nxt)
        self.path.append(nxt)
        self.current = nxt
        if self.reached_target():
            self.status = AgentStatus.FIT
        return True

    # ── Selection policies ────────────────────────────────────────────────────

    def _choose_by_probability(self, candidates: list[int]) -> int:
        """
        Roulette wheel: first candidate whose normalized prefix sum reaches r.
        The last candidate is returned if rounding leaves every prefix below r.
        """
        weights: list[float] = []
        for node in candidates:
            distance, pheromone = self.graph.edge(self.current, node)
            weights.append(exploration_weight(pheromone, distance, self.alpha, self.beta))

        total = sum(weights)
        r = self.rng.random()
        cumulative = 0.0
        for node, w in zip(candidates, weights):
            cumulative += w
            if cumulative / total >= r:
                return node
        return candidates[-1]  # fallback

    def _choose_best(self, candidates: list[int]) -> int:
        """Greedy argmax of τ^α; ties keep the earliest candidate."""
        best = candidates[0]
        best_value = exploitation_weight(self.graph.pheromone(self.current, best), self.alpha)
        for node in candidates[1:]:
            value = exploitation_weight(self.graph.pheromone(self.current, node), self.alpha)
            if value > best_value:
                best, best_value = node, value
        return best

    # ── Reinforcement ─────────────────────────────────────────────────────────

    def deposit_pheromone_on_path(self) -> None:
        """Deposit 1 / path_cost on every edge of the recorded path."""
        if len(self.path) < 2:
            return
        amount = 1.0 / self.path_cost
        for i, j in zip(self.path, self.path[1:]):
            self.graph.deposit_pheromone(i, j, amount)


# ─────────────────────────────────────────────────────────────────────────────
# Orchestrator
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class PathResult:
    """Outcome of one ACO search."""
    path: list[int] = field(default_factory=list)
    cost: float = 0.0
    reached_target: bool = False
    rounds_completed: int = 0
    fit_agents: int = 0            # Σ over rounds of agents that reinforced


class ACOPathFinder:
    """
    ACO solver for a single source → target query.

    Usage:
        finder = ACOPathFinder(graph, ACOParameters(iterations=20), rng=random.Random(1))
        result = finder.run(source=0, target=7)
    """

    def __init__(
        self,
        graph: PheromoneGraph,
        params: Optional[ACOParameters] = None,
        rng: Optional[random.Random] = None,
    ):
        self.graph = graph
        self.params = params or ACOParameters()
        self.rng = rng if rng is not None else random.Random(config.RANDOM_SEED)

    # ── Public interface ──────────────────────────────────────────────────────

    def run(
        self,
        source: int,
        target: int,
        should_stop: Optional[StopCallback] = None,
    ) -> PathResult:
        """
        Execute params.iterations exploration rounds, then the solution walk.

        Args:
            source      : Start node id.
            target      : Goal node id.
            should_stop : Optional callback checked once before every round;
                          a truthy return skips the remaining rounds.

        Returns:
            PathResult of the solution agent.

        Raises:
            InvalidNode if source or target is not in the graph.
        """
        for node in (source, target):
            if node not in self.graph:
                raise InvalidNode(node)

        rounds = 0
        fit_total = 0
        for round_index in range(self.params.iterations):
            if should_stop is not None and should_stop():
                log.info("ACO search %s -> %s stopped after %d rounds", source, target, rounds)
                break

            agents = self._spawn_agents(source, target)
            self._search_forwards(agents)
            fit = self._search_backwards(agents)
            fit_total += fit
            rounds += 1
            log.debug("round %d: %d/%d agents reached target", round_index, fit, len(agents))

        solution = self._deploy_solution_agent(source, target)
        result = PathResult(
            path=list(solution.path),
            cost=solution.path_cost,
            reached_target=solution.reached_target(),
            rounds_completed=rounds,
            fit_agents=fit_total,
        )
        log.info(
            "ACO search %s -> %s: %d hops, cost %.3f, reached=%s",
            source, target, len(result.path) - 1, result.cost, result.reached_target,
        )
        return result

    # ── Phases ────────────────────────────────────────────────────────────────

    def _spawn_agents(self, source: int, target: int) -> list[SearchAgent]:
        return [
            SearchAgent(self.graph, source, target, self.params.alpha, self.params.beta, self.rng)
            for _ in range(self.params.agents_per_round)
        ]

    def _search_forwards(self, agents: list[SearchAgent]) -> None:
        for agent in agents:
            for _ in range(self.params.max_steps):
                if not agent.take_step():
                    break

    def _search_backwards(self, agents: list[SearchAgent]) -> int:
        """All fit agents reinforce equally, not only the round's best."""
        fit = 0
        for agent in agents:
            if agent.is_fit:
                agent.deposit_pheromone_on_path()
                fit += 1
        return fit

    def _deploy_solution_agent(self, source: int, target: int) -> SearchAgent:
        agent = SearchAgent(
            self.graph, source, target, self.params.alpha, self.params.beta, self.rng,
            is_solution_agent=True,
        )
        for _ in range(self.params.max_steps * SOLUTION_STEP_FACTOR):
            if not agent.take_step():
                break
        return agent


def find_path(
    graph: Union[PheromoneGraph, Mapping[int, Mapping[int, float]]],
    source: int,
    target: int,
    params: Optional[ACOParameters] = None,
    rng: Optional[random.Random] = None,
    should_stop: Optional[StopCallback] = None,
) -> list[int]:
    """
    Find a low-cost path source → target.

    A plain {from: {to: distance}} mapping is wrapped into a fresh PheromoneGraph
    using params.evaporation_rate and params.initial_pheromone.

    Returns:
        Ordered node ids starting at source. The path may be partial when no
        route was found; it ends at target only on success.
    """
    params = params or ACOParameters()
    if not isinstance(graph, PheromoneGraph):
        graph = PheromoneGraph(
            graph,
            evaporation_rate=params.evaporation_rate,
            initial_pheromone=params.initial_pheromone,
        )
    return ACOPathFinder(graph, params, rng).run(source, target, should_stop).path
