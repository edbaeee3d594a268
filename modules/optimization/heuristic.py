"""
modules/optimization/heuristic.py
-----------------------------------
Desirability functions used by search agents to rank candidate edges.

Exploration weight (roulette wheel):
    w_ij = τ_ij^α + (1 / D_ij)^β

Exploitation weight (greedy solution agent):
    w_ij = τ_ij^α

The two terms are added, not multiplied, and the greedy weight ignores
distance entirely. Both choices come from the map demo and are kept as-is.

Edge cases handled:
    - D_ij ≤ 0 → visibility capped at _VISIBILITY_MAX (graphs reject such edges,
      the cap only protects direct callers)
"""

from __future__ import annotations


_VISIBILITY_MAX: float = 1e6


def visibility(distance: float) -> float:
    """η_ij = 1 / D_ij, capped for zero-length edges."""
    if distance <= 0.0:
        return _VISIBILITY_MAX
    return 1.0 / distance


def exploration_weight(pheromone: float, distance: float, alpha: float, beta: float) -> float:
    """
    w_ij = τ_ij^α + η_ij^β

    Args:
        pheromone : τ_ij ≥ 0.
        distance  : D_ij > 0.
        alpha     : Pheromone weight.
        beta      : Inverse-distance weight.

    Returns:
        w_ij > 0 for any edge with positive distance.
    """
    return pheromone ** alpha + visibility(distance) ** beta


def exploitation_weight(pheromone: float, alpha: float) -> float:
    """w_ij = τ_ij^α (distance is not consulted)."""
    return pheromone ** alpha
