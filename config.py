"""
config.py
---------
Central configuration for the colony search demo.
Every tunable can be overridden through an environment variable of the same name.

Defaults reproduce the values used by the map views:
  - airport path search : 100 rounds × 100 agents, α=0.7, β=0.3, evaporation 0.1
  - antenna placement   : range ≤ 500 m, cost ≤ 1000, perturbation 0.01°, grid 0.001°
"""

import os
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Randomness ────────────────────────────────────────────────────────────────
# Unset = fresh OS entropy per run. Set an integer for reproducible runs.
RANDOM_SEED: Optional[int] = _optional_int("RANDOM_SEED")

# ── Units ─────────────────────────────────────────────────────────────────────
# Edge distances built from coordinates → km | antenna range → metres
DISTANCE_UNIT: str = os.getenv("DISTANCE_UNIT", "km")

# ── ACO path search ───────────────────────────────────────────────────────────
ACO_ITERATIONS: int          = int(os.getenv("ACO_ITERATIONS",        "100"))  # exploration rounds
ACO_AGENTS_PER_ROUND: int    = int(os.getenv("ACO_AGENTS_PER_ROUND",  "100"))  # ants per round
ACO_MAX_STEPS: int           = int(os.getenv("ACO_MAX_STEPS",         "100"))  # steps per ant
ACO_ALPHA: float             = float(os.getenv("ACO_ALPHA",             "0.7"))  # pheromone weight
ACO_BETA: float              = float(os.getenv("ACO_BETA",              "0.3"))  # distance weight
ACO_EVAPORATION_RATE: float  = float(os.getenv("ACO_EVAPORATION_RATE",  "0.1"))  # deposit discount
ACO_INITIAL_PHEROMONE: float = float(os.getenv("ACO_INITIAL_PHEROMONE", "1.0"))

# ── Bee colony antenna placement ──────────────────────────────────────────────
BCO_MAX_RANGE_METERS: float = float(os.getenv("BCO_MAX_RANGE_METERS", "500.0"))
BCO_MAX_COST: float         = float(os.getenv("BCO_MAX_COST",         "1000.0"))
BCO_PERTURBATION_DEG: float = float(os.getenv("BCO_PERTURBATION_DEG", "0.01"))   # exploratory move span
BCO_GRID_STEP_DEG: float    = float(os.getenv("BCO_GRID_STEP_DEG",    "0.001"))  # coverage grid spacing
BCO_MAX_DEVICES: int        = int(os.getenv("BCO_MAX_DEVICES",        "10"))
BCO_MAX_ITERATIONS: int     = int(os.getenv("BCO_MAX_ITERATIONS",     "100"))  # generations
BCO_INITIAL_POPULATION: int = int(os.getenv("BCO_INITIAL_POPULATION", "50"))

# ── HTTP server ───────────────────────────────────────────────────────────────
SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
