"""modules/placement: antenna placement over a geographic polygon."""

from modules.placement.geometry import (
    bounding_box,
    coverage_grid,
    point_in_polygon,
    random_point_in_box,
)
from modules.placement.bee_optimizer import (
    evaluate_solution,
    generate_initial_population,
    optimize_placement,
)

__all__ = [
    "bounding_box",
    "coverage_grid",
    "point_in_polygon",
    "random_point_in_box",
    "evaluate_solution",
    "generate_initial_population",
    "optimize_placement",
]
