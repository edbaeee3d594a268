"""
backend/server.py
-----------------
HTTP surface for the two searches. The map front-end loads airports, routes
and polygons itself and posts them here.

Run from the repository root:
    uvicorn backend.server:app --reload
"""

from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

import config
from schemas.graph import ACOParameters, GraphError, NetworkNode, NetworkRoute
from schemas.placement import OptimizationConfig, Polygon
from modules.optimization.aco_optimizer import ACOPathFinder
from modules.planning.network_builder import build_network_graph, path_to_coordinates
from modules.placement.bee_optimizer import optimize_placement

log = logging.getLogger(__name__)

app = FastAPI(title="Colony Search API")


# ── Request / response bodies ────────────────────────────────────────────────

class NodeIn(BaseModel):
    id: int
    name: str = ""
    lat: float
    lng: float


class RouteIn(BaseModel):
    source: int
    target: int


class ACOParamsIn(BaseModel):
    iterations: int = Field(config.ACO_ITERATIONS, ge=0)
    agents_per_round: int = Field(config.ACO_AGENTS_PER_ROUND, gt=0)
    max_steps: int = Field(config.ACO_MAX_STEPS, gt=0)
    alpha: float = Field(config.ACO_ALPHA, ge=0)
    beta: float = Field(config.ACO_BETA, ge=0)
    evaporation_rate: float = Field(config.ACO_EVAPORATION_RATE, ge=0, lt=1)
    initial_pheromone: float = Field(config.ACO_INITIAL_PHEROMONE, ge=0)


class PathRequest(BaseModel):
    nodes: List[NodeIn]
    routes: List[RouteIn]
    source: int
    target: int
    params: ACOParamsIn = Field(default_factory=ACOParamsIn)
    seed: Optional[int] = None


class PathResponse(BaseModel):
    path: List[int]
    coordinates: List[Tuple[float, float]]
    cost: float
    reached_target: bool


class PlacementRequest(BaseModel):
    polygon: List[Tuple[float, float]]
    max_devices: int = Field(config.BCO_MAX_DEVICES, gt=0)
    max_iterations: int = Field(config.BCO_MAX_ITERATIONS, ge=0)
    initial_population_size: int = Field(config.BCO_INITIAL_POPULATION, gt=0)
    seed: Optional[int] = None


class DeviceOut(BaseModel):
    lat: float
    lng: float
    range: float
    cost: float
    intensity: float


class PlacementResponse(BaseModel):
    devices: List[DeviceOut]
    coverage: float
    cost: float


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed if seed is not None else config.RANDOM_SEED)


# ── Endpoints ────────────────────────────────────────────────────────────────

@app.get("/")
def root():
    return {"message": "Colony search is running"}


@app.post("/aco/path", response_model=PathResponse)
def aco_path(request: PathRequest):
    """Build the route network and search source → target."""
    nodes = [NetworkNode(node_id=n.id, name=n.name, lat=n.lat, lng=n.lng) for n in request.nodes]
    routes = [NetworkRoute(source=r.source, target=r.target) for r in request.routes]
    params = ACOParameters(**request.params.model_dump())
    log.info("Path request %s -> %s over %d nodes, %d routes",
             request.source, request.target, len(nodes), len(routes))

    try:
        graph = build_network_graph(
            nodes, routes,
            evaporation_rate=params.evaporation_rate,
            initial_pheromone=params.initial_pheromone,
        )
        result = ACOPathFinder(graph, params, _rng(request.seed)).run(request.source, request.target)
        coordinates = path_to_coordinates(result.path, nodes)
    except GraphError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PathResponse(
        path=result.path,
        coordinates=coordinates,
        cost=result.cost,
        reached_target=result.reached_target,
    )


@app.post("/placement/optimize", response_model=PlacementResponse)
def placement_optimize(request: PlacementRequest):
    """Place up to max_devices antennas inside the polygon."""
    opt_config = OptimizationConfig(
        polygon=Polygon.from_pairs(request.polygon),
        max_devices=request.max_devices,
        max_iterations=request.max_iterations,
        initial_population_size=request.initial_population_size,
    )
    result = optimize_placement(opt_config, rng=_rng(request.seed))
    return PlacementResponse(
        devices=[
            DeviceOut(
                lat=d.location.lat,
                lng=d.location.lng,
                range=d.range,
                cost=d.cost,
                intensity=d.intensity,
            )
            for d in result.devices
        ],
        coverage=result.coverage_percent,
        cost=result.total_cost,
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
