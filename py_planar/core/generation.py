"""
Random planar graph generation.

Pipeline:
1. Scatter vertices uniformly inside the padded domain
2. Shuffle every vertex pair and greedily admit edges that cross nothing
   already admitted (shared endpoints are not crossings)
3. Prune edges that form narrow angles at a vertex, until stable
4. Prune isolated and dangling vertices, until stable
5. Extract faces from the surviving edges

Which edges survive depends only on the shuffled candidate order, so the
result is planar but not maximal in any canonical sense.
"""

import math
from itertools import combinations
from typing import Any, List, Optional, Tuple

import numpy as np
import structlog

from .geometry import segments_intersect_many
from .half_edges import build_faces
from .planar_graph import GraphBuilder, GraphConfig, PlanarGraph
from .vec2 import Vec2
from ..utils.random import resolve_rng

logger = structlog.get_logger()


def add_random_vertices(builder: GraphBuilder, vertex_count: int, rng) -> None:
    """Place vertices uniformly at random inside the domain, inset by padding."""
    config = builder.config
    left = -config.width / 2 + config.padding
    bottom = -config.height / 2 + config.padding
    span_x = config.width - 2 * config.padding
    span_y = config.height - 2 * config.padding

    for _ in range(vertex_count):
        x = left + span_x * rng.random()
        y = bottom + span_y * rng.random()
        builder.add_vertex(Vec2(x, y))


def shuffled_vertex_pairs(builder: GraphBuilder, rng) -> List[Tuple[int, int]]:
    """All vertex pairs (i < j) in a uniformly random order."""
    pairs = list(combinations(range(len(builder.positions)), 2))
    rng.shuffle(pairs)
    return pairs


def create_edges(builder: GraphBuilder, rng) -> int:
    """
    Greedily admit crossing-free edges from the shuffled pair list.

    Admitted edge endpoints are mirrored into numpy buffers so each
    candidate is tested against all admitted edges in one vectorized call.

    Returns:
        Number of admitted edges
    """
    pairs = shuffled_vertex_pairs(builder, rng)

    capacity = max(3 * len(builder.positions), 1)
    starts = np.empty((capacity, 2))
    ends = np.empty((capacity, 2))
    endpoints = np.empty((capacity, 2), dtype=np.int64)
    admitted = 0

    for v0, v1 in pairs:
        p0 = builder.positions[v0]
        p1 = builder.positions[v1]

        if admitted:
            crossing = segments_intersect_many(p0, p1, starts[:admitted], ends[:admitted])
            ids = endpoints[:admitted]
            shares_vertex = (
                (ids[:, 0] == v0) | (ids[:, 0] == v1) | (ids[:, 1] == v0) | (ids[:, 1] == v1)
            )
            if np.any(crossing & ~shares_vertex):
                continue

        if admitted == capacity:
            capacity *= 2
            starts = np.resize(starts, (capacity, 2))
            ends = np.resize(ends, (capacity, 2))
            endpoints = np.resize(endpoints, (capacity, 2))

        starts[admitted] = p0
        ends[admitted] = p1
        endpoints[admitted] = (v0, v1)
        admitted += 1

        builder.add_edge(v0, v1)

    logger.debug("Edges admitted", candidates=len(pairs), admitted=admitted)
    return admitted


def remove_small_angles(builder: GraphBuilder, threshold: float) -> bool:
    """
    One pass of narrow-angle pruning.

    For each vertex, walks circularly adjacent pairs of its CCW-sorted
    incident edges; when two neighbours are less than threshold radians
    apart, the longer of the two is removed.

    Returns:
        True if any edge was removed
    """
    removed = False

    for vertex in builder.live_vertices():
        incident = builder.vertex_edges[vertex]
        if len(incident) < 2:
            continue

        snapshot = list(incident)
        for i, edge_a in enumerate(snapshot):
            edge_b = snapshot[(i + 1) % len(snapshot)]

            if edge_a not in incident or edge_b not in incident:
                continue
            if edge_a == edge_b:
                continue

            delta = builder.edge_angle(vertex, edge_b) - builder.edge_angle(vertex, edge_a)
            if delta <= 0:
                delta += 2 * math.pi
            if delta >= threshold:
                continue

            if builder.edge_length(edge_a) >= builder.edge_length(edge_b):
                builder.remove_edge(edge_a)
            else:
                builder.remove_edge(edge_b)
            removed = True

    return removed


def remove_sparse_vertices(builder: GraphBuilder) -> bool:
    """
    One pass of degree pruning.

    Vertices with no edges are removed; vertices with a single edge lose
    that edge first, which later vertices in the same pass already see.

    Returns:
        True if any vertex was removed
    """
    doomed = []

    for vertex in builder.live_vertices():
        incident = builder.vertex_edges[vertex]
        if not incident:
            doomed.append(vertex)
        elif len(incident) == 1:
            builder.remove_edge(incident[0])
            doomed.append(vertex)

    for vertex in doomed:
        builder.remove_vertex(vertex)

    return bool(doomed)


def prune(builder: GraphBuilder, min_angle: float) -> None:
    """Run both pruning stages to their fixpoints."""
    angle_passes = 1
    while remove_small_angles(builder, min_angle):
        angle_passes += 1

    sparse_passes = 1
    while remove_sparse_vertices(builder):
        sparse_passes += 1

    logger.debug("Pruning finished", angle_passes=angle_passes, sparse_passes=sparse_passes)


def generate_planar_graph(
    config: Optional[GraphConfig] = None,
    seed: Optional[str] = None,
    rng: Optional[Any] = None,
) -> PlanarGraph:
    """
    Generate a random, pruned planar graph with its faces extracted.

    Args:
        config: Domain and generation parameters (defaults if omitted)
        seed: Seed for the Alea generator; ignored when rng is given
        rng: Injected random source exposing random() and shuffle()

    Returns:
        Completed PlanarGraph
    """
    config = config or GraphConfig()
    rng, seed = resolve_rng(rng, seed)

    logger.info("Generating planar graph", vertex_count=config.vertex_count, seed=seed)

    builder = GraphBuilder(config)
    add_random_vertices(builder, config.vertex_count, rng)
    create_edges(builder, rng)
    builder.sort_edges_ccw()
    prune(builder, config.min_angle)

    graph = builder.to_graph(seed)
    build_faces(graph, rng)

    logger.info(
        "Planar graph generated",
        vertices=graph.vertex_count,
        edges=graph.edge_count,
        faces=len(graph.faces),
        seed=seed,
    )
    return graph
