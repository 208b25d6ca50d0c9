"""
Half-edge (DCEL) construction and face extraction.

Every vertex links the half-edges arriving at it to the next outgoing
half-edge in clockwise order, so following ``next`` always walks the
boundary of the face lying to the left of the current half-edge. Closed
walks with positive signed area are bounded faces; the outer walk has
non-positive area and stays unassigned.
"""

from typing import List, Optional

import numpy as np
import structlog

from .colors import generate_face_color
from .planar_graph import Face, PlanarGraph

logger = structlog.get_logger()


def link_half_edges_around_vertices(graph: PlanarGraph) -> None:
    """Set ``next`` for every half-edge arriving at a vertex of degree >= 2."""
    for vertex, incident in enumerate(graph.vertex_edges):
        if len(incident) < 2:
            continue

        outgoing = [graph.outgoing_half_edge(edge, vertex) for edge in incident]

        # outgoing[i - 1] is the clockwise neighbour of outgoing[i]
        for i, current in enumerate(outgoing):
            graph.half_edge_next[graph.twin(current)] = outgoing[i - 1]


def trace_face_cycle(graph: PlanarGraph, start: int) -> Optional[List[int]]:
    """
    Follow ``next`` from start.

    Returns:
        The half-edges of the closed cycle through start, or None if the
        walk dead-ends, loops without returning to start, or runs into a
        half-edge that already belongs to a face
    """
    cycle = []
    seen = set()
    current = start

    while current is not None:
        if current in seen:
            return cycle if current == start else None
        if graph.half_edge_face[current] is not None:
            return None

        seen.add(current)
        cycle.append(current)

        current = graph.half_edge_next[current]
        if current == start:
            return cycle

    return None


def signed_area(graph: PlanarGraph, cycle: List[int]) -> float:
    """Shoelace area of a half-edge cycle; positive for CCW winding."""
    if not cycle:
        return 0.0

    points = np.array([graph.vertex_positions[graph.origin(h)] for h in cycle], dtype=float)
    following = np.roll(points, -1, axis=0)

    return 0.5 * float(np.sum(points[:, 0] * following[:, 1] - points[:, 1] * following[:, 0]))


def build_faces(graph: PlanarGraph, rng) -> List[Face]:
    """
    Link half-edges and extract every bounded face.

    Stamps each accepted half-edge with its face id and stores the faces on
    the graph. Half-edges of the outer boundary and of open walks are left
    unassigned.

    Args:
        graph: Graph with CCW-sorted incident edge lists
        rng: Random source for face colors

    Returns:
        The accepted faces
    """
    link_half_edges_around_vertices(graph)

    faces = []
    rejected_open = 0
    rejected_area = 0

    for start in range(graph.half_edge_count):
        if graph.half_edge_face[start] is not None:
            continue

        cycle = trace_face_cycle(graph, start)
        if cycle is None:
            rejected_open += 1
            continue

        if signed_area(graph, cycle) <= 0:
            rejected_area += 1
            continue

        face = Face(id=len(faces), half_edges=tuple(cycle), color=generate_face_color(rng))
        for half_edge in cycle:
            graph.half_edge_face[half_edge] = face.id
        faces.append(face)

    graph.faces = faces

    logger.debug(
        "Faces extracted",
        faces=len(faces),
        open_walks=rejected_open,
        non_positive_cycles=rejected_area,
    )
    return faces
