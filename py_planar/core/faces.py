"""
Face topology queries.

Faces never store adjacency: two faces are neighbours exactly when one
owns a half-edge whose twin the other owns. All results use face ids
(indices into ``graph.faces``) as handles.
"""

from typing import List, Optional

from .geometry import ray_segment_intersection
from .planar_graph import PlanarGraph
from .vec2 import Vec2

RAY_DIRECTION = Vec2(1.0, 0.0)


def point_in_face(graph: PlanarGraph, face_id: int, point: Vec2) -> bool:
    """
    Ray-casting containment test.

    Casts a ray along +x from point and counts boundary edges it crosses;
    an odd count means inside. Rays passing exactly through a vertex are
    not special-cased and may be miscounted.
    """
    crossings = 0
    for half_edge in graph.faces[face_id].half_edges:
        v0, v1 = graph.edge_endpoints(graph.edge_of(half_edge))
        if ray_segment_intersection(point, RAY_DIRECTION, v0, v1) is not None:
            crossings += 1

    return crossings % 2 == 1


def find_face_at_point(graph: PlanarGraph, point: Vec2) -> Optional[int]:
    """Id of the first face containing point, or None."""
    for face in graph.faces:
        if point_in_face(graph, face.id, point):
            return face.id
    return None


def neighboring_faces(graph: PlanarGraph, face_id: int) -> List[int]:
    """Distinct faces across this face's boundary, in boundary order."""
    neighbors = []
    seen = {face_id}

    for half_edge in graph.faces[face_id].half_edges:
        if graph.half_edge_face[half_edge] != face_id:
            continue

        neighbor = graph.half_edge_face[graph.twin(half_edge)]
        if neighbor is None or neighbor in seen:
            continue

        seen.add(neighbor)
        neighbors.append(neighbor)

    return neighbors


def shell_layers(graph: PlanarGraph, face_id: int) -> List[List[int]]:
    """
    Breadth-first distance classes of faces around face_id.

    Layer 0 is [face_id]; layer k + 1 holds every face not yet visited
    that neighbours some face of layer k. Each face reachable through
    shared edges appears in exactly one layer.
    """
    layers = []
    visited = set()
    frontier = [face_id]

    while frontier:
        layers.append(frontier)
        visited.update(frontier)

        next_frontier = []
        queued = set()
        for face in frontier:
            for neighbor in neighboring_faces(graph, face):
                if neighbor in visited or neighbor in queued:
                    continue
                queued.add(neighbor)
                next_frontier.append(neighbor)

        frontier = next_frontier

    return layers
