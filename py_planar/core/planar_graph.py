"""
Arena-style planar graph storage.

Vertices, edges, half-edges and faces live in parallel index-addressed
collections. Every relation between them (origin, twin, next, face) is an
integer handle, never an object reference.

Half-edge layout: edge ``e`` owns half-edges ``2e`` (leaving its first
endpoint) and ``2e + 1`` (leaving its second endpoint), so the twin of
half-edge ``h`` is always ``h ^ 1``.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Tuple

import structlog

from .vec2 import Vec2

logger = structlog.get_logger()

DEFAULT_VERTEX_COUNT = 100
DEFAULT_MIN_ANGLE = math.pi / 6


class GraphConfig(NamedTuple):
    """Domain and generation parameters for a graph."""
    width: float = 2.0
    height: float = 2.0
    padding: float = 0.1
    vertex_count: int = DEFAULT_VERTEX_COUNT
    min_angle: float = DEFAULT_MIN_ANGLE

    @classmethod
    def from_settings(cls, settings) -> "GraphConfig":
        """Build the engine configuration from application settings."""
        return cls(
            width=settings.graph_width,
            height=settings.graph_height,
            padding=settings.graph_padding,
            vertex_count=settings.default_vertex_count,
            min_angle=math.radians(settings.min_angle_degrees),
        )


@dataclass(frozen=True)
class Face:
    """A bounded face: its boundary half-edges in walk order plus a fill color."""
    id: int
    half_edges: Tuple[int, ...]
    color: str


@dataclass
class PlanarGraph:
    """
    Completed planar subdivision.

    Instances are only handed out once construction (including face
    extraction) has finished; afterwards nothing mutates them.
    """
    # Domain
    width: float
    height: float
    padding: float

    # Vertex data
    vertex_positions: List[Vec2]
    vertex_edges: List[List[int]]  # incident edge ids, CCW by direction angle

    # Edge data
    edge_vertices: List[Tuple[int, int]]

    # Half-edge data (origin and twin are implied by the layout)
    half_edge_next: List[Optional[int]] = field(default_factory=list)
    half_edge_face: List[Optional[int]] = field(default_factory=list)

    # Face data
    faces: List[Face] = field(default_factory=list)

    seed: Optional[str] = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertex_positions)

    @property
    def edge_count(self) -> int:
        return len(self.edge_vertices)

    @property
    def half_edge_count(self) -> int:
        return 2 * len(self.edge_vertices)

    @staticmethod
    def twin(half_edge: int) -> int:
        return half_edge ^ 1

    @staticmethod
    def edge_of(half_edge: int) -> int:
        return half_edge >> 1

    def origin(self, half_edge: int) -> int:
        return self.edge_vertices[half_edge >> 1][half_edge & 1]

    def outgoing_half_edge(self, edge: int, vertex: int) -> int:
        """Half-edge of edge that leaves vertex."""
        return 2 * edge if self.edge_vertices[edge][0] == vertex else 2 * edge + 1

    def edge_endpoints(self, edge: int) -> Tuple[Vec2, Vec2]:
        v0, v1 = self.edge_vertices[edge]
        return self.vertex_positions[v0], self.vertex_positions[v1]

    def face_vertices(self, face_id: int) -> List[int]:
        """Vertex ids around a face, in boundary order."""
        return [self.origin(h) for h in self.faces[face_id].half_edges]


class GraphBuilder:
    """
    Mutable working state used while a graph is generated or loaded.

    Removal leaves tombstones so ids stay stable during pruning; to_graph()
    compacts the survivors, keeping their relative order.
    """

    def __init__(self, config: GraphConfig):
        self.config = config

        self.positions: List[Vec2] = []
        self.vertex_edges: List[List[int]] = []
        self.vertex_alive: List[bool] = []

        self.edge_vertices: List[Tuple[int, int]] = []
        self.edge_alive: List[bool] = []

    def add_vertex(self, position: Vec2) -> int:
        self.positions.append(position)
        self.vertex_edges.append([])
        self.vertex_alive.append(True)
        return len(self.positions) - 1

    def add_edge(self, v0: int, v1: int) -> int:
        """Register an edge and attach it to both endpoints."""
        edge = len(self.edge_vertices)
        self.edge_vertices.append((v0, v1))
        self.edge_alive.append(True)
        self.vertex_edges[v0].append(edge)
        self.vertex_edges[v1].append(edge)
        return edge

    def remove_edge(self, edge: int) -> None:
        """Detach an edge from both endpoints."""
        if not self.edge_alive[edge]:
            return
        self.edge_alive[edge] = False
        for vertex in self.edge_vertices[edge]:
            incident = self.vertex_edges[vertex]
            if edge in incident:
                incident.remove(edge)

    def remove_vertex(self, vertex: int) -> None:
        for edge in list(self.vertex_edges[vertex]):
            self.remove_edge(edge)
        self.vertex_alive[vertex] = False

    def live_vertices(self) -> Iterator[int]:
        return (v for v, alive in enumerate(self.vertex_alive) if alive)

    def live_edges(self) -> Iterator[int]:
        return (e for e, alive in enumerate(self.edge_alive) if alive)

    def degree(self, vertex: int) -> int:
        return len(self.vertex_edges[vertex])

    def other_vertex(self, edge: int, vertex: int) -> int:
        v0, v1 = self.edge_vertices[edge]
        return v1 if v0 == vertex else v0

    def edge_length(self, edge: int) -> float:
        v0, v1 = self.edge_vertices[edge]
        return self.positions[v1].sub(self.positions[v0]).length()

    def edge_angle(self, vertex: int, edge: int) -> float:
        """Direction angle of edge as seen from vertex, in (-pi, pi]."""
        direction = self.positions[self.other_vertex(edge, vertex)].sub(self.positions[vertex])
        return math.atan2(direction.y, direction.x)

    def sort_edges_ccw(self) -> None:
        """Order every vertex's incident edges counterclockwise."""
        for vertex in self.live_vertices():
            self.vertex_edges[vertex].sort(key=lambda edge: self.edge_angle(vertex, edge))

    def to_graph(self, seed: Optional[str] = None) -> PlanarGraph:
        """Compact live vertices and edges into a PlanarGraph without faces."""
        vertex_ids = {}
        for vertex in self.live_vertices():
            vertex_ids[vertex] = len(vertex_ids)

        edge_ids = {}
        edge_vertices = []
        for edge in self.live_edges():
            v0, v1 = self.edge_vertices[edge]
            edge_ids[edge] = len(edge_ids)
            edge_vertices.append((vertex_ids[v0], vertex_ids[v1]))

        positions = [self.positions[v] for v in vertex_ids]
        vertex_edges = [[edge_ids[e] for e in self.vertex_edges[v]] for v in vertex_ids]

        logger.debug(
            "Compacted graph",
            vertices=len(positions),
            removed_vertices=len(self.positions) - len(positions),
            edges=len(edge_vertices),
            removed_edges=len(self.edge_vertices) - len(edge_vertices),
        )

        half_edge_count = 2 * len(edge_vertices)
        return PlanarGraph(
            width=self.config.width,
            height=self.config.height,
            padding=self.config.padding,
            vertex_positions=positions,
            vertex_edges=vertex_edges,
            edge_vertices=edge_vertices,
            half_edge_next=[None] * half_edge_count,
            half_edge_face=[None] * half_edge_count,
            seed=seed,
        )
