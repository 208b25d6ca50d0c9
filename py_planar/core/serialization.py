"""
Exchange format: ingestion, normalization and export.

The exchange format is a plain record::

    {"vertices": [[x, y], ...], "edges": [[i, j], ...]}

List position defines vertex index. Edges pointing at indices outside the
vertex list are dropped while the graph is built rather than rejected.
"""

import json
import math
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
import structlog
from pydantic import AfterValidator, BaseModel, ConfigDict, StrictFloat, StrictInt, ValidationError

from .half_edges import build_faces
from .planar_graph import GraphBuilder, GraphConfig, PlanarGraph
from .vec2 import Vec2
from ..exceptions import MalformedInputError
from ..utils.random import resolve_rng

logger = structlog.get_logger()


def _finite(value: Union[int, float]) -> Union[int, float]:
    """Reject values with no finite float form (NaN, infinities, huge ints)."""
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise ValueError("value must be a finite number")
    return value


Number = Annotated[Union[StrictInt, StrictFloat], AfterValidator(_finite)]


class GraphSerialized(BaseModel):
    """Value-level snapshot of a graph: positions plus edge index pairs."""

    model_config = ConfigDict(frozen=True)

    vertices: List[Tuple[Number, Number]]
    edges: List[Tuple[Number, Number]]

    def to_dict(self) -> Dict[str, List[List[float]]]:
        """JSON-ready dict with lists instead of tuples."""
        return {
            "vertices": [list(vertex) for vertex in self.vertices],
            "edges": [list(edge) for edge in self.edges],
        }


_ENTRY_LABELS = {
    "vertices": ("Vertex", "[x, y]"),
    "edges": ("Edge", "[i, j]"),
}


def _malformed_from_validation(error: ValidationError) -> MalformedInputError:
    """Translate the first pydantic error into an index-qualified message."""
    first = error.errors()[0]
    loc = first["loc"]
    field = loc[0] if loc else None

    if field not in _ENTRY_LABELS or len(loc) < 2:
        return MalformedInputError(
            "Graph data must include vertices and edges arrays", field=field
        )

    label, shape = _ENTRY_LABELS[field]
    index = loc[1]
    # a short pair reports the missing position, which is still a shape error
    if len(loc) == 2 or first["type"] == "missing":
        return MalformedInputError(f"{label} at index {index} must be {shape}", field=field, index=index)
    return MalformedInputError(f"{label} at index {index} must contain numbers", field=field, index=index)


def parse_graph_data(data: Any) -> GraphSerialized:
    """
    Validate untrusted exchange-format data.

    Raises:
        MalformedInputError: data is not a mapping with array-like
            ``vertices`` and ``edges`` of numeric pairs
    """
    if not isinstance(data, Mapping):
        raise MalformedInputError("Graph data must be an object")

    try:
        return GraphSerialized.model_validate(
            {"vertices": data.get("vertices"), "edges": data.get("edges")}
        )
    except ValidationError as e:
        malformed = _malformed_from_validation(e)
        logger.warning(
            "Rejected graph data", reason=malformed.message, field=malformed.field, index=malformed.index
        )
        raise malformed from e


def parse_graph_json(text: str) -> GraphSerialized:
    """Parse and validate exchange-format JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Rejected graph JSON", error=str(e))
        raise MalformedInputError(f"Graph JSON is invalid: {e.msg}") from e

    return parse_graph_data(data)


def normalize_positions(positions: List[Vec2], config: GraphConfig) -> List[Vec2]:
    """
    Center positions on the origin and scale them uniformly into the padded domain.

    An axis with zero extent does not constrain the scale. When every
    point coincides, or no usable scale exists, all points collapse to the
    origin.
    """
    if not positions:
        return []

    points = np.array(positions, dtype=float)
    lower = points.min(axis=0)
    upper = points.max(axis=0)
    extent_x, extent_y = (upper - lower).tolist()

    origin = [Vec2(0.0, 0.0)] * len(positions)

    if extent_x == 0 and extent_y == 0:
        return origin

    available_x = max(config.width - 2 * config.padding, 0)
    available_y = max(config.height - 2 * config.padding, 0)

    scale_x = available_x / extent_x if extent_x > 0 else math.inf
    scale_y = available_y / extent_y if extent_y > 0 else math.inf
    scale = min(scale_x, scale_y)

    if not math.isfinite(scale) or scale <= 0:
        return origin

    center = (lower + upper) * 0.5
    scaled = (points - center) * scale
    return [Vec2(float(x), float(y)) for x, y in scaled]


def _vertex_index(value: Union[int, float], vertex_count: int) -> Optional[int]:
    """Resolve an edge endpoint to a vertex index, or None if it points nowhere."""
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if 0 <= value < vertex_count:
        return value
    return None


def graph_from_serialized(
    data: Union[GraphSerialized, Mapping[str, Any]],
    config: Optional[GraphConfig] = None,
    seed: Optional[str] = None,
    rng: Optional[Any] = None,
) -> PlanarGraph:
    """
    Build a completed graph from exchange-format data.

    Args:
        data: Validated snapshot, or raw mapping to validate first
        config: Target domain (defaults if omitted)
        seed: Seed for face colors; ignored when rng is given
        rng: Injected random source for face colors

    Returns:
        PlanarGraph with normalized positions and extracted faces

    Raises:
        MalformedInputError: raw data failed validation
    """
    if not isinstance(data, GraphSerialized):
        data = parse_graph_data(data)

    config = config or GraphConfig()
    rng, seed = resolve_rng(rng, seed)

    builder = GraphBuilder(config)
    raw_positions = [Vec2(float(x), float(y)) for x, y in data.vertices]
    for position in normalize_positions(raw_positions, config):
        builder.add_vertex(position)

    vertex_count = len(builder.positions)
    dropped = 0
    for a, b in data.edges:
        v0 = _vertex_index(a, vertex_count)
        v1 = _vertex_index(b, vertex_count)
        if v0 is None or v1 is None:
            dropped += 1
            continue
        builder.add_edge(v0, v1)

    builder.sort_edges_ccw()

    graph = builder.to_graph(seed)
    build_faces(graph, rng)

    logger.info(
        "Graph loaded",
        vertices=graph.vertex_count,
        edges=graph.edge_count,
        dropped_edges=dropped,
        faces=len(graph.faces),
    )
    return graph


def serialize_graph(graph: PlanarGraph) -> GraphSerialized:
    """Snapshot a graph into the exchange format."""
    return GraphSerialized(
        vertices=[(p.x, p.y) for p in graph.vertex_positions],
        edges=[(v0, v1) for v0, v1 in graph.edge_vertices],
    )
