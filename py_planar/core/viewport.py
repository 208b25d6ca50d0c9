"""
Surface projection and hover state for renderers.

Renderers draw onto a surface of arbitrary pixel size; this module maps
between that surface and the graph's centered domain and tracks which
face the pointer is over, together with the shell-layer highlight that
fans out from it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import structlog

from .colors import hover_layer_alpha, hover_layer_color
from .faces import find_face_at_point, shell_layers
from .planar_graph import PlanarGraph
from .vec2 import Vec2

logger = structlog.get_logger()

DEFAULT_FACE_ALPHA = 0.4


@dataclass(frozen=True)
class FaceStyle:
    """Fill color and opacity for one face."""
    color: str
    alpha: float


def project(graph: PlanarGraph, position: Vec2, width: float, height: float) -> Vec2:
    """Graph domain -> surface coordinates (y grows downward, clamped to the surface)."""

    def normalize(value: float, span: float) -> float:
        normalized = (value + span / 2) / span
        return max(0.0, min(1.0, normalized))

    return Vec2(
        normalize(position.x, graph.width) * width,
        (1 - normalize(position.y, graph.height)) * height,
    )


def unproject(graph: PlanarGraph, x: float, y: float, width: float, height: float) -> Vec2:
    """Surface coordinates -> graph domain. Inverse of project inside the domain."""
    normalized_x = x / width
    normalized_y = 1 - y / height
    return Vec2(
        normalized_x * graph.width - graph.width / 2,
        normalized_y * graph.height - graph.height / 2,
    )


class GraphView:
    """Hover tracking over one graph. A new graph gets a new view."""

    def __init__(self, graph: PlanarGraph):
        self.graph = graph
        self.hovered_face: Optional[int] = None

    def set_hovered_face_from_point(
        self, surface_x: float, surface_y: float, surface_width: float, surface_height: float
    ) -> bool:
        """
        Hover whatever face lies under a surface point.

        Returns:
            True if the hovered face changed
        """
        if surface_width <= 0 or surface_height <= 0:
            return False

        point = unproject(self.graph, surface_x, surface_y, surface_width, surface_height)
        hovered = find_face_at_point(self.graph, point)

        if hovered == self.hovered_face:
            return False

        logger.debug("Hovered face changed", previous=self.hovered_face, current=hovered)
        self.hovered_face = hovered
        return True

    def clear_hovered_face(self) -> bool:
        """Drop the hover. Returns True if a face was hovered."""
        if self.hovered_face is None:
            return False

        self.hovered_face = None
        return True

    def hover_styles(self) -> Dict[int, FaceStyle]:
        """Highlight overlay keyed by face id; empty when nothing is hovered."""
        if self.hovered_face is None:
            return {}

        layers = shell_layers(self.graph, self.hovered_face)
        total = len(layers)

        styles = {}
        for index, layer in enumerate(layers):
            style = FaceStyle(hover_layer_color(total, index), hover_layer_alpha(total, index))
            for face_id in layer:
                styles[face_id] = style

        return styles

    def face_fills(self, width: float, height: float) -> List[Tuple[List[Vec2], FaceStyle]]:
        """Projected outline and effective style for every face, in face order."""
        overlay = self.hover_styles()
        fills = []

        for face in self.graph.faces:
            outline = [
                project(self.graph, self.graph.vertex_positions[v], width, height)
                for v in self.graph.face_vertices(face.id)
            ]
            style = overlay.get(face.id, FaceStyle(face.color, DEFAULT_FACE_ALPHA))
            fills.append((outline, style))

        return fills

    def edge_segments(self, width: float, height: float) -> List[Tuple[Vec2, Vec2]]:
        """Projected endpoints of every edge, for stroking."""
        return [
            (
                project(self.graph, start, width, height),
                project(self.graph, end, width, height),
            )
            for start, end in (self.graph.edge_endpoints(e) for e in range(self.graph.edge_count))
        ]
