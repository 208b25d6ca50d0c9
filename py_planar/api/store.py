"""In-memory graph storage for the API."""

import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog

from ..core.planar_graph import PlanarGraph
from ..core.viewport import GraphView

logger = structlog.get_logger()


@dataclass(frozen=True)
class StoredGraph:
    """A completed graph, its hover view, and bookkeeping. Never edited in place."""
    id: str
    graph: PlanarGraph
    view: GraphView
    source: str  # "generated" | "imported"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class GraphStore:
    """
    Graph registry keyed by id.

    Entries are never edited in place: replace() stores a new entry with a
    fresh view, so a reader holding an entry keeps a consistent graph and
    view even while the id is being replaced.
    """

    def __init__(self):
        self._graphs: Dict[str, StoredGraph] = {}
        self._lock = threading.Lock()

    def add(self, graph: PlanarGraph, source: str) -> StoredGraph:
        entry = StoredGraph(id=str(uuid.uuid4()), graph=graph, view=GraphView(graph), source=source)
        with self._lock:
            self._graphs[entry.id] = entry
        logger.info("Graph stored", graph_id=entry.id, source=source)
        return entry

    def get(self, graph_id: str) -> Optional[StoredGraph]:
        with self._lock:
            return self._graphs.get(graph_id)

    def replace(self, graph_id: str, graph: PlanarGraph, source: str) -> Optional[StoredGraph]:
        """Swap the graph behind an id; returns None for unknown ids."""
        with self._lock:
            current = self._graphs.get(graph_id)
            if current is None:
                return None
            entry = replace(current, graph=graph, view=GraphView(graph), source=source)
            self._graphs[graph_id] = entry
        logger.info("Graph replaced", graph_id=graph_id, source=source)
        return entry

    def all(self) -> List[StoredGraph]:
        with self._lock:
            return list(self._graphs.values())

    def clear(self) -> None:
        with self._lock:
            self._graphs.clear()


store = GraphStore()
