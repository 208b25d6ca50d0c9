"""FastAPI main application."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config import settings
from ..core.faces import shell_layers
from ..core.generation import generate_planar_graph
from ..core.planar_graph import GraphConfig
from ..core.serialization import graph_from_serialized, parse_graph_data, serialize_graph
from ..exceptions import MalformedInputError
from .store import StoredGraph, store

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Planar Graph API",
    description="Random planar graphs, their faces, and face-adjacency queries",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class GraphGenerationRequest(BaseModel):
    """Request to generate a new random graph."""

    vertex_count: Optional[int] = Field(
        None, ge=0, le=settings.max_vertex_count, description="Vertices to scatter before pruning"
    )
    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")


class GraphSummary(BaseModel):
    """Summary information about a stored graph."""

    id: str
    source: str
    seed: Optional[str]
    vertex_count: int
    edge_count: int
    face_count: int
    created_at: datetime


class FaceInfo(BaseModel):
    """One bounded face."""

    id: int
    color: str
    vertices: List[int] = Field(description="Vertex indices around the face, counterclockwise")


class ShellLayersResponse(BaseModel):
    face_id: int
    layers: List[List[int]]


class HoverRequest(BaseModel):
    """Pointer position on a rendering surface of the given size."""

    x: float
    y: float
    width: float
    height: float


class FaceStyleInfo(BaseModel):
    color: str
    alpha: float


class HoverResponse(BaseModel):
    changed: bool
    face_id: Optional[int] = None
    styles: Dict[int, FaceStyleInfo] = Field(default_factory=dict)


class HoverClearResponse(BaseModel):
    changed: bool


def engine_config(vertex_count: Optional[int] = None) -> GraphConfig:
    config = GraphConfig.from_settings(settings)
    if vertex_count is not None:
        config = config._replace(vertex_count=vertex_count)
    return config


def get_graph_or_404(graph_id: str) -> StoredGraph:
    """Get stored graph by id or raise 404."""
    entry = store.get(graph_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Graph not found")
    return entry


def summarize(entry: StoredGraph) -> GraphSummary:
    graph = entry.graph
    return GraphSummary(
        id=entry.id,
        source=entry.source,
        seed=graph.seed,
        vertex_count=graph.vertex_count,
        edge_count=graph.edge_count,
        face_count=len(graph.faces),
        created_at=entry.created_at,
    )


def load_or_400(payload: Any):
    """Validate and build a graph from request data, mapping bad input to 400."""
    try:
        data = parse_graph_data(payload)
    except MalformedInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return graph_from_serialized(data, config=engine_config())


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Planar Graph API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "graphs": len(store.all())}


@app.post("/graphs/generate", response_model=GraphSummary)
def generate_graph(request: GraphGenerationRequest):
    """Generate a random planar graph and store it."""
    logger.info("Graph generation requested", request=request.model_dump())

    graph = generate_planar_graph(engine_config(request.vertex_count), seed=request.seed)
    return summarize(store.add(graph, source="generated"))


@app.post("/graphs/import", response_model=GraphSummary)
def import_graph(payload: Any = Body(...)):
    """Load a graph from exchange-format data and store it."""
    graph = load_or_400(payload)
    return summarize(store.add(graph, source="imported"))


@app.put("/graphs/{graph_id}", response_model=GraphSummary)
def replace_graph(graph_id: str, payload: Any = Body(...)):
    """
    Replace a stored graph with one loaded from exchange-format data.

    Malformed data leaves the stored graph untouched.
    """
    get_graph_or_404(graph_id)
    graph = load_or_400(payload)

    entry = store.replace(graph_id, graph, source="imported")
    if entry is None:
        raise HTTPException(status_code=404, detail="Graph not found")
    return summarize(entry)


@app.get("/graphs", response_model=List[GraphSummary])
async def list_graphs():
    """List all stored graphs."""
    return [summarize(entry) for entry in store.all()]


@app.get("/graphs/{graph_id}", response_model=GraphSummary)
async def get_graph(graph_id: str):
    """Get graph details."""
    return summarize(get_graph_or_404(graph_id))


@app.get("/graphs/{graph_id}/export")
async def export_graph(graph_id: str):
    """Export a graph in the exchange format."""
    entry = get_graph_or_404(graph_id)
    return serialize_graph(entry.graph).to_dict()


@app.get("/graphs/{graph_id}/faces", response_model=List[FaceInfo])
async def list_faces(graph_id: str):
    """List the bounded faces of a graph."""
    graph = get_graph_or_404(graph_id).graph
    return [
        FaceInfo(id=face.id, color=face.color, vertices=graph.face_vertices(face.id))
        for face in graph.faces
    ]


@app.get("/graphs/{graph_id}/faces/{face_id}/shells", response_model=ShellLayersResponse)
async def get_shell_layers(graph_id: str, face_id: int):
    """Breadth-first face layers around one face."""
    graph = get_graph_or_404(graph_id).graph
    if not 0 <= face_id < len(graph.faces):
        raise HTTPException(status_code=404, detail="Face not found")
    return ShellLayersResponse(face_id=face_id, layers=shell_layers(graph, face_id))


@app.post("/graphs/{graph_id}/hover", response_model=HoverResponse)
async def hover(graph_id: str, request: HoverRequest):
    """Hover the face under a surface point and return the highlight overlay."""
    view = get_graph_or_404(graph_id).view
    changed = view.set_hovered_face_from_point(request.x, request.y, request.width, request.height)

    styles = {
        face_id: FaceStyleInfo(color=style.color, alpha=style.alpha)
        for face_id, style in view.hover_styles().items()
    }
    return HoverResponse(changed=changed, face_id=view.hovered_face, styles=styles)


@app.delete("/graphs/{graph_id}/hover", response_model=HoverClearResponse)
async def clear_hover(graph_id: str):
    """Clear the hovered face."""
    view = get_graph_or_404(graph_id).view
    return HoverClearResponse(changed=view.clear_hovered_face())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
