"""
Core planar graph engine.
"""

from .vec2 import Vec2
from .planar_graph import GraphConfig, PlanarGraph, Face
from .generation import generate_planar_graph
from .serialization import GraphSerialized, parse_graph_data, parse_graph_json, graph_from_serialized, serialize_graph
from .faces import point_in_face, neighboring_faces, shell_layers, find_face_at_point
from .viewport import GraphView, FaceStyle

__all__ = ['Vec2', 'GraphConfig', 'PlanarGraph', 'Face', 'generate_planar_graph',
           'GraphSerialized', 'parse_graph_data', 'parse_graph_json', 'graph_from_serialized', 'serialize_graph',
           'point_in_face', 'neighboring_faces', 'shell_layers', 'find_face_at_point',
           'GraphView', 'FaceStyle']
