#!/usr/bin/env python3
"""
Demonstration of the planar graph engine.

This script walks through:
1. Seeded generation
2. Face extraction and adjacency
3. Exchange-format export and re-import
4. Hover highlighting on a rendering surface
"""

import json

from py_planar.core import (
    GraphConfig,
    GraphView,
    Vec2,
    find_face_at_point,
    generate_planar_graph,
    graph_from_serialized,
    neighboring_faces,
    parse_graph_json,
    serialize_graph,
    shell_layers,
)


def main():
    config = GraphConfig(vertex_count=120)

    print("=== Planar Graph Demo ===\n")

    # 1. Generate
    print("1. Generating a random planar graph...")
    graph = generate_planar_graph(config, seed="demo_seed")
    print(f"   - Vertices after pruning: {graph.vertex_count}")
    print(f"   - Edges: {graph.edge_count}")
    print(f"   - Bounded faces: {len(graph.faces)}")
    print(f"   - Seed: {graph.seed}")

    if not graph.faces:
        print("\nNo faces survived pruning; try another seed.")
        return

    # 2. Faces
    print("\n2. Inspecting faces...")
    center_face = find_face_at_point(graph, Vec2(0, 0))
    face_id = center_face if center_face is not None else 0
    print(f"   - Face at origin: {center_face}")
    print(f"   - Neighbors of face {face_id}: {neighboring_faces(graph, face_id)}")
    layers = shell_layers(graph, face_id)
    print(f"   - Shell layers: {len(layers)} ({[len(layer) for layer in layers]} faces each)")

    # 3. Exchange format
    print("\n3. Exporting and re-importing...")
    text = json.dumps(serialize_graph(graph).to_dict())
    print(f"   - Exported {len(text)} characters of JSON")
    reloaded = graph_from_serialized(parse_graph_json(text), config=config, seed="demo_seed")
    print(f"   - Reloaded faces: {len(reloaded.faces)}")
    print(f"   - Same edges: {reloaded.edge_vertices == graph.edge_vertices}")

    # 4. Hover
    print("\n4. Hovering the center of a 800x600 surface...")
    view = GraphView(graph)
    changed = view.set_hovered_face_from_point(400, 300, 800, 600)
    print(f"   - Hover changed: {changed}, hovered face: {view.hovered_face}")
    for face, style in sorted(view.hover_styles().items())[:5]:
        print(f"     face {face}: {style.color} alpha={style.alpha:.2f}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
