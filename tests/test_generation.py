"""Tests for random planar graph generation and pruning."""

import math
import random
from itertools import combinations

import pytest

from py_planar.core.generation import (
    add_random_vertices,
    create_edges,
    generate_planar_graph,
    remove_small_angles,
    remove_sparse_vertices,
)
from py_planar.core.alea_prng import AleaPRNG
from py_planar.core.geometry import segments_intersect
from py_planar.core.planar_graph import GraphBuilder, GraphConfig
from py_planar.core.vec2 import Vec2

from graph_helpers import unassigned_half_edges

SEEDS = ["test_seed", "123456789", "planar"]


def _builder(positions, edges=()):
    builder = GraphBuilder(GraphConfig())
    for x, y in positions:
        builder.add_vertex(Vec2(x, y))
    for v0, v1 in edges:
        builder.add_edge(v0, v1)
    builder.sort_edges_ccw()
    return builder


@pytest.fixture(params=SEEDS)
def generated_graph(request):
    return generate_planar_graph(GraphConfig(vertex_count=60), seed=request.param)


class TestRandomVertices:
    """Test vertex placement."""

    def test_vertices_inside_padded_domain(self):
        """All placed vertices lie inside the padded domain."""
        config = GraphConfig(vertex_count=200)
        builder = GraphBuilder(config)
        add_random_vertices(builder, 200, AleaPRNG("place"))

        assert len(builder.positions) == 200
        for p in builder.positions:
            assert -0.9 <= p.x <= 0.9
            assert -0.9 <= p.y <= 0.9


class TestEdgeAdmission:
    """Test greedy crossing-free edge admission."""

    def test_square_admits_one_diagonal(self):
        """Four square corners admit the four sides and one diagonal."""
        builder = _builder([(0, 0), (1, 0), (1, 1), (0, 1)])

        admitted = create_edges(builder, AleaPRNG("square"))

        # four sides plus exactly one of the two crossing diagonals
        assert admitted == 5
        pairs = {tuple(sorted(e)) for e in builder.edge_vertices}
        assert ((0, 2) in pairs) != ((1, 3) in pairs)

    def test_admitted_edges_do_not_cross(self):
        """No admitted edge crosses one admitted before it."""
        builder = GraphBuilder(GraphConfig())
        rng = AleaPRNG("admission")
        add_random_vertices(builder, 40, rng)
        create_edges(builder, rng)

        for a, b in combinations(builder.edge_vertices, 2):
            if set(a) & set(b):
                continue
            # later edge first, as it was tested when admitted
            assert not segments_intersect(
                builder.positions[b[0]], builder.positions[b[1]],
                builder.positions[a[0]], builder.positions[a[1]],
            )


class TestPruning:
    """Test angle and degree pruning passes."""

    def test_narrow_angle_removes_longer_edge(self):
        """Of two edges closer than the threshold, the longer goes."""
        builder = _builder([(0, 0), (1, 0), (1, 0.1)], [(0, 1), (0, 2)])

        assert remove_small_angles(builder, math.pi / 6)

        assert builder.edge_alive == [True, False]
        assert builder.vertex_edges[0] == [0]

    def test_wide_angle_keeps_edges(self):
        """A right angle survives angle pruning."""
        builder = _builder([(0, 0), (1, 0), (0, 1)], [(0, 1), (0, 2)])

        assert not remove_small_angles(builder, math.pi / 6)
        assert builder.edge_alive == [True, True]

    def test_path_collapses_in_one_pass(self):
        """Removing a stub's edge is visible to vertices later in the same pass."""
        builder = _builder([(0, 0), (1, 0), (2, 0)], [(0, 1), (1, 2)])

        assert remove_sparse_vertices(builder)

        assert list(builder.live_vertices()) == []
        assert list(builder.live_edges()) == []

    def test_tail_is_removed_from_triangle(self):
        """A dangling path is pruned back to the triangle."""
        builder = _builder(
            [(0, 0), (2, 0), (1, 2), (-1, -1), (-2, -2)],
            [(0, 1), (1, 2), (2, 0), (0, 3), (3, 4)],
        )

        while remove_sparse_vertices(builder):
            pass

        assert list(builder.live_vertices()) == [0, 1, 2]
        assert list(builder.live_edges()) == [0, 1, 2]

    def test_isolated_vertex_removed(self):
        """A vertex without edges is removed in one pass."""
        builder = _builder([(0, 0)])

        assert remove_sparse_vertices(builder)
        assert not remove_sparse_vertices(builder)


class TestGeneratedGraph:
    """Properties every generated graph must satisfy."""

    def test_no_crossings(self, generated_graph):
        """No two edges cross except at a shared endpoint."""
        graph = generated_graph
        for a, b in combinations(range(graph.edge_count), 2):
            va = graph.edge_vertices[a]
            vb = graph.edge_vertices[b]
            if set(va) & set(vb):
                continue
            assert not segments_intersect(*graph.edge_endpoints(b), *graph.edge_endpoints(a))

    def test_no_stubs(self, generated_graph):
        """Every surviving vertex has degree of at least 2."""
        for incident in generated_graph.vertex_edges:
            assert len(incident) >= 2

    def test_no_slivers(self, generated_graph):
        """Adjacent incident edges are at least 30 degrees apart."""
        graph = generated_graph
        for vertex, incident in enumerate(graph.vertex_edges):
            origin = graph.vertex_positions[vertex]
            angles = []
            for edge in incident:
                v0, v1 = graph.edge_vertices[edge]
                other = graph.vertex_positions[v1 if v0 == vertex else v0]
                angles.append(math.atan2(other.y - origin.y, other.x - origin.x))

            assert angles == sorted(angles)
            for i, angle in enumerate(angles):
                delta = angles[(i + 1) % len(angles)] - angle
                if delta <= 0:
                    delta += 2 * math.pi
                assert delta >= math.pi / 6 - 1e-12

    def test_half_edge_partition(self, generated_graph):
        """Faces and unassigned half-edges together cover each half-edge once."""
        graph = generated_graph
        assigned = [h for face in graph.faces for h in face.half_edges]

        assert len(assigned) == len(set(assigned))
        assert sorted(assigned + unassigned_half_edges(graph)) == list(range(graph.half_edge_count))

    def test_faces_have_positive_area(self, generated_graph):
        """Every accepted face winds counterclockwise."""
        from py_planar.core.half_edges import signed_area

        for face in generated_graph.faces:
            assert signed_area(generated_graph, list(face.half_edges)) > 0

    def test_reproducible(self):
        """One seed reproduces positions, edges and colors."""
        config = GraphConfig(vertex_count=50)
        graph1 = generate_planar_graph(config, seed="repeat")
        graph2 = generate_planar_graph(config, seed="repeat")

        assert graph1.vertex_positions == graph2.vertex_positions
        assert graph1.edge_vertices == graph2.edge_vertices
        assert [f.color for f in graph1.faces] == [f.color for f in graph2.faces]

    def test_injected_rng(self):
        """An injected random.Random drives generation."""
        graph = generate_planar_graph(GraphConfig(vertex_count=50), rng=random.Random(7))

        assert graph.seed is None
        for incident in graph.vertex_edges:
            assert len(incident) >= 2

    def test_default_size_produces_faces(self):
        """The default configuration yields a non-empty subdivision."""
        graph = generate_planar_graph(seed="default_size")

        assert graph.vertex_count > 0
        assert len(graph.faces) > 0
        assert graph.seed == "default_size"

    def test_empty_graph(self):
        """Zero vertices yields an empty graph."""
        graph = generate_planar_graph(GraphConfig(vertex_count=0), seed="empty")

        assert graph.vertex_count == 0
        assert graph.edge_count == 0
        assert graph.faces == []
