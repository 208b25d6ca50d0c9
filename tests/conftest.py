"""Shared graph fixtures."""

import pytest

from graph_helpers import build_graph, grid_edges, grid_positions


@pytest.fixture
def unit_square_graph():
    """Single unit-square face with corners (0,0), (1,0), (1,1), (0,1)."""
    return build_graph([(0, 0), (1, 0), (1, 1), (0, 1)], [(0, 1), (1, 2), (2, 3), (3, 0)])


@pytest.fixture
def grid_graph():
    """2x2 grid of unit squares spanning [0, 2] x [0, 2]."""
    return build_graph(grid_positions(2), grid_edges(2))


@pytest.fixture
def centered_grid_graph():
    """2x2 grid of unit squares filling the default [-1, 1] x [-1, 1] domain."""
    return build_graph(grid_positions(2, offset=-1.0), grid_edges(2))


@pytest.fixture
def grid_data():
    """Exchange-format 2x2 grid."""
    return {
        "vertices": [list(p) for p in grid_positions(2)],
        "edges": [list(e) for e in grid_edges(2)],
    }
