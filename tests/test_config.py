"""Tests for application settings and engine configuration."""

import math

from py_planar.config import Settings
from py_planar.core.planar_graph import GraphConfig


def test_defaults_match_engine_defaults():
    """Default settings reproduce the engine defaults."""
    config = GraphConfig.from_settings(Settings())

    assert config._replace(min_angle=0) == GraphConfig(min_angle=0)
    assert math.isclose(config.min_angle, GraphConfig().min_angle)


def test_environment_overrides(monkeypatch):
    """PLANAR_ variables override settings."""
    monkeypatch.setenv("PLANAR_DEFAULT_VERTEX_COUNT", "42")
    monkeypatch.setenv("PLANAR_MIN_ANGLE_DEGREES", "45")
    monkeypatch.setenv("PLANAR_GRAPH_PADDING", "0.25")

    config = GraphConfig.from_settings(Settings())

    assert config.vertex_count == 42
    assert config.padding == 0.25
    assert math.isclose(config.min_angle, math.pi / 4)
