"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from scenes.nodes import CameraNode, GroupNode, LightNode, SphereNode  # noqa: E402
from scenes.phong import PhongValues  # noqa: E402
from utils.transformation import Translation  # noqa: E402
from utils.vectors import color  # noqa: E402


@pytest.fixture
def phong_values():
    """The phong coefficients used throughout the examples."""
    return PhongValues(0.8, 0.5, 0.5, 10.0)


@pytest.fixture
def sphere_scene():
    """Unit sphere 5 units in front of a camera at the origin, light at (1, 1, 1)."""
    root = GroupNode(Translation((0.0, 0.0, 0.0)))
    root.add(CameraNode())
    light_group = root.add(GroupNode(Translation((1.0, 1.0, 1.0))))
    light_group.add(LightNode())
    sphere_group = root.add(GroupNode(Translation((0.0, 0.0, -5.0))))
    sphere = sphere_group.add(SphereNode(color(0.5, 0.0, 0.0)))
    return root, sphere
