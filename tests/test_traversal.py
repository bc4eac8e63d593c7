import numpy as np
import pytest

from primitives.ray import Ray
from scenes.context import RenderContext
from scenes.nodes import (AABoxNode, CameraNode, CustomShapeNode, GroupNode, LightNode, PyramidNode,
                          SphereNode, TextureBoxNode)
from scenes import traversal
from scenes.nodes import NodeKind
from scenes.traversal import trace_pixel, visit, world_distance
from utils.errors import MissingCameraError, RenderConfigurationError
from utils.transformation import Rotation, Scaling, Translation


def test_center_pixel_hits_sphere(sphere_scene):
    root, sphere = sphere_scene

    context = trace_pixel(root, 10, 10, 21, 21)

    assert context.intersection is not None
    assert context.intersection.t == pytest.approx(4.0)
    np.testing.assert_allclose(context.intersection.point, [0.0, 0.0, -4.0], atol=1e-9)
    np.testing.assert_allclose(context.intersection.normal, [0.0, 0.0, 1.0], atol=1e-9)
    np.testing.assert_allclose(context.color, sphere.color)
    np.testing.assert_allclose(context.camera.origin, [0.0, 0.0, 0.0])
    np.testing.assert_allclose(context.lights, [[1.0, 1.0, 1.0]])


def test_corner_pixel_misses(sphere_scene):
    root, _ = sphere_scene

    context = trace_pixel(root, 0, 0, 21, 21)

    assert context.intersection is None
    assert context.color is None


@pytest.mark.parametrize("x, y", [(0, 0), (10, 10), (20, 3)])
def test_stacks_unwind_after_traversal(sphere_scene, x, y):
    root, _ = sphere_scene

    context = trace_pixel(root, x, y, 21, 21)

    assert len(context.matrices) == 1
    assert len(context.inverse_matrices) == 1
    np.testing.assert_allclose(context.matrix, np.eye(4))


def test_stacks_unwind_when_traversal_fails():
    root = GroupNode(Translation((0.0, 0.0, -5.0)))
    root.add(GroupNode(Scaling((2.0, 2.0, 2.0)))).add(SphereNode((1.0, 0.0, 0.0)))
    context = RenderContext(5, 5)

    with pytest.raises(MissingCameraError):
        visit(root, context)

    assert context.depth == 1
    assert len(context.inverse_matrices) == 1


def test_light_before_camera_is_an_error():
    root = GroupNode()
    root.add(LightNode())
    root.add(CameraNode())

    with pytest.raises(MissingCameraError):
        trace_pixel(root, 0, 0, 3, 3)


def test_light_position_follows_transform():
    root = GroupNode()
    root.add(CameraNode())
    group = root.add(GroupNode(Translation((0.0, 0.0, -5.0))))
    group.add(GroupNode(Rotation((0.0, 1.0, 0.0), np.pi / 2))).add(GroupNode(Translation((1.0, 0.0, 0.0)))).add(LightNode())

    context = trace_pixel(root, 1, 1, 3, 3)

    np.testing.assert_allclose(context.lights[0], [0.0, 0.0, -6.0], atol=1e-12)


def test_tie_keeps_first_visited_node():
    root = GroupNode()
    root.add(CameraNode())
    group = root.add(GroupNode(Translation((0.0, 0.0, -5.0))))
    first = group.add(SphereNode((1.0, 0.0, 0.0)))
    group.add(SphereNode((0.0, 1.0, 0.0)))

    context = trace_pixel(root, 2, 2, 5, 5)

    np.testing.assert_allclose(context.color, first.color)


def test_nearest_shape_wins_regardless_of_order():
    root = GroupNode()
    root.add(CameraNode())
    root.add(GroupNode(Translation((0.0, 0.0, -10.0)))).add(AABoxNode((1.0, 0.0, 0.0)))
    near = root.add(GroupNode(Translation((0.0, -0.5, -4.0)))).add(PyramidNode((0.0, 1.0, 0.0)))

    context = trace_pixel(root, 2, 2, 5, 5)

    np.testing.assert_allclose(context.color, near.color)
    assert context.intersection.t < 4.5


def test_camera_transform_moves_ray():
    root = GroupNode()
    # camera turned around to look down +z
    root.add(GroupNode(Rotation((0.0, 1.0, 0.0), np.pi))).add(CameraNode())
    root.add(GroupNode(Translation((0.0, 0.0, 5.0)))).add(SphereNode((0.0, 0.0, 1.0)))

    context = trace_pixel(root, 2, 2, 5, 5)

    np.testing.assert_allclose(context.ray.direction, [0.0, 0.0, 1.0], atol=1e-12)
    assert context.intersection.t == pytest.approx(4.0)


def test_scaled_sphere_distance():
    root = GroupNode()
    root.add(CameraNode())
    group = root.add(GroupNode(Translation((0.0, 0.0, -5.0))))
    group.add(GroupNode(Scaling((0.4, 0.4, 0.4)))).add(SphereNode((0.0, 0.0, 0.3)))

    context = trace_pixel(root, 2, 2, 5, 5)

    assert context.intersection.t == pytest.approx(4.6)


def test_normal_uses_inverse_transpose_under_non_uniform_scale():
    scaling = Scaling((2.0, 1.0, 1.0))
    context = RenderContext(1, 1)
    context.push(scaling.matrix, scaling.inverse_matrix)
    # straight down onto the ellipsoid x^2/4 + y^2 + z^2 = 1 at (sqrt 2, 1/sqrt 2, 0)
    context.ray = Ray(np.array([np.sqrt(2.0), 5.0 + 1.0 / np.sqrt(2.0), 0.0]), np.array([0.0, -1.0, 0.0]))

    visit(SphereNode((1.0, 1.0, 1.0)), context)

    assert context.intersection.t == pytest.approx(5.0)
    expected = np.array([np.sqrt(2.0) / 4.0, 1.0 / np.sqrt(2.0), 0.0])
    np.testing.assert_allclose(context.intersection.normal, expected / np.linalg.norm(expected), atol=1e-9)


def test_world_distance_uses_largest_direction_component():
    ray = Ray(np.array([1.0, 2.0, 3.0]), np.array([0.0, 0.6, -0.8]))

    assert world_distance(np.array([1.0, 2.0 + 0.6 * 7.0, 3.0 - 0.8 * 7.0]), ray) == pytest.approx(7.0)


def test_custom_shape_in_scene():
    root = GroupNode()
    root.add(CameraNode())
    quad = CustomShapeNode(color=(0.2, 0.2, 0.2), vertices=[-1, -1, 0, 1, -1, 0, 1, 1, 0, -1, 1, 0],
                           indices=[0, 1, 2, 0, 2, 3])
    root.add(GroupNode(Translation((0.3, 0.1, -3.0)))).add(quad)

    context = trace_pixel(root, 2, 2, 5, 5)

    assert context.intersection.t == pytest.approx(3.0)
    np.testing.assert_allclose(context.intersection.normal, [0.0, 0.0, 1.0])


def test_placeholder_surfaces_contribute_nothing():
    root = GroupNode()
    root.add(CameraNode())
    root.add(GroupNode(Translation((0.0, 0.0, -3.0)))).add(TextureBoxNode((1.0, 1.0, 1.0), texture="hci-logo.png"))

    context = trace_pixel(root, 2, 2, 5, 5)

    assert context.intersection is None


def test_unbalanced_group_visit_is_reported(monkeypatch):
    def leaky_group(node, context):
        context.push(node.transform.matrix, node.transform.inverse_matrix)
        for child in node.children:
            visit(child, context)

    monkeypatch.setitem(traversal._VISITORS, NodeKind.GROUP, leaky_group)
    root = GroupNode(Translation((0.0, 0.0, -5.0)))
    root.add(CameraNode())

    with pytest.raises(RenderConfigurationError, match="not unwound"):
        trace_pixel(root, 2, 2, 5, 5)
