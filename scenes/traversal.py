'''
Per pixel scene graph walk.

visit() dispatches on node.kind through _VISITORS, keeping a stack of
local-to-world matrices and one of their inverses. Shape nodes are
intersected in object space against the canonical unit primitives and
the hit is carried back to world space, where the nearest one is kept.
'''
import logging

import numpy as np

from primitives.aabb import AABB
from primitives.intersects import Intersection, box_hit, sphere_hit, triangles_hit
from primitives.pyramid import pyramid_triangles
from primitives.ray import make_ray, to_object_space
from primitives.sphere import Sphere
from scenes.context import RenderContext
from scenes.nodes import NodeKind
from scenes.scene import Camera
from utils.constants import DEFAULT_ALPHA, ORIGIN
from utils.errors import MissingCameraError, RenderConfigurationError
from utils.matrices import mul_vec, transform_direction, transform_point
from utils.vectors import normalize

logger = logging.getLogger(__name__)

UNIT_SPHERE = Sphere(np.zeros((3), dtype=np.float64), 1.0)
UNIT_AABOX = AABB(np.array([-0.5, -0.5, -0.5], dtype=np.float64),
                  np.array([0.5, 0.5, 0.5], dtype=np.float64))
UNIT_PYRAMID = pyramid_triangles()


def visit_group(node, context):
    context.push(node.transform.matrix, node.transform.inverse_matrix)
    try:
        for child in node.children:
            visit(child, context)
    finally:
        context.pop()


def visit_camera(node, context):
    to_world = context.matrix
    origin = np.ascontiguousarray(mul_vec(to_world, ORIGIN)[:3])
    context.camera = Camera(origin, context.alpha, to_world)
    context.ray = make_ray(context.x, context.y, context.width, context.height, context.camera)


def visit_light(node, context):
    if context.ray is None:
        raise MissingCameraError("light node visited before any camera node")
    context.lights.append(np.ascontiguousarray(mul_vec(context.matrix, ORIGIN)[:3]))


def world_distance(point, ray):
    """
    Ray parameter of a world space point lying on the ray, measured along
    the direction component of largest magnitude so it is never divided by 0
    """
    axis = int(np.argmax(np.abs(ray.direction)))
    return (point[axis] - ray.origin[axis]) / ray.direction[axis]


def _to_world(intersection, context):
    to_world = context.matrix
    point = transform_point(to_world, intersection.point)
    # normals go through the inverse transpose to stay perpendicular under non uniform scale
    normal = normalize(transform_direction(np.ascontiguousarray(context.inverse_matrix.T), intersection.normal))
    t = world_distance(point, context.ray)
    return Intersection(t, point, normal)


def _visit_shape(node, context, hit):
    if context.ray is None:
        raise MissingCameraError("%s node visited before any camera node" % node.kind.value)

    ray = to_object_space(context.ray, context.inverse_matrix)
    intersection = hit(ray)
    if intersection is None:
        return

    intersection = _to_world(intersection, context)
    if not np.isfinite(intersection.t):
        logger.debug("dropping non finite hit at pixel (%d, %d)", context.x, context.y)
        return

    if context.intersection is None or intersection.closer_than(context.intersection):
        context.intersection = intersection
        context.color = node.color


def visit_sphere(node, context):
    _visit_shape(node, context, lambda ray: sphere_hit(ray, UNIT_SPHERE))


def visit_aabox(node, context):
    _visit_shape(node, context, lambda ray: box_hit(ray, UNIT_AABOX))


def visit_pyramid(node, context):
    _visit_shape(node, context, lambda ray: triangles_hit(ray, UNIT_PYRAMID))


def visit_custom_shape(node, context):
    _visit_shape(node, context, lambda ray: triangles_hit(ray, node.triangles))


def visit_placeholder(node, context):
    # textured surfaces are not ray traced
    pass


_VISITORS = {
    NodeKind.GROUP: visit_group,
    NodeKind.CAMERA: visit_camera,
    NodeKind.LIGHT: visit_light,
    NodeKind.SPHERE: visit_sphere,
    NodeKind.AABOX: visit_aabox,
    NodeKind.PYRAMID: visit_pyramid,
    NodeKind.CUSTOM_SHAPE: visit_custom_shape,
    NodeKind.TEXTURE_BOX: visit_placeholder,
    NodeKind.TEXTURE_VIDEO_BOX: visit_placeholder,
    NodeKind.TEXTURE_TEXT_BOX: visit_placeholder,
    NodeKind.TEXTURE_PYRAMID: visit_placeholder,
}

if set(_VISITORS) != set(NodeKind):
    raise RenderConfigurationError("no visitor for node kinds %s" % sorted(
        kind.name for kind in set(NodeKind) - set(_VISITORS)))


def visit(node, context):
    _VISITORS[node.kind](node, context)


def trace_pixel(root, x, y, width, height, alpha=DEFAULT_ALPHA, context=None):
    """
    Runs one full traversal for pixel (x, y)
    :return: the RenderContext holding the nearest hit, its color, the lights and the camera
    """
    if context is None:
        context = RenderContext(width, height, alpha)
    context.reset(x, y)

    visit(root, context)

    if context.depth != 1 or len(context.inverse_matrices) != 1:
        raise RenderConfigurationError("transform stack not unwound after traversal, depth %d" % context.depth)
    return context
