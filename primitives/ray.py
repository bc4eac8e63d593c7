import numpy as np
import numba

from utils.constants import EPSILON, IMAGE_PLANE_WIDTH, IMAGE_PLANE_HEIGHT
from utils.matrices import transform_direction, transform_point
from utils.vectors import normalize


@numba.experimental.jitclass([
    ('origin', numba.float64[:]),
    ('direction', numba.float64[:]),
    ('tmin', numba.float64),
    ('tmax', numba.float64)
])
class Ray:
    def __init__(self, origin, direction, tmin=EPSILON):
        self.origin = origin
        self.direction = direction
        self.tmin = tmin
        self.tmax = np.inf

    def at(self, t):
        return self.origin + t * self.direction


@numba.njit
def make_ray(x, y, width, height, camera):
    """
    Pinhole camera ray through pixel (x, y) of a width x height raster.
    The raster is mapped onto the fixed virtual image plane and the
    camera space ray is moved into world space by camera.to_world.
    """
    u = (x + 0.5) * IMAGE_PLANE_WIDTH / width - IMAGE_PLANE_WIDTH / 2
    v = IMAGE_PLANE_HEIGHT / 2 - (y + 0.5) * IMAGE_PLANE_HEIGHT / height
    w = -(IMAGE_PLANE_WIDTH / 2) / np.tan(camera.alpha / 2)

    camera_direction = np.array([u, v, w], dtype=np.float64)
    ray_direction = normalize(transform_direction(camera.to_world, camera_direction))
    return Ray(camera.origin.copy(), ray_direction, EPSILON)


def to_object_space(ray, inverse_matrix):
    return Ray(transform_point(inverse_matrix, ray.origin),
               normalize(transform_direction(inverse_matrix, ray.direction)),
               ray.tmin)
