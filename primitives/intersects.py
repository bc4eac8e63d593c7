import numba
import numpy as np


spec = [
    ('t', numba.float64),
    ('point', numba.float64[:]),
    ('normal', numba.float64[:])
]


@numba.experimental.jitclass(spec)
class Intersection:
    def __init__(self, t, point, normal):
        self.t = t
        self.point = point
        self.normal = normal

    def closer_than(self, other):
        return self.t < other.t


@numba.njit
def intersect_primitives(ray, triangles):
    """
    Tests every triangle, each accepted hit shrinks ray.tmax so only
    nearer triangles are accepted afterwards
    :return: index of the nearest triangle hit, -1 if none
    """
    nearest = -1
    for i in range(len(triangles)):
        if triangles[i].intersect(ray):
            nearest = i
    return nearest


def _intersection(ray, normal):
    t = ray.tmax
    return Intersection(t, ray.at(t), np.ascontiguousarray(normal, dtype=np.float64))


def sphere_hit(ray, sphere):
    if not sphere.intersect(ray):
        return None
    return _intersection(ray, sphere.get_normal(ray.at(ray.tmax)))


def box_hit(ray, box):
    if not box.intersect(ray):
        return None
    return _intersection(ray, box.get_normal(ray.at(ray.tmax)))


def triangles_hit(ray, triangles):
    if len(triangles) == 0:
        return None
    nearest = intersect_primitives(ray, triangles)
    if nearest < 0:
        return None
    return _intersection(ray, triangles[nearest].get_normal(ray.at(ray.tmax)))
