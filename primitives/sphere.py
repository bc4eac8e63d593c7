import numba
import numpy as np

from utils.constants import EPSILON
from utils.vectors import dot, normalize


@numba.experimental.jitclass([
    ('center', numba.float64[:]),
    ('radius', numba.float64)
])
class Sphere:
    def __init__(self, center, radius):
        self.center = center
        self.radius = radius

    def intersect(self, ray):
        oc = ray.origin - self.center

        a = dot(ray.direction, ray.direction)
        b = 2.0 * dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c

        # tangent rays count as misses
        if discriminant <= EPSILON:
            return False

        root = np.sqrt(discriminant)
        t = (-b - root) / (2.0 * a)
        if t <= ray.tmin:
            # origin inside the sphere, take the far root
            t = (-b + root) / (2.0 * a)

        if t <= ray.tmin or t > ray.tmax:
            return False

        ray.tmax = t

        return True

    def get_normal(self, point):
        return normalize(point - self.center)
