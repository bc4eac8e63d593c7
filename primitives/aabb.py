import numba
import numpy as np

from utils.constants import EPSILON


@numba.experimental.jitclass([
    ('min_point', numba.float64[:]),
    ('max_point', numba.float64[:]),
    ('centroid', numba.float64[:])
])
class AABB:
    def __init__(self, min_point, max_point):
        self.min_point = np.minimum(min_point, max_point)
        self.max_point = np.maximum(min_point, max_point)

        self.centroid = (min_point+max_point)/2

    def intersect(self, ray):
        t_near = -np.inf
        t_far = np.inf

        for i in range(3):
            if abs(ray.direction[i]) < EPSILON:
                # parallel to this slab pair, the origin has to lie between them
                if ray.origin[i] < self.min_point[i] or ray.origin[i] > self.max_point[i]:
                    return False
                continue

            inv_dir = 1.0 / ray.direction[i]
            t1 = (self.min_point[i] - ray.origin[i]) * inv_dir
            t2 = (self.max_point[i] - ray.origin[i]) * inv_dir
            if t1 > t2:
                t1, t2 = t2, t1

            t_near = max(t_near, t1)
            t_far = min(t_far, t2)

            if t_near > t_far:
                return False

        if t_far <= ray.tmin:
            return False

        t = t_near
        if t <= ray.tmin:
            # origin inside the box, leave through the far face
            t = t_far

        if t > ray.tmax:
            return False

        ray.tmax = t

        return True

    def get_normal(self, point):
        normal = np.zeros((3), dtype=np.float64)
        axis = 0
        largest = -1.0
        for i in range(3):
            half_extent = (self.max_point[i] - self.min_point[i]) / 2
            offset = (point[i] - self.centroid[i]) / half_extent
            if abs(offset) > largest:
                largest = abs(offset)
                axis = i
        normal[axis] = 1.0 if point[axis] >= self.centroid[axis] else -1.0
        return normal
