import numpy as np
import numba

from utils.vectors import cross, dot, normalize
from utils.constants import EPSILON


@numba.experimental.jitclass([
    ('vertex_1', numba.float64[:]),
    ('vertex_2', numba.float64[:]),
    ('vertex_3', numba.float64[:]),
    ('centroid', numba.float64[:]),
    ('normal', numba.float64[:])
])
class Triangle():
    def __init__(self, vertex_1, vertex_2, vertex_3):
        self.vertex_1 = vertex_1
        self.vertex_2 = vertex_2
        self.vertex_3 = vertex_3
        self.centroid = (vertex_1+vertex_2+vertex_3)/3
        self.normal = normalize(cross(vertex_2-vertex_1, vertex_3-vertex_1))

    def intersect(self, ray):

        vertex_a = self.vertex_1
        vertex_b = self.vertex_2
        vertex_c = self.vertex_3

        plane_normal = self.normal

        ab = vertex_b - vertex_a
        ac = vertex_c - vertex_a

        ray_dot_plane = dot(ray.direction, plane_normal)

        if abs(ray_dot_plane)<=EPSILON:
            return False

        pvec = cross(ray.direction, ac)

        det = dot(ab, pvec)

        if -EPSILON < det < EPSILON:
            return False

        inv_det = 1.0 / det

        tvec = ray.origin - vertex_a

        u = dot(tvec, pvec) * inv_det

        if u < 0 or u > 1:
            return False

        qvec = cross(tvec, ab)

        v = dot(ray.direction, qvec) * inv_det

        if v < 0 or u+v > 1:
            return False

        t = dot(ac, qvec) * inv_det

        if t <= ray.tmin or t > ray.tmax:
            return False

        ray.tmax = t

        return True

    def get_normal(self, point):
        return self.normal


def build_triangles(vertices, indices):
    """
    Turns flat vertex and index buffers into a typed list of triangles
    :param vertices: flat sequence of x, y, z coordinates
    :param indices: flat sequence of vertex indices, three per triangle
    :return: numba typed list of Triangle
    """
    vertices = np.asarray(vertices, dtype=np.float64)
    indices = np.asarray(indices, dtype=np.intp)

    if vertices.size % 3 != 0:
        raise ValueError("vertex buffer length must be a multiple of 3, got %d" % vertices.size)
    if indices.size % 3 != 0:
        raise ValueError("index buffer length must be a multiple of 3, got %d" % indices.size)

    points = vertices.reshape((-1, 3))
    faces = indices.reshape((-1, 3))
    if faces.size and (faces.min() < 0 or faces.max() >= len(points)):
        raise ValueError("index buffer refers to a vertex outside the vertex buffer")

    triangles = numba.typed.List()
    for face in faces:
        p, q, r = points[face[0]], points[face[1]], points[face[2]]
        triangle = Triangle(vertex_1=np.ascontiguousarray(p, dtype=np.float64),
                            vertex_2=np.ascontiguousarray(q, dtype=np.float64),
                            vertex_3=np.ascontiguousarray(r, dtype=np.float64)
                            )
        triangles.append(triangle)

    return triangles
