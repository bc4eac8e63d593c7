import numpy as np

from primitives.triangle import build_triangles


def pyramid_triangles(base_half_size=0.5, height=1.0):
    """
    Square based pyramid standing on the xz plane with its apex on +y.
    Four side faces plus the base split in two, all wound so the
    geometric normal points away from the pyramid.
    """
    s = base_half_size
    vertices = np.array([
        [-s, 0.0, -s],
        [-s, 0.0, s],
        [s, 0.0, -s],
        [s, 0.0, s],
        [0.0, height, 0.0],
    ], dtype=np.float64)

    faces = np.array([
        [1, 3, 4],  # front, +z
        [3, 2, 4],  # right, +x
        [2, 0, 4],  # back, -z
        [0, 1, 4],  # left, -x
        [0, 2, 3],  # base, -y
        [0, 3, 1],
    ], dtype=np.intp)

    return build_triangles(vertices.ravel(), faces.ravel())
