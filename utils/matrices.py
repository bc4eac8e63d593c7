import numba
import numpy as np

from utils.vectors import normalize


@numba.njit
def identity():
    return np.eye(4, dtype=np.float64)


@numba.njit
def translation(offset):
    m = np.eye(4, dtype=np.float64)
    m[0, 3] = offset[0]
    m[1, 3] = offset[1]
    m[2, 3] = offset[2]
    return m


@numba.njit
def scaling(scale):
    m = np.eye(4, dtype=np.float64)
    m[0, 0] = scale[0]
    m[1, 1] = scale[1]
    m[2, 2] = scale[2]
    return m


@numba.njit
def rotation(axis, angle):
    """
    Right handed rotation of `angle` radians about `axis` (Rodrigues form)
    :param axis: rotation axis, normalized here
    :param angle: angle in radians
    :return: 4x4 rotation matrix
    """
    a = normalize(axis)
    x, y, z = a[0], a[1], a[2]
    c = np.cos(angle)
    s = np.sin(angle)
    t = 1.0 - c

    m = np.eye(4, dtype=np.float64)
    m[0, 0] = t*x*x + c
    m[0, 1] = t*x*y - s*z
    m[0, 2] = t*x*z + s*y
    m[1, 0] = t*x*y + s*z
    m[1, 1] = t*y*y + c
    m[1, 2] = t*y*z - s*x
    m[2, 0] = t*x*z - s*y
    m[2, 1] = t*y*z + s*x
    m[2, 2] = t*z*z + c
    return m


@numba.njit
def mul_vec(m, v):
    out = np.zeros((4), dtype=np.float64)
    for i in range(4):
        out[i] = m[i, 0]*v[0] + m[i, 1]*v[1] + m[i, 2]*v[2] + m[i, 3]*v[3]
    return out


@numba.njit
def transform_point(m, p):
    return mul_vec(m, np.array([p[0], p[1], p[2], 1.0]))[:3]


@numba.njit
def transform_direction(m, d):
    return mul_vec(m, np.array([d[0], d[1], d[2], 0.0]))[:3]
