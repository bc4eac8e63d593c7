'''
Quaternions stored as float64 arrays (x, y, z, w)
'''
import numba
import numpy as np

from utils.constants import EPSILON
from utils.vectors import normalize


@numba.njit
def from_axis_angle(axis, angle):
    a = normalize(axis)
    s = np.sin(angle / 2.0)
    return np.array([a[0]*s, a[1]*s, a[2]*s, np.cos(angle / 2.0)], dtype=np.float64)


@numba.njit
def multiply(q, r):
    return np.array([
        q[3]*r[0] + q[0]*r[3] + q[1]*r[2] - q[2]*r[1],
        q[3]*r[1] - q[0]*r[2] + q[1]*r[3] + q[2]*r[0],
        q[3]*r[2] + q[0]*r[1] - q[1]*r[0] + q[2]*r[3],
        q[3]*r[3] - q[0]*r[0] - q[1]*r[1] - q[2]*r[2],
    ], dtype=np.float64)


@numba.njit
def conjugate(q):
    return np.array([-q[0], -q[1], -q[2], q[3]], dtype=np.float64)


@numba.njit
def inverse(q):
    norm_sq = q[0]*q[0] + q[1]*q[1] + q[2]*q[2] + q[3]*q[3]
    return conjugate(q) / norm_sq


@numba.njit
def to_matrix(q):
    norm = np.sqrt(q[0]*q[0] + q[1]*q[1] + q[2]*q[2] + q[3]*q[3])
    x, y, z, w = q[0]/norm, q[1]/norm, q[2]/norm, q[3]/norm

    m = np.eye(4, dtype=np.float64)
    m[0, 0] = 1 - 2*(y*y + z*z)
    m[0, 1] = 2*(x*y - w*z)
    m[0, 2] = 2*(x*z + w*y)
    m[1, 0] = 2*(x*y + w*z)
    m[1, 1] = 1 - 2*(x*x + z*z)
    m[1, 2] = 2*(y*z - w*x)
    m[2, 0] = 2*(x*z - w*y)
    m[2, 1] = 2*(y*z + w*x)
    m[2, 2] = 1 - 2*(x*x + y*y)
    return m


@numba.njit
def slerp(q0, q1, t):
    """
    Spherical interpolation between two unit quaternions, taking the short arc
    """
    cos_half = q0[0]*q1[0] + q0[1]*q1[1] + q0[2]*q1[2] + q0[3]*q1[3]
    end = q1.copy()
    if cos_half < 0:
        end = -q1
        cos_half = -cos_half

    if cos_half > 1.0 - EPSILON:
        # nearly parallel, fall back to lerp
        q = q0 + t * (end - q0)
    else:
        half = np.arccos(cos_half)
        sin_half = np.sin(half)
        q = (np.sin((1 - t) * half) * q0 + np.sin(t * half) * end) / sin_half

    return q / np.sqrt(q[0]*q[0] + q[1]*q[1] + q[2]*q[2] + q[3]*q[3])
