'''
Small vector helpers usable from both python and nopython code.
Kept free of np.dot/np.cross so no BLAS backend is needed inside kernels.
'''
import numba
import numpy as np


def point(x, y, z):
    return np.array([x, y, z, 1.0], dtype=np.float64)


def direction(x, y, z):
    return np.array([x, y, z, 0.0], dtype=np.float64)


def color(r, g, b, a=1.0):
    return np.array([r, g, b, a], dtype=np.float64)


@numba.njit
def dot(a, b):
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


@numba.njit
def cross(a, b):
    return np.array([a[1]*b[2] - a[2]*b[1],
                     a[2]*b[0] - a[0]*b[2],
                     a[0]*b[1] - a[1]*b[0]], dtype=np.float64)


@numba.njit
def length(v):
    return np.sqrt(dot(v, v))


@numba.njit
def normalize(v):
    norm = length(v)
    if norm == 0.0:
        return v[:3].copy()
    return v[:3] / norm


@numba.njit
def reflect(l, n):
    # mirror l about n, both pointing away from the surface
    return 2.0 * dot(n, l) * n[:3] - l[:3]
