import numba
import numpy as np

from utils.constants import DEFAULT_AMBIENT, DEFAULT_DIFFUSE, DEFAULT_SPECULAR, DEFAULT_SHININESS
from utils.vectors import dot, normalize, reflect


@numba.experimental.jitclass([
    ('ambient', numba.float64),
    ('diffuse', numba.float64),
    ('specular', numba.float64),
    ('shininess', numba.float64)
])
class PhongValues:
    def __init__(self, ambient=DEFAULT_AMBIENT, diffuse=DEFAULT_DIFFUSE,
                 specular=DEFAULT_SPECULAR, shininess=DEFAULT_SHININESS):
        self.ambient = ambient
        self.diffuse = diffuse
        self.specular = specular
        self.shininess = shininess


@numba.njit
def phong(color, point, normal, lights, phong_values, eye):
    """
    Ambient + per light diffuse and specular terms, no attenuation.
    The sum is not clamped.
    :param color: rgb(a) material color
    :param point: world space hit point
    :param normal: world space unit normal
    :param lights: n x 3 world light positions
    :param phong_values: PhongValues
    :param eye: world space camera origin
    :return: rgb color
    """
    base = color[:3]
    result = phong_values.ambient * base

    to_eye = normalize(eye[:3] - point[:3])

    for i in range(lights.shape[0]):
        to_light = normalize(lights[i, :3] - point[:3])

        diffuse = max(0.0, dot(normal, to_light))
        result = result + phong_values.diffuse * diffuse * base

        reflected = reflect(to_light, normal)
        specular = max(0.0, dot(reflected, to_eye)) ** phong_values.shininess
        result = result + phong_values.specular * specular * base

    return result


def shade(color, intersection, lights, phong_values, eye):
    if color is None:
        return np.zeros((3), dtype=np.float64)
    return phong(np.ascontiguousarray(color, dtype=np.float64), intersection.point, intersection.normal,
                 lights, phong_values, np.ascontiguousarray(eye, dtype=np.float64))
