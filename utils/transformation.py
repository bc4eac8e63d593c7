'''
Affine transformations carrying a matrix and its inverse.
Every mutation goes through _recalculate so the pair never drifts apart.
'''
import numpy as np

from utils import matrices
from utils import quaternion
from utils.constants import EPSILON
from utils.errors import DegenerateTransformationError


def _as_vector(values, name):
    vector = np.asarray(values, dtype=np.float64).ravel()
    if vector.size < 3:
        raise DegenerateTransformationError("%s needs at least 3 components, got %d" % (name, vector.size))
    vector = np.ascontiguousarray(vector[:3])
    if not np.all(np.isfinite(vector)):
        raise DegenerateTransformationError("%s has non finite components: %s" % (name, vector))
    return vector


def _check_scale(scale):
    if np.any(np.abs(scale) < EPSILON):
        raise DegenerateTransformationError("scale %s has a zero component and cannot be inverted" % scale)


def _check_axis(axis):
    if np.sqrt(np.sum(axis * axis)) < EPSILON:
        raise DegenerateTransformationError("rotation axis must not be the zero vector")


class MatrixTransformation:
    """
    A transformation given directly by its matrix; the inverse is
    computed when not supplied
    """

    def __init__(self, matrix, inverse=None):
        self._matrix = None
        self._inverse = None
        self._set(matrix, inverse)

    @property
    def matrix(self):
        return self._matrix

    @property
    def inverse_matrix(self):
        return self._inverse

    def _set(self, matrix, inverse=None):
        matrix = np.ascontiguousarray(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise DegenerateTransformationError("expected a 4x4 matrix, got shape %s" % (matrix.shape,))
        if not np.all(np.isfinite(matrix)):
            raise DegenerateTransformationError("matrix has non finite entries")

        if inverse is None:
            try:
                inverse = np.linalg.inv(matrix)
            except np.linalg.LinAlgError:
                raise DegenerateTransformationError("matrix is singular and has no inverse")
            # near singular matrices invert without error but not accurately
            if not np.all(np.isfinite(inverse)) or not np.allclose(matrix @ inverse, np.eye(4), atol=1e-6):
                raise DegenerateTransformationError("matrix is singular and has no inverse")
        inverse = np.ascontiguousarray(inverse, dtype=np.float64)

        # both assigned together, after all checks passed
        self._matrix, self._inverse = matrix, inverse

    def to_dict(self):
        return {
            type(self).__name__: {
                "matrix": self._matrix.tolist(),
                "inverse": self._inverse.tolist(),
            }
        }


class Translation(MatrixTransformation):
    def __init__(self, translation):
        self._translation_vector = _as_vector(translation, "translation")
        super().__init__(*self._recalculate(self._translation_vector))

    @property
    def translation_vector(self):
        return self._translation_vector

    @translation_vector.setter
    def translation_vector(self, translation):
        translation = _as_vector(translation, "translation")
        self._set(*self._recalculate(translation))
        self._translation_vector = translation

    @staticmethod
    def _recalculate(translation):
        return matrices.translation(translation), matrices.translation(-translation)


class Rotation(MatrixTransformation):
    def __init__(self, axis, angle):
        self._axis = _as_vector(axis, "axis")
        self._angle = float(angle)
        super().__init__(*self._recalculate(self._axis, self._angle))

    @property
    def axis(self):
        return self._axis

    @axis.setter
    def axis(self, axis):
        axis = _as_vector(axis, "axis")
        self._set(*self._recalculate(axis, self._angle))
        self._axis = axis

    @property
    def angle(self):
        return self._angle

    @angle.setter
    def angle(self, angle):
        angle = float(angle)
        if not np.isfinite(angle):
            raise DegenerateTransformationError("rotation angle must be finite")
        self._set(*self._recalculate(self._axis, angle))
        self._angle = angle

    @staticmethod
    def _recalculate(axis, angle):
        _check_axis(axis)
        return matrices.rotation(axis, angle), matrices.rotation(axis, -angle)


class Scaling(MatrixTransformation):
    def __init__(self, scale):
        self._scale_vector = _as_vector(scale, "scale")
        super().__init__(*self._recalculate(self._scale_vector))

    @property
    def scale(self):
        return self._scale_vector

    @scale.setter
    def scale(self, scale):
        scale = _as_vector(scale, "scale")
        self._set(*self._recalculate(scale))
        self._scale_vector = scale

    @staticmethod
    def _recalculate(scale):
        _check_scale(scale)
        return matrices.scaling(scale), matrices.scaling(1.0 / scale)


class SQT(MatrixTransformation):
    """
    Scale, then rotate by a quaternion, then translate:
    matrix = T * R(q) * S
    """

    def __init__(self, scale, rotation, translation):
        axis, angle = rotation
        _check_axis(_as_vector(axis, "axis"))
        self._scale = _as_vector(scale, "scale")
        self._quaternion = quaternion.from_axis_angle(_as_vector(axis, "axis"), float(angle))
        self._translation = _as_vector(translation, "translation")
        super().__init__(*self._recalculate(self._scale, self._quaternion, self._translation))

    @property
    def scale(self):
        return self._scale

    @scale.setter
    def scale(self, scale):
        scale = _as_vector(scale, "scale")
        self._set(*self._recalculate(scale, self._quaternion, self._translation))
        self._scale = scale

    @property
    def rotation(self):
        return self._quaternion

    @rotation.setter
    def rotation(self, q):
        q = np.ascontiguousarray(q, dtype=np.float64)
        if q.shape != (4,) or np.sum(q * q) < EPSILON:
            raise DegenerateTransformationError("rotation must be a non zero quaternion (x, y, z, w)")
        self._set(*self._recalculate(self._scale, q, self._translation))
        self._quaternion = q

    @property
    def translation(self):
        return self._translation

    @translation.setter
    def translation(self, translation):
        translation = _as_vector(translation, "translation")
        self._set(*self._recalculate(self._scale, self._quaternion, translation))
        self._translation = translation

    @staticmethod
    def _recalculate(scale, q, translation):
        _check_scale(scale)
        matrix = matrices.translation(translation) @ quaternion.to_matrix(q) @ matrices.scaling(scale)
        inverse = matrices.scaling(1.0 / scale) @ quaternion.to_matrix(quaternion.inverse(q)) \
            @ matrices.translation(-translation)
        return matrix, inverse


_TRANSFORMATIONS = {
    cls.__name__: cls for cls in (MatrixTransformation, Translation, Rotation, Scaling, SQT)
}


def transformation_from_dict(data):
    """
    Rebuilds a transformation written by to_dict. The stored matrices are
    restored as a MatrixTransformation, since the parameters are not stored.
    """
    if len(data) != 1:
        raise ValueError("expected exactly one transformation entry, got %d" % len(data))
    (name, payload), = data.items()
    if name not in _TRANSFORMATIONS:
        raise ValueError("unknown transformation type: %s" % name)

    matrix = np.asarray(payload["matrix"], dtype=np.float64)
    inverse = payload.get("inverse")
    transformation = MatrixTransformation(matrix, None if inverse is None else np.asarray(inverse, dtype=np.float64))
    if not np.allclose(transformation.matrix @ transformation.inverse_matrix, np.eye(4), atol=1e-6):
        raise DegenerateTransformationError("stored inverse does not invert the stored matrix")
    return transformation
