import numpy as np
import numba

from utils.constants import BACKGROUND, DEFAULT_ALPHA


@numba.experimental.jitclass([
    ('origin', numba.float64[:]),
    ('alpha', numba.float64),
    ('to_world', numba.float64[:, :])
])
class Camera:
    def __init__(self, origin, alpha, to_world):
        self.origin = origin
        self.alpha = alpha
        self.to_world = to_world


class Scene:
    """
    Output raster and the camera settings that go with it.
    The image is height x width x 4 RGBA bytes.
    """

    def __init__(self, width=400, height=400, alpha=DEFAULT_ALPHA, background=BACKGROUND):
        if width <= 0 or height <= 0:
            raise ValueError("raster size must be positive, got %dx%d" % (width, height))
        self.width = int(width)
        self.height = int(height)
        self.alpha = float(alpha)
        self.background = np.asarray(background, dtype=np.uint8)
        self.image = self.blank()

    def blank(self):
        image = np.empty((self.height, self.width, 4), dtype=np.uint8)
        image[:, :] = self.background
        return image
