import numpy as np

EPSILON = 0.000001

# virtual image plane the pinhole camera projects onto
IMAGE_PLANE_WIDTH = 100.0
IMAGE_PLANE_HEIGHT = 100.0
DEFAULT_ALPHA = np.pi / 3

DEFAULT_AMBIENT = 0.8
DEFAULT_DIFFUSE = 0.5
DEFAULT_SPECULAR = 0.5
DEFAULT_SHININESS = 10.0

ORIGIN = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)

BACKGROUND = np.array([0, 0, 0, 255], dtype=np.uint8)
