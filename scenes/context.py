from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from utils.constants import DEFAULT_ALPHA
from utils.matrices import identity


@dataclass
class RenderContext:
    """
    Per pixel traversal state. Owned by a single traversal, never shared,
    so separate pixels can be traced independently.
    """
    width: int
    height: int
    alpha: float = DEFAULT_ALPHA
    x: int = 0
    y: int = 0
    matrices: List[np.ndarray] = field(default_factory=list)
    inverse_matrices: List[np.ndarray] = field(default_factory=list)
    lights: List[np.ndarray] = field(default_factory=list)
    camera: Optional[object] = None
    ray: Optional[object] = None
    intersection: Optional[object] = None
    color: Optional[np.ndarray] = None

    def __post_init__(self):
        self.reset(self.x, self.y)

    def reset(self, x, y):
        self.x = x
        self.y = y
        self.matrices = [identity()]
        self.inverse_matrices = [identity()]
        self.lights = []
        self.camera = None
        self.ray = None
        self.intersection = None
        self.color = None

    @property
    def depth(self):
        return len(self.matrices)

    @property
    def matrix(self):
        return self.matrices[-1]

    @property
    def inverse_matrix(self):
        return self.inverse_matrices[-1]

    def push(self, matrix, inverse):
        self.matrices.append(np.ascontiguousarray(self.matrix @ matrix))
        self.inverse_matrices.append(np.ascontiguousarray(inverse @ self.inverse_matrix))

    def pop(self):
        self.matrices.pop()
        self.inverse_matrices.pop()

    def light_array(self):
        if not self.lights:
            return np.zeros((0, 3), dtype=np.float64)
        return np.ascontiguousarray(np.stack(self.lights), dtype=np.float64)
