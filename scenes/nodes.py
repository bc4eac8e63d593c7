'''
Scene graph nodes.

Every node carries a NodeKind tag; the traversal dispatches on that tag
instead of on the class hierarchy. Group nodes own their children and the
graph must stay a tree: a node reachable from itself recurses forever.
'''
import enum
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from primitives.triangle import build_triangles
from utils.transformation import MatrixTransformation, Translation


class NodeKind(enum.Enum):
    GROUP = "group"
    CAMERA = "camera"
    LIGHT = "light"
    SPHERE = "sphere"
    AABOX = "aabox"
    PYRAMID = "pyramid"
    CUSTOM_SHAPE = "custom_shape"
    TEXTURE_BOX = "texture_box"
    TEXTURE_VIDEO_BOX = "texture_video_box"
    TEXTURE_TEXT_BOX = "texture_text_box"
    TEXTURE_PYRAMID = "texture_pyramid"


SHAPE_KINDS = frozenset([NodeKind.SPHERE, NodeKind.AABOX, NodeKind.PYRAMID, NodeKind.CUSTOM_SHAPE])
PLACEHOLDER_KINDS = frozenset([NodeKind.TEXTURE_BOX, NodeKind.TEXTURE_VIDEO_BOX,
                               NodeKind.TEXTURE_TEXT_BOX, NodeKind.TEXTURE_PYRAMID])


def _as_color(color):
    if color is None:
        return None
    rgba = np.asarray(color, dtype=np.float64).ravel()
    if rgba.size == 3:
        rgba = np.append(rgba, 1.0)
    if rgba.size != 4:
        raise ValueError("color needs 3 or 4 components, got %d" % rgba.size)
    return rgba


class Node:
    kind: NodeKind


@dataclass(eq=False)
class GroupNode(Node):
    transform: MatrixTransformation = field(default_factory=lambda: Translation((0.0, 0.0, 0.0)))
    children: List[Node] = field(default_factory=list)
    kind = NodeKind.GROUP

    def add(self, child):
        self.children.append(child)
        return child


@dataclass(eq=False)
class CameraNode(Node):
    kind = NodeKind.CAMERA


@dataclass(eq=False)
class LightNode(Node):
    kind = NodeKind.LIGHT


@dataclass(eq=False)
class ShapeNode(Node):
    color: Optional[np.ndarray] = None

    def __post_init__(self):
        self.color = _as_color(self.color)


@dataclass(eq=False)
class SphereNode(ShapeNode):
    kind = NodeKind.SPHERE


@dataclass(eq=False)
class AABoxNode(ShapeNode):
    kind = NodeKind.AABOX


@dataclass(eq=False)
class PyramidNode(ShapeNode):
    kind = NodeKind.PYRAMID


@dataclass(eq=False)
class CustomShapeNode(ShapeNode):
    vertices: Optional[np.ndarray] = None
    indices: Optional[np.ndarray] = None
    kind = NodeKind.CUSTOM_SHAPE

    def __post_init__(self):
        super().__post_init__()
        self.vertices = np.asarray([] if self.vertices is None else self.vertices, dtype=np.float64).ravel()
        self.indices = np.asarray([] if self.indices is None else self.indices, dtype=np.intp).ravel()
        self.triangles = build_triangles(self.vertices, self.indices)


@dataclass(eq=False)
class TextureBoxNode(ShapeNode):
    texture: str = ""
    normal_map: Optional[str] = None
    kind = NodeKind.TEXTURE_BOX


@dataclass(eq=False)
class TextureVideoBoxNode(ShapeNode):
    texture: str = ""
    kind = NodeKind.TEXTURE_VIDEO_BOX


@dataclass(eq=False)
class TextureTextBoxNode(ShapeNode):
    text: str = ""
    kind = NodeKind.TEXTURE_TEXT_BOX


@dataclass(eq=False)
class TexturePyramidNode(ShapeNode):
    texture: str = ""
    kind = NodeKind.TEXTURE_PYRAMID
