import logging

import numpy as np

from numba_progress import ProgressBar

from scenes.context import RenderContext
from scenes.phong import PhongValues, shade
from scenes.scene import Scene
from scenes.traversal import trace_pixel

logger = logging.getLogger(__name__)


def to_rgba(color):
    rgba = np.empty((4), dtype=np.uint8)
    rgba[:3] = np.rint(np.clip(color[:3], 0.0, 1.0) * 255).astype(np.uint8)
    rgba[3] = 255
    return rgba


def shade_context(context, phong_values):
    """
    Color of the nearest hit gathered in context, None when nothing was hit
    """
    if context.intersection is None:
        return None
    if context.color is None:
        return to_rgba(np.zeros((3), dtype=np.float64))
    color = shade(context.color, context.intersection, context.light_array(), phong_values, context.camera.origin)
    return to_rgba(color)


def render_scene(scene, root, phong_values=None, show_progress=False):
    """
    Ray traces root into scene.image, one full traversal per pixel.
    The frame is built in a separate buffer and only copied into
    scene.image once every pixel is done.
    :param scene: Scene holding raster size, field of view and background
    :param root: root node of the scene graph
    :param phong_values: PhongValues, defaults when None
    :param show_progress: show a per row progress bar
    :return: scene.image
    """
    if phong_values is None:
        phong_values = PhongValues()

    logger.info("rendering %dx%d frame", scene.width, scene.height)

    image = scene.blank()
    context = RenderContext(scene.width, scene.height, scene.alpha)
    hits = 0

    with ProgressBar(total=scene.height, disable=not show_progress) as progress:
        for y in range(scene.height):
            for x in range(scene.width):
                trace_pixel(root, x, y, scene.width, scene.height, scene.alpha, context)

                rgba = shade_context(context, phong_values)
                if rgba is not None:
                    image[y, x] = rgba
                    hits += 1
            progress.update(1)

    scene.image[...] = image
    logger.info("frame done, %d of %d pixels hit", hits, scene.width * scene.height)

    return scene.image


def render(root, camera_spec, phong_values=None):
    """
    Renders root for the raster described by camera_spec, a Scene or any
    object with width, height and optionally alpha and background
    :return: height x width x 4 RGBA uint8 array
    """
    if isinstance(camera_spec, Scene):
        scene = camera_spec
    else:
        kwargs = {}
        for name in ("alpha", "background"):
            if getattr(camera_spec, name, None) is not None:
                kwargs[name] = getattr(camera_spec, name)
        scene = Scene(camera_spec.width, camera_spec.height, **kwargs)
    return render_scene(scene, root, phong_values)
