import numpy as np
import pyvista as pv

from scenes.nodes import CustomShapeNode


def custom_shape_from_polydata(mesh, color=None):
    """
    Builds a CustomShapeNode from a pyvista mesh, triangulating it first
    :param mesh: pyvista PolyData (or anything with extract_surface)
    :param color: flat material color
    :return: CustomShapeNode with the mesh's vertex and index buffers
    """
    if not isinstance(mesh, pv.PolyData):
        mesh = mesh.extract_surface()
    tri_mesh = mesh.triangulate()

    points = np.ascontiguousarray(tri_mesh.points, dtype=np.float64)
    faces = tri_mesh.faces.reshape((-1, 4))[:, 1:4]

    return CustomShapeNode(color=color, vertices=points.ravel(), indices=faces.ravel())


def get_floor(x_dim, z_dim, color=None):
    """
    A flat 2*x_dim by 2*z_dim floor in the xz plane, facing +y
    """
    plane = pv.Plane(center=(0.0, 0.0, 0.0), direction=(0.0, 1.0, 0.0),
                     i_size=2 * x_dim, j_size=2 * z_dim, i_resolution=1, j_resolution=1)
    return custom_shape_from_polydata(plane, color)
