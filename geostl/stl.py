"""ASCII STL serialization of a SolidMesh.

Triangles are written in buffer order (top, skirt, base) with fixed
4-decimal coordinates, so identical meshes always produce identical text.
"""

import logging
import pathlib
from typing import Iterator, Optional, Union

import numpy as np

from .constants import COORD_PRECISION, DEFAULT_SOLID_NAME
from .mesh import SolidMesh
from .models import TerrainParams

logger = logging.getLogger(__name__)


def face_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Unit normal per face; zero vector for degenerate triangles."""
    a = vertices[faces[:, 0]]
    b = vertices[faces[:, 1]]
    c = vertices[faces[:, 2]]
    n = np.cross(b - a, c - a)
    norm = np.linalg.norm(n, axis=1)
    n = np.divide(n, norm[:, None], out=np.zeros_like(n), where=norm[:, None] != 0)
    # Adding 0.0 turns -0.0 into 0.0
    return n + 0.0


def _fmt(values) -> str:
    return " ".join(f"{v:.{COORD_PRECISION}f}" for v in values)


def iter_ascii_stl(mesh: SolidMesh, name: str = DEFAULT_SOLID_NAME) -> Iterator[str]:
    """Yield the STL document line by line (each line ends with a newline)."""
    tris = mesh.triangles()
    normals = face_normals(mesh.vertices, mesh.faces)

    yield f"solid {name}\n"
    for tri, normal in zip(tris, normals):
        yield f"  facet normal {_fmt(normal)}\n"
        yield "    outer loop\n"
        for vertex in tri:
            yield f"      vertex {_fmt(vertex)}\n"
        yield "    endloop\n"
        yield "  endfacet\n"
    yield f"endsolid {name}\n"


def solid_name(params: Optional[TerrainParams] = None) -> str:
    if params is None:
        return DEFAULT_SOLID_NAME
    return params.output_stem()


def serialize(mesh: SolidMesh, params: Optional[TerrainParams] = None) -> str:
    """Return *mesh* as an ASCII STL string.

    When *params* are given the solid is named after the landform and seed.
    """
    return "".join(iter_ascii_stl(mesh, solid_name(params)))


def write_ascii_stl(mesh: SolidMesh, out: Union[str, pathlib.Path],
                    name: str = DEFAULT_SOLID_NAME) -> pathlib.Path:
    """Stream *mesh* to an ASCII STL file and return its path."""
    path = pathlib.Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='ascii', newline='\n') as f:
        f.writelines(iter_ascii_stl(mesh, name))
    logger.info(f"Wrote {mesh.face_count} facets to {path}")
    return path
