"""Closed solid mesh from a height field.

The solid is made of three face groups sharing one vertex buffer:

1. Top surface: one vertex per grid point, two triangles per cell
2. Skirt: vertical walls from the top boundary down to y=0
3. Base: a flat plate at y=0 closing the bottom, fanned from its centre

All triangles are wound counter-clockwise as seen from outside (Y-up).
"""

import logging
from dataclasses import dataclass

import numpy as np
import trimesh

from .heightfield import HeightField
from .models import TerrainParams

logger = logging.getLogger(__name__)

FACE_GROUPS = ('top', 'skirt', 'base')


@dataclass(frozen=True)
class SolidMesh:
    vertices: np.ndarray        # (V, 3) float64, Y-up
    faces: np.ndarray           # (F, 3) int64, groups in FACE_GROUPS order
    top_vertex_count: int
    top_face_count: int
    skirt_face_count: int
    base_face_count: int

    @property
    def indices(self) -> np.ndarray:
        """Flat index buffer, three entries per triangle."""
        return self.faces.reshape(-1)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def group_faces(self, name: str) -> np.ndarray:
        """Return the triangles of one face group ('top', 'skirt' or 'base')."""
        counts = {
            'top': self.top_face_count,
            'skirt': self.skirt_face_count,
            'base': self.base_face_count,
        }
        if name not in counts:
            raise KeyError(f"Unknown face group: {name!r}")
        start = 0
        for group in FACE_GROUPS:
            if group == name:
                return self.faces[start:start + counts[group]]
            start += counts[group]

    def triangles(self) -> np.ndarray:
        """Vertex positions per triangle, shape (F, 3, 3)."""
        return self.vertices[self.faces]

    def signed_volume(self) -> float:
        """Enclosed volume via the divergence theorem (positive when outward)."""
        tris = self.triangles()
        return float(np.einsum('ij,ij->i', tris[:, 0],
                               np.cross(tris[:, 1], tris[:, 2])).sum() / 6.0)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Wrap the buffers in a Trimesh without merging or reordering."""
        return trimesh.Trimesh(vertices=np.array(self.vertices),
                               faces=np.array(self.faces),
                               process=False)


def _top_faces(res: int) -> np.ndarray:
    n = res + 1
    ci, cj = np.meshgrid(np.arange(res), np.arange(res), indexing='ij')
    ci = ci.ravel()
    cj = cj.ravel()

    a = ci * n + cj                 # (i,   j)
    b = (ci + 1) * n + cj           # (i+1, j)
    c = (ci + 1) * n + (cj + 1)     # (i+1, j+1)
    d = ci * n + (cj + 1)           # (i,   j+1)

    # Wound for +Y normals: a→d→b and b→d→c, interleaved per cell
    tri1 = np.column_stack([a, d, b])
    tri2 = np.column_stack([b, d, c])
    return np.stack([tri1, tri2], axis=1).reshape(-1, 3)


def _skirt(top_vertices: np.ndarray, res: int):
    """Build skirt bottom vertices and wall faces.

    Returns (vertices, faces); face indices refer to the combined buffer
    where the skirt vertices follow the top-surface vertices.
    """
    n = res + 1
    t = np.arange(n)

    # Top-surface index of each boundary vertex, per side
    sides = [
        t * n,              # j = 0
        t * n + res,        # j = res
        t,                  # i = 0
        res * n + t,        # i = res
    ]

    bottom_verts = []
    bottom_index = []
    offset = n * n
    for side in sides:
        verts = top_vertices[side].copy()
        verts[:, 1] = 0.0
        bottom_verts.append(verts)
        bottom_index.append(offset + t)
        offset += n

    k = np.arange(res)
    walls = []
    for s, (top, bot) in enumerate(zip(sides, bottom_index)):
        t0, t1 = top[k], top[k + 1]
        b0, b1 = bot[k], bot[k + 1]
        if s in (0, 3):
            # j = 0 and i = res
            pair = [np.column_stack([t0, b1, b0]),
                    np.column_stack([t0, t1, b1])]
        else:
            # j = res and i = 0
            pair = [np.column_stack([t0, b0, b1]),
                    np.column_stack([t0, b1, t1])]
        walls.append(np.stack(pair, axis=1))    # (res, 2, 3)

    # Emit segment by segment, visiting the four sides in order
    faces = np.stack(walls, axis=1).reshape(-1, 3)
    return np.vstack(bottom_verts), faces


def _base(top_vertices: np.ndarray, res: int, first_index: int):
    """Fan the y=0 plate from its centre over every skirt bottom vertex.

    Each perimeter segment of the plate is also a bottom edge of the skirt,
    so the two groups meet edge to edge.
    """
    n = res + 1
    k = np.arange(res)

    # Boundary walked counter-clockwise as seen from below
    ring = np.concatenate([
        k * n,                  # j = 0, i rising
        res * n + k,            # i = res, j rising
        (res - k) * n + res,    # j = res, i falling
        res - k,                # i = 0, j falling
    ])
    rim = top_vertices[ring].copy()
    rim[:, 1] = 0.0
    vertices = np.vstack([np.zeros((1, 3)), rim])

    m = len(ring)
    spokes = np.arange(m)
    # Facing -Y
    faces = np.column_stack([
        np.zeros(m, dtype=np.int64),
        spokes + 1,
        (spokes + 1) % m + 1,
    ]) + first_index
    return vertices, faces


def build_solid_mesh(height_field: HeightField, params: TerrainParams) -> SolidMesh:
    """Turn *height_field* into a closed solid sized by *params*.

    Vertex (i, j) sits at ``(i*step - size/2, height[i, j], j*step - size/2)``
    with ``step = size / resolution``.
    """
    res = height_field.resolution
    n = res + 1
    step = params.size / res
    half = params.size / 2

    # ── Top surface ─────────────────────────────────────────────
    ii, jj = np.meshgrid(np.arange(n), np.arange(n), indexing='ij')
    top_verts = np.empty((n * n, 3), dtype=np.float64)
    top_verts[:, 0] = (ii * step - half).ravel()
    top_verts[:, 1] = np.asarray(height_field.heights, dtype=np.float64).ravel()
    top_verts[:, 2] = (jj * step - half).ravel()
    top_faces = _top_faces(res)

    # ── Skirt and base ──────────────────────────────────────────
    skirt_verts, skirt_faces = _skirt(top_verts, res)
    base_verts, base_faces = _base(top_verts, res, len(top_verts) + len(skirt_verts))

    vertices = np.vstack([top_verts, skirt_verts, base_verts])
    faces = np.vstack([top_faces, skirt_faces, base_faces]).astype(np.int64)
    vertices.flags.writeable = False
    faces.flags.writeable = False

    logger.debug(f"Solid mesh: {len(vertices)} verts, {len(faces)} faces "
                 f"(top={len(top_faces)}, skirt={len(skirt_faces)}, "
                 f"base={len(base_faces)})")

    return SolidMesh(
        vertices=vertices,
        faces=faces,
        top_vertex_count=len(top_verts),
        top_face_count=len(top_faces),
        skirt_face_count=len(skirt_faces),
        base_face_count=len(base_faces),
    )
