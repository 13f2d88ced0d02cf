"""Terrain generation pipeline, a thin orchestrator over the core modules."""

import logging
import pathlib
import time
from typing import Optional, Union

from .constants import OUTPUT_FORMATS
from .heightfield import generate_height_field
from .mesh import SolidMesh, build_solid_mesh
from .models import TerrainParams
from .stl import solid_name, write_ascii_stl

logger = logging.getLogger(__name__)


def generate(params: TerrainParams) -> SolidMesh:
    """Generate the closed solid mesh for *params*."""
    t0 = time.perf_counter()
    height_field = generate_height_field(params)
    mesh = build_solid_mesh(height_field, params)
    elapsed = time.perf_counter() - t0
    logger.info(f"Generated {params.landform.label} (seed={params.seed}, "
                f"res={params.resolution}): {mesh.vertex_count} verts, "
                f"{mesh.face_count} faces in {elapsed:.2f}s")
    return mesh


def output_filename(params: TerrainParams, file_format: str = 'stl') -> str:
    """Suggested download filename, e.g. ``GeoSTL_island_s42.stl``."""
    if file_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {file_format!r}")
    extension, _ = OUTPUT_FORMATS[file_format]
    return f"{params.output_stem()}.{extension}"


def export_terrain(params: TerrainParams,
                   output_path: Optional[Union[str, pathlib.Path]] = None,
                   file_format: str = 'stl',
                   progress_callback=None) -> dict:
    """Generate a terrain and write it to disk.

    Parameters
    ----------
    params : TerrainParams
        Generation parameters.
    output_path : str or Path, optional
        Destination file. Defaults to ``output_filename(params)`` in the
        current directory.
    file_format : str
        One of ``stl`` (ASCII), ``stl-binary``, ``ply`` or ``glb``.
    progress_callback : callable
        Optional (pct, msg) callback.

    Returns
    -------
    dict with output_path, format, faces, vertices, volume_mm3,
    height_range, size_mb, elapsed_seconds.
    """
    def _progress(pct, msg):
        if progress_callback:
            progress_callback(pct, msg)

    if file_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {file_format!r}")
    _, trimesh_type = OUTPUT_FORMATS[file_format]

    t0 = time.perf_counter()
    out = pathlib.Path(output_path or output_filename(params, file_format))

    _progress(0, "Generating height field...")
    height_field = generate_height_field(params)

    _progress(40, "Building solid mesh...")
    mesh = build_solid_mesh(height_field, params)

    _progress(70, f"Writing {file_format.upper()}...")
    if trimesh_type is None:
        write_ascii_stl(mesh, out, name=solid_name(params))
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        mesh.to_trimesh().export(str(out), file_type=trimesh_type)

    elapsed = time.perf_counter() - t0
    size_mb = out.stat().st_size / 1024 / 1024
    volume = mesh.signed_volume()

    logger.info(f"{out.name}: {mesh.face_count} faces, "
                f"volume={volume:.0f}mm³, {size_mb:.2f} MB, {elapsed:.2f}s")

    _progress(100, "Done!")
    return {
        'output_path': str(out),
        'format': file_format,
        'faces': mesh.face_count,
        'vertices': mesh.vertex_count,
        'volume_mm3': round(volume, 2),
        'height_range': [round(height_field.min_height, 4),
                         round(height_field.max_height, 4)],
        'size_mb': round(size_mb, 3),
        'elapsed_seconds': round(elapsed, 2),
    }
