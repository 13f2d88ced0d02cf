"""Landform mask functions.

Each landform shapes the normalised detail noise ``h`` with a closed-form
mask built from the grid coordinates, the plain and warped radial
distances, and the shape noise. All functions operate on whole grids
(numpy arrays of shape ``(resolution+1, resolution+1)``) and return the
masked height in roughly [0, 1]. Values slightly above 1 are possible
and are not clamped.
"""

from dataclasses import dataclass

import numpy as np

from .models import Landform
from .noise import SeededNoise


@dataclass(frozen=True)
class MaskInputs:
    """Per-grid inputs shared by every landform mask."""
    nx: np.ndarray
    ny: np.ndarray
    dist: np.ndarray
    dnx: np.ndarray
    dny: np.ndarray
    warped_dist: np.ndarray
    h: np.ndarray
    shape: SeededNoise
    distortion: float
    seed: int


def _island(m: MaskInputs) -> np.ndarray:
    mask = np.maximum(0.0, 1 - m.warped_dist * 1.4)
    return np.power(m.h, 0.7) * mask


def _archipelago(m: MaskInputs) -> np.ndarray:
    island_noise = np.power((m.shape.sample2D(m.dnx * 6, m.dny * 6) + 1) / 2, 2)
    mask = np.maximum(0.0, 1 - m.dist * 1.3)
    threshold = 0.55 - m.distortion * 0.2
    return np.where(island_noise > threshold,
                    (island_noise - 0.3) * 2.5 * m.h * mask, 0.0)


def _bay(m: MaskInputs) -> np.ndarray:
    shoreline = 0.4 + m.shape.sample2D(m.ny * 2, 0) * m.distortion * 0.3
    mask = np.where(m.nx > shoreline, np.minimum(1.0, (m.nx - shoreline) * 6), 0.0)
    return m.h * mask


def _cape(m: MaskInputs) -> np.ndarray:
    centerline = 0.5 + m.shape.sample2D(m.nx * 2, m.seed) * m.distortion * 0.2
    taper = np.power(np.maximum(0.0, 0.75 - m.nx), 1.2)
    width = taper * (0.3 + m.distortion * 0.1)
    # Past the tip the finger has zero width.
    spread = np.divide(np.abs(m.ny - centerline), width,
                       out=np.full_like(width, np.inf), where=width != 0)
    mask = np.maximum(0.0, 1 - spread)
    return m.h * mask * (1 - m.nx * 0.6)


def _peninsula(m: MaskInputs) -> np.ndarray:
    center_x = 0.4 + m.distortion * 0.1
    center_y = 0.5 + m.shape.sample2D(m.seed, 0) * 0.1
    blob_dist = np.sqrt(np.power(m.dnx - center_x, 2)
                        + np.power(m.dny - center_y, 2) * 0.8) * 2.5
    blob_mask = np.maximum(0.0, 1 - blob_dist)

    # Strip joining the blob to the nx=0 edge
    connection_width = 0.2 + m.distortion * 0.1
    connection_mask = np.where(
        m.nx < 0.4,
        np.maximum(0.0, 1 - np.abs(m.ny - center_y) / connection_width),
        0.0)
    return np.power(m.h, 0.8) * np.maximum(blob_mask, connection_mask)


def _plateau(m: MaskInputs) -> np.ndarray:
    box_dist = np.maximum(np.abs(m.dnx - 0.5) * 2, np.abs(m.dny - 0.5) * 2)
    plateau_mask = np.maximum(0.0, 1 - np.power(box_dist, 10))
    h = (m.h * 0.15 + 0.85) * plateau_mask
    return np.where(h > 0.7, 0.7 + (h - 0.7) * 0.05, h)


def _valley(m: MaskInputs) -> np.ndarray:
    path = 0.5 + m.shape.sample2D(m.nx * 1.2, m.seed) * m.distortion * 0.4
    valley_mask = np.power(np.abs(m.ny - path), 0.7) * 2.5
    return m.h * np.minimum(1.0, valley_mask)


def _mountain(m: MaskInputs) -> np.ndarray:
    peak_mask = np.maximum(0.0, 1 - m.warped_dist * 1.6)
    return np.power(m.h, 0.4) * np.power(peak_mask, 2)


def _range(m: MaskInputs) -> np.ndarray:
    path = 0.5 + m.shape.sample2D(m.nx * 1.5, m.seed) * m.distortion * 0.4
    ridge_mask = np.maximum(0.0, 1 - np.abs(m.ny - path) * 4)
    return np.power(m.h, 0.5) * ridge_mask


def _glacial_valley(m: MaskInputs) -> np.ndarray:
    path = 0.5 + m.shape.sample2D(m.nx, m.seed) * m.distortion * 0.2
    valley_floor = np.power(np.abs(m.ny - path) * 2.5, 2)
    return (m.h * 0.3 + 0.7) * np.minimum(1.0, valley_floor)


def _lakes(m: MaskInputs) -> np.ndarray:
    lake_noise = m.shape.sample2D(m.dnx * 4, m.dny * 4)
    threshold = -0.15 - m.distortion * 0.2
    h = np.where(lake_noise < threshold, 0.02,
                 m.h * 0.4 + (lake_noise - threshold))
    return h * (1 - m.dist * 0.5)


def _isthmus(m: MaskInputs) -> np.ndarray:
    bridge_y = 0.5 + np.sin(m.nx * np.pi) * (m.distortion * 0.2)
    bridge_width = 0.05 + np.power(m.nx - 0.5, 2) * 2.8
    mask = np.maximum(0.0, 1 - np.abs(m.ny - bridge_y) / bridge_width)
    return m.h * mask


def _canyon(m: MaskInputs) -> np.ndarray:
    base_h = 0.85 + m.h * 0.15
    path = 0.5 + m.shape.sample2D(m.nx * 2, m.seed) * m.distortion * 0.4
    width = 0.07 + m.distortion * 0.05
    dist_to_path = np.abs(m.ny - path)
    cut = np.where(dist_to_path < width, np.power(dist_to_path / width, 0.5), 1.0)
    edge = np.maximum(np.abs(m.nx - 0.5) * 2, np.abs(m.ny - 0.5) * 2)
    box_mask = np.maximum(0.0, 1 - np.power(edge, 20))
    return base_h * cut * box_mask


def _volcano(m: MaskInputs) -> np.ndarray:
    cone = np.power(np.maximum(0.0, 1 - m.warped_dist * 1.4), 1.6)
    crater_size = 0.13 + m.distortion * 0.05
    crater = np.where(m.warped_dist < crater_size,
                      np.power(m.warped_dist / crater_size, 2.8), 1.0)
    return cone * crater + (m.h * 0.15 * cone)


LANDFORM_MASKS = {
    Landform.ISLAND: _island,
    Landform.ARCHIPELAGO: _archipelago,
    Landform.BAY: _bay,
    Landform.CAPE: _cape,
    Landform.PENINSULA: _peninsula,
    Landform.PLATEAU: _plateau,
    Landform.VALLEY: _valley,
    Landform.MOUNTAIN: _mountain,
    Landform.RANGE: _range,
    Landform.GLACIAL_VALLEY: _glacial_valley,
    Landform.LAKES: _lakes,
    Landform.ISTHMUS: _isthmus,
    Landform.CANYON: _canyon,
    Landform.VOLCANO: _volcano,
}


def apply_mask(landform: Landform, inputs: MaskInputs) -> np.ndarray:
    """Apply the mask for *landform* to the base noise in *inputs*."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return LANDFORM_MASKS[landform](inputs)
