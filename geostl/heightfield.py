"""Height-field generation from layered noise and landform masks."""

import logging
import time
from dataclasses import dataclass

import numpy as np

from .constants import OCTAVES, SHAPE_SEED_OFFSET, WARP_STRENGTH
from .landforms import MaskInputs, apply_mask
from .models import TerrainParams
from .noise import SeededNoise

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeightField:
    """Grid of final vertex heights, indexed ``heights[i, j]``.

    Heights already include the base thickness, so every value is
    ``>= base_thickness``.
    """
    heights: np.ndarray
    resolution: int
    base_thickness: float

    @property
    def min_height(self) -> float:
        return float(self.heights.min())

    @property
    def max_height(self) -> float:
        return float(self.heights.max())


def fractal_noise(noise: SeededNoise, nx, ny, noise_scale: float,
                  roughness: float, octaves: int = OCTAVES) -> np.ndarray:
    """Sum *octaves* of noise and remap with ``(h + 1) / 2``.

    The remap assumes the octave amplitudes add up to about 1; it is not
    renormalised by the actual amplitude sum.
    """
    h = 0.0
    amplitude = 1.0
    frequency = noise_scale
    for _ in range(octaves):
        h = h + noise.sample2D(nx * frequency, ny * frequency) * amplitude
        amplitude *= roughness
        frequency *= 2
    return (h + 1) / 2


def generate_height_field(params: TerrainParams) -> HeightField:
    """Compute the height of every grid vertex for *params*.

    Parameters
    ----------
    params : TerrainParams
        Validated generation parameters.

    Returns
    -------
    HeightField with ``(resolution+1, resolution+1)`` heights in mm.
    """
    t0 = time.perf_counter()
    res = params.resolution
    distortion = params.distortion

    noise = SeededNoise(params.seed)
    shape = SeededNoise(params.seed + SHAPE_SEED_OFFSET)

    # ── Normalised grid coordinates ─────────────────────────────
    ii, jj = np.meshgrid(np.arange(res + 1), np.arange(res + 1), indexing='ij')
    nx = ii / res
    ny = jj / res

    dx = nx - 0.5
    dy = ny - 0.5
    dist = np.sqrt(dx * dx + dy * dy) * 2

    # ── Shape warp ──────────────────────────────────────────────
    dnx = nx + shape.sample2D(nx * 2, ny * 2) * distortion * WARP_STRENGTH
    dny = ny + shape.sample2D(ny * 2, nx * 2) * distortion * WARP_STRENGTH
    warped_dist = np.sqrt(np.power(dnx - 0.5, 2) + np.power(dny - 0.5, 2)) * 2

    # ── Detail noise ────────────────────────────────────────────
    h = fractal_noise(noise, nx, ny, params.noise_scale, params.roughness)

    masked = apply_mask(params.landform, MaskInputs(
        nx=nx, ny=ny, dist=dist,
        dnx=dnx, dny=dny, warped_dist=warped_dist,
        h=h, shape=shape, distortion=distortion, seed=params.seed,
    ))

    # Fractional powers of negative noise give NaN; those cells and any
    # negative result sit on the base.
    invalid = int((~(masked >= 0)).sum())
    if invalid:
        logger.debug(f"Flooring {invalid} NaN or negative masked samples at 0")
    masked = np.maximum(np.nan_to_num(masked, nan=0.0), 0.0)

    heights = masked * params.max_height + params.base_thickness
    heights.flags.writeable = False

    elapsed = time.perf_counter() - t0
    logger.debug(f"Height field {params.landform.value} {res + 1}x{res + 1}: "
                 f"range={heights.min():.2f}..{heights.max():.2f}mm, "
                 f"{elapsed * 1000:.1f}ms")
    return HeightField(heights=heights, resolution=res,
                       base_thickness=params.base_thickness)
