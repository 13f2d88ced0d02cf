"""Data classes for terrain generation parameters."""

import logging
import numbers
import re
from dataclasses import dataclass
from enum import Enum

from .constants import (
    DEFAULT_BASE_THICKNESS,
    DEFAULT_DISTORTION,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_NOISE_SCALE,
    DEFAULT_RESOLUTION,
    DEFAULT_ROUGHNESS,
    DEFAULT_SIZE,
    FILENAME_PREFIX,
)

logger = logging.getLogger(__name__)


class InvalidTerrainParams(ValueError):
    """Raised when a parameter set cannot describe a valid grid or scale."""


class Landform(str, Enum):
    ISLAND = "island"
    ARCHIPELAGO = "archipelago"
    BAY = "bay"
    CAPE = "cape"
    PENINSULA = "peninsula"
    VALLEY = "valley"
    PLATEAU = "plateau"
    MOUNTAIN = "mountain"
    RANGE = "range"
    GLACIAL_VALLEY = "glacial-valley"
    LAKES = "lakes"
    ISTHMUS = "isthmus"
    CANYON = "canyon"
    VOLCANO = "volcano"

    @property
    def label(self) -> str:
        return LANDFORM_INFO[self][0]

    @property
    def description(self) -> str:
        return LANDFORM_INFO[self][1]


LANDFORM_INFO = {
    Landform.ISLAND: ("Island", "Radial falloff on the warped distance, sharpened peaks"),
    Landform.ARCHIPELAGO: ("Archipelago", "Thresholded noise blobs inside a radial falloff"),
    Landform.BAY: ("Bay", "Noisy shoreline with a linear ramp inland"),
    Landform.CAPE: ("Cape", "Tapering finger of land pointing into the sea"),
    Landform.PENINSULA: ("Peninsula", "Bulbous landmass joined to one side by a strip"),
    Landform.VALLEY: ("Valley", "V-shaped channel along a wobbling path"),
    Landform.PLATEAU: ("Plateau / Mesa", "Flat-topped box with steep flanks"),
    Landform.MOUNTAIN: ("Mountain", "Single sharp radial peak"),
    Landform.RANGE: ("Range", "Ridge band along a wobbling path"),
    Landform.GLACIAL_VALLEY: ("Glacial Valley (U)", "U-shaped channel with a flat floor"),
    Landform.LAKES: ("Lakes", "Flat-floored depressions in rolling ground"),
    Landform.ISTHMUS: ("Isthmus", "Narrow sinuous land bridge between two masses"),
    Landform.CANYON: ("Canyon", "Plateau cut by a narrow winding trench"),
    Landform.VOLCANO: ("Volcano", "Radial cone with a crater at the apex"),
}


@dataclass(frozen=True)
class TerrainParams:
    """Parameter set for one terrain generation.

    Lengths are in millimetres. ``roughness`` and ``distortion`` are
    nominally in (0, 1) and [0, 1] but out-of-range values are accepted.
    """
    landform: Landform = Landform.ISLAND
    size: float = DEFAULT_SIZE
    max_height: float = DEFAULT_MAX_HEIGHT
    resolution: int = DEFAULT_RESOLUTION
    noise_scale: float = DEFAULT_NOISE_SCALE
    roughness: float = DEFAULT_ROUGHNESS
    distortion: float = DEFAULT_DISTORTION
    seed: int = 0
    base_thickness: float = DEFAULT_BASE_THICKNESS

    def __post_init__(self):
        if not isinstance(self.landform, Landform):
            try:
                object.__setattr__(self, 'landform', Landform(self.landform))
            except ValueError:
                raise InvalidTerrainParams(f"Unknown landform: {self.landform!r}")

        if (isinstance(self.resolution, bool)
                or not isinstance(self.resolution, numbers.Integral)):
            raise InvalidTerrainParams(
                f"resolution must be an integer, got {self.resolution!r}")
        if self.resolution < 1:
            raise InvalidTerrainParams(
                f"resolution must be >= 1, got {self.resolution}")
        if not self.size > 0:
            raise InvalidTerrainParams(f"size must be > 0, got {self.size}")
        if not self.max_height >= 0:
            raise InvalidTerrainParams(
                f"max_height must be >= 0, got {self.max_height}")

        if not 0 <= self.distortion <= 1:
            logger.warning(f"distortion={self.distortion} is outside [0, 1]")
        if not 0 < self.roughness < 1:
            logger.warning(f"roughness={self.roughness} is outside (0, 1)")

    def output_stem(self) -> str:
        """Filesystem-safe file stem, e.g. ``GeoSTL_island_s42``."""
        token = re.sub(r'[^a-z0-9]', '_', self.landform.label, flags=re.IGNORECASE)
        return f"{FILENAME_PREFIX}_{token.lower()}_s{self.seed}"
