import os
import tempfile

import pytest

# The API reads its output directory at import time.
os.environ.setdefault("GEOSTL_OUTPUT_DIR", tempfile.mkdtemp(prefix="geostl-test-"))

from geostl.models import Landform, TerrainParams  # noqa: E402


@pytest.fixture
def island_params():
    """Small island used across the mesh and export tests."""
    return TerrainParams(
        landform=Landform.ISLAND,
        size=100,
        max_height=25,
        resolution=4,
        noise_scale=4,
        roughness=0.5,
        distortion=0.4,
        seed=42,
        base_thickness=3,
    )


@pytest.fixture
def detailed_params():
    return TerrainParams(landform=Landform.VOLCANO, resolution=24,
                         noise_scale=3.3, seed=1234)
