from typing import Optional

from pydantic import BaseModel, Field

from backend import config
from geostl import constants
from geostl.models import Landform, TerrainParams


class TerrainRequest(BaseModel):
    landform: Landform = Landform.ISLAND
    size: float = constants.DEFAULT_SIZE                # mm
    max_height: float = constants.DEFAULT_MAX_HEIGHT    # mm
    resolution: int = Field(constants.DEFAULT_RESOLUTION, le=config.MAX_RESOLUTION)
    noise_scale: float = constants.DEFAULT_NOISE_SCALE
    roughness: float = constants.DEFAULT_ROUGHNESS
    distortion: float = constants.DEFAULT_DISTORTION
    seed: int = 0
    base_thickness: float = constants.DEFAULT_BASE_THICKNESS

    def to_params(self) -> TerrainParams:
        return TerrainParams(
            landform=self.landform,
            size=self.size,
            max_height=self.max_height,
            resolution=self.resolution,
            noise_scale=self.noise_scale,
            roughness=self.roughness,
            distortion=self.distortion,
            seed=self.seed,
            base_thickness=self.base_thickness,
        )


class BuildRequest(TerrainRequest):
    output_format: str = "stl"   # "stl", "stl-binary", "ply" or "glb"


class LandformInfo(BaseModel):
    value: str
    label: str
    description: str


class JobResponse(BaseModel):
    job_id: str
    status: str
    progress: float
    message: str
    result: Optional[dict] = None


class ModelInfo(BaseModel):
    name: str
    filename: str
    size_bytes: int
