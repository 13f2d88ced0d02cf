import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from backend import config
from backend.models import ModelInfo
from geostl.constants import OUTPUT_FORMATS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/models", tags=["models"])

_MEDIA_TYPES = {
    ".stl": "model/stl",
    ".ply": "application/octet-stream",
    ".glb": "model/gltf-binary",
}
_EXTENSIONS = {f".{ext}" for ext, _ in OUTPUT_FORMATS.values()}


@router.get("", response_model=List[ModelInfo])
async def list_models():
    """Return metadata for every generated model in the output directory."""
    output_dir: Path = config.OUTPUT_DIR
    if not output_dir.exists():
        return []

    models: list[ModelInfo] = []
    for path in sorted(output_dir.iterdir()):
        if not path.is_file() or path.suffix not in _EXTENSIONS:
            continue
        models.append(
            ModelInfo(
                name=path.stem.replace("_", " "),
                filename=path.name,
                size_bytes=path.stat().st_size,
            )
        )
    return models


@router.get("/{filename}")
async def get_model(filename: str):
    """Serve a specific model file from the output directory."""
    file_path = config.OUTPUT_DIR / filename
    if (file_path.parent.resolve() != config.OUTPUT_DIR.resolve()
            or not file_path.is_file()):
        raise HTTPException(status_code=404, detail="Model file not found")

    return FileResponse(
        path=str(file_path),
        media_type=_MEDIA_TYPES.get(file_path.suffix, "application/octet-stream"),
        filename=filename,
    )
