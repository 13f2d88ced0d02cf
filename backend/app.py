import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend import config
from backend.routers import models, terrain
from geostl.constants import OUTPUT_FORMATS
from geostl.models import InvalidTerrainParams, Landform

logger = logging.getLogger(__name__)

app = FastAPI(
    title="GeoSTL API",
    description="Procedural landform terrain, exported as printable solids",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(terrain.router)
app.include_router(models.router)

# Exported models are also reachable as plain static files
config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/output", StaticFiles(directory=str(config.OUTPUT_DIR)), name="output")


@app.exception_handler(InvalidTerrainParams)
async def invalid_params_handler(request: Request, exc: InvalidTerrainParams):
    logger.warning(f"Rejected terrain parameters on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {
        "status": "ok",
        "service": "GeoSTL API",
        "landforms": len(Landform),
        "formats": list(OUTPUT_FORMATS),
        "max_resolution": config.MAX_RESOLUTION,
    }
