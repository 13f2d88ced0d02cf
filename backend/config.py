import os
import pathlib

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("GEOSTL_OUTPUT_DIR", BASE_DIR / "output"))

# Largest grid the API will generate (the CLI has no cap)
MAX_RESOLUTION = int(os.environ.get("GEOSTL_MAX_RESOLUTION", "256"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "GEOSTL_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
