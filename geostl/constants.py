"""Generation defaults and export constants."""

# ── Parameter defaults (mm unless noted) ──────────────────────────
DEFAULT_SIZE = 100.0
DEFAULT_MAX_HEIGHT = 25.0
DEFAULT_RESOLUTION = 64
DEFAULT_NOISE_SCALE = 4.0
DEFAULT_ROUGHNESS = 0.5
DEFAULT_DISTORTION = 0.4
DEFAULT_BASE_THICKNESS = 3.0

# Upper bound (exclusive) for randomly drawn seeds
RANDOM_SEED_LIMIT = 100000

# ── Noise ─────────────────────────────────────────────────────────
OCTAVES = 4

# The shape-warp noise is seeded with seed + SHAPE_SEED_OFFSET so that it
# is decorrelated from the detail noise.
SHAPE_SEED_OFFSET = 999

# Strength of the coordinate warp applied before masking
WARP_STRENGTH = 0.3

# ── Export ────────────────────────────────────────────────────────
DEFAULT_SOLID_NAME = "GeoTerrain"
FILENAME_PREFIX = "GeoSTL"
COORD_PRECISION = 4

# format name → (file extension, trimesh file_type or None for our own writer)
OUTPUT_FORMATS = {
    'stl': ('stl', None),
    'stl-binary': ('stl', 'stl'),
    'ply': ('ply', 'ply'),
    'glb': ('glb', 'glb'),
}
