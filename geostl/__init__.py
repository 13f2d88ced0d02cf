"""GeoSTL: procedural landform terrain as 3D-printable STL solids."""

from geostl.builder import export_terrain, generate, output_filename
from geostl.heightfield import HeightField, generate_height_field
from geostl.mesh import SolidMesh, build_solid_mesh
from geostl.models import InvalidTerrainParams, Landform, TerrainParams
from geostl.noise import SeededNoise
from geostl.stl import serialize
