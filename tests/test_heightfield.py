"""
Tests for height-field generation and the landform masks.
"""

import numpy as np
import pytest

from geostl.constants import SHAPE_SEED_OFFSET
from geostl.heightfield import fractal_noise, generate_height_field
from geostl.landforms import LANDFORM_MASKS
from geostl.models import Landform, TerrainParams
from geostl.noise import SeededNoise

ALL_LANDFORMS = list(Landform)


class TestHeightField:
    def test_island_scenario(self, island_params):
        field = generate_height_field(island_params)

        assert field.heights.shape == (5, 5)
        assert field.heights.min() >= 3.0
        assert field.heights.max() <= 28.0

    def test_deterministic(self, island_params):
        a = generate_height_field(island_params)
        b = generate_height_field(island_params)
        assert np.array_equal(a.heights, b.heights)

    def test_seed_changes_output(self):
        a = generate_height_field(TerrainParams(resolution=16, seed=1, noise_scale=3.3))
        b = generate_height_field(TerrainParams(resolution=16, seed=2, noise_scale=3.3))
        assert not np.array_equal(a.heights, b.heights)

    def test_heights_are_read_only(self, island_params):
        field = generate_height_field(island_params)
        with pytest.raises(ValueError):
            field.heights[0, 0] = 1.0

    @pytest.mark.parametrize("landform", ALL_LANDFORMS)
    def test_zero_height_and_base_gives_zero_plate(self, landform):
        params = TerrainParams(landform=landform, resolution=12, seed=5,
                               max_height=0, base_thickness=0)
        field = generate_height_field(params)
        assert np.all(field.heights == 0.0)

    @pytest.mark.parametrize("landform", ALL_LANDFORMS)
    def test_zero_max_height_gives_flat_plate(self, landform):
        params = TerrainParams(landform=landform, resolution=12, seed=5,
                               max_height=0, base_thickness=2.5)
        field = generate_height_field(params)
        assert np.all(field.heights == 2.5)

    @pytest.mark.parametrize("landform", ALL_LANDFORMS)
    @pytest.mark.parametrize("seed", [0, 42, 31337])
    def test_height_floor_and_finite(self, landform, seed):
        params = TerrainParams(landform=landform, resolution=32, seed=seed,
                               noise_scale=3.7, roughness=0.6, distortion=0.8,
                               base_thickness=1.5, max_height=20)
        field = generate_height_field(params)

        assert np.all(np.isfinite(field.heights))
        assert field.min_height >= 1.5
        assert field.max_height > 1.5

    def test_extreme_roughness_stays_above_floor(self):
        params = TerrainParams(landform=Landform.MOUNTAIN, resolution=48, seed=8,
                               noise_scale=2.9, roughness=0.95, base_thickness=3)
        field = generate_height_field(params)
        assert np.all(np.isfinite(field.heights))
        assert field.min_height >= 3.0


class TestFractalNoise:
    def test_single_octave_is_remapped_noise(self):
        noise = SeededNoise(4)
        xs = np.linspace(0, 1, 9)
        h = fractal_noise(noise, xs, xs, noise_scale=2.5, roughness=0.5, octaves=1)
        assert np.allclose(h, (noise.sample2D(xs * 2.5, xs * 2.5) + 1) / 2)

    def test_lattice_aligned_grid_is_flat(self):
        # noise_scale 4 on a 4-segment grid samples only integer lattice points
        noise = SeededNoise(42)
        nx = np.arange(5) / 4
        h = fractal_noise(noise, nx[:, None], nx[None, :], noise_scale=4, roughness=0.5)
        assert np.all(h == 0.5)


class TestLandformMasks:
    def test_every_landform_has_a_mask(self):
        assert set(LANDFORM_MASKS) == set(Landform)

    def test_island_without_distortion_matches_radial_formula(self):
        params = TerrainParams(landform=Landform.ISLAND, resolution=10, seed=77,
                               noise_scale=3.3, distortion=0.0,
                               max_height=10, base_thickness=1)
        field = generate_height_field(params)

        nx, ny = np.meshgrid(np.arange(11) / 10, np.arange(11) / 10, indexing='ij')
        dist = np.sqrt((nx - 0.5) ** 2 + (ny - 0.5) ** 2) * 2
        h = fractal_noise(SeededNoise(77), nx, ny, 3.3, 0.5)
        expected = np.power(np.maximum(h, 0), 0.7) * np.maximum(0, 1 - dist * 1.4) * 10 + 1
        assert np.allclose(field.heights, expected)

    @pytest.mark.parametrize("landform", [Landform.GLACIAL_VALLEY, Landform.CANYON])
    def test_negative_noise_reaches_linear_masks(self, landform):
        # Both masks stay positive for any noise value, so nothing is floored
        params = TerrainParams(landform=landform, resolution=48, seed=3,
                               roughness=0.9, distortion=0.0,
                               max_height=25, base_thickness=3)
        field = generate_height_field(params)

        nx, ny = np.meshgrid(np.arange(49) / 48, np.arange(49) / 48, indexing='ij')
        h = fractal_noise(SeededNoise(3), nx, ny, params.noise_scale, 0.9)
        assert (h < 0).any()

        offset = np.abs(ny - 0.5)
        if landform is Landform.GLACIAL_VALLEY:
            expected = (h * 0.3 + 0.7) * np.minimum(1.0, np.power(offset * 2.5, 2))
        else:
            cut = np.where(offset < 0.07, np.power(offset / 0.07, 0.5), 1.0)
            edge = np.maximum(np.abs(nx - 0.5) * 2, offset * 2)
            expected = (0.85 + h * 0.15) * cut * np.maximum(0.0, 1 - np.power(edge, 20))
        assert np.allclose(field.heights, expected * 25 + 3)

    def test_negative_noise_under_power_mask_sits_on_base(self):
        params = TerrainParams(landform=Landform.MOUNTAIN, resolution=48, seed=3,
                               roughness=0.9, distortion=0.0, base_thickness=3)
        field = generate_height_field(params)

        nx, ny = np.meshgrid(np.arange(49) / 48, np.arange(49) / 48, indexing='ij')
        h = fractal_noise(SeededNoise(3), nx, ny, params.noise_scale, 0.9)
        assert np.all(field.heights[h < 0] == 3.0)
        assert np.all(np.isfinite(field.heights))

    def test_mountain_corners_at_base(self):
        params = TerrainParams(landform=Landform.MOUNTAIN, resolution=8, seed=3,
                               distortion=0.0, base_thickness=2)
        heights = generate_height_field(params).heights
        for corner in (heights[0, 0], heights[0, -1], heights[-1, 0], heights[-1, -1]):
            assert corner == 2.0

    def test_cape_is_flat_past_the_tip(self):
        params = TerrainParams(landform=Landform.CAPE, resolution=8, seed=12,
                               noise_scale=3.3, distortion=0.0, base_thickness=3)
        heights = generate_height_field(params).heights

        # rows with nx >= 0.75 have zero finger width
        assert np.all(np.isfinite(heights))
        assert np.all(heights[6:] == 3.0)

    def test_bay_sea_side_without_distortion(self):
        params = TerrainParams(landform=Landform.BAY, resolution=10, seed=6,
                               noise_scale=3.3, distortion=0.0, base_thickness=2)
        heights = generate_height_field(params).heights

        # shoreline sits at nx = 0.4 when distortion is 0
        assert np.all(heights[:5] == 2.0)
        assert heights[5:].max() > 2.0

    def test_canyon_edges_drop_to_base(self):
        params = TerrainParams(landform=Landform.CANYON, resolution=16, seed=21,
                               base_thickness=3)
        heights = generate_height_field(params).heights
        assert np.all(heights[0, :] == 3.0)
        assert np.all(heights[-1, :] == 3.0)
        assert np.all(heights[:, 0] == 3.0)
        assert np.all(heights[:, -1] == 3.0)

    def test_plateau_top_is_compressed(self):
        params = TerrainParams(landform=Landform.PLATEAU, resolution=32, seed=14,
                               noise_scale=3.3, max_height=100, base_thickness=0)
        heights = generate_height_field(params).heights

        masked = heights / 100
        assert masked.max() < 0.75
        # the top is nearly flat: most of the interior sits in a narrow band
        interior = masked[8:25, 8:25]
        assert interior.max() - interior.min() < 0.05

    def test_volcano_has_crater(self):
        params = TerrainParams(landform=Landform.VOLCANO, resolution=40, seed=9,
                               noise_scale=3.3, distortion=0.0, max_height=30,
                               base_thickness=0)
        heights = generate_height_field(params).heights

        center = heights[20, 20]
        rim_band = heights[14:27, 14:27]
        assert rim_band.max() > center

    def test_shape_noise_uses_offset_seed(self):
        params = TerrainParams(landform=Landform.LAKES, resolution=6, seed=100)
        shape = SeededNoise(params.seed + SHAPE_SEED_OFFSET)
        assert shape.seed == 1099
