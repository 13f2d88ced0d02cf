"""
Tests for the click command line.
"""

from click.testing import CliRunner

from geostl.cli import cli


class TestCli:
    def test_build(self, tmp_path):
        out = tmp_path / "volcano.stl"
        result = CliRunner().invoke(cli, [
            'build', '--landform', 'volcano', '--resolution', '8',
            '--seed', '5', '--output', str(out),
        ])

        assert result.exit_code == 0, result.output
        assert "Volcano (seed 5)" in result.output
        text = out.read_text()
        assert text.startswith("solid GeoSTL_volcano_s5\n")
        assert text.count("endfacet") == 2 * 64 + 8 * 8 + 4 * 8

    def test_build_default_filename(self, tmp_path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ['build', '-r', '2', '-s', '11', '-f', 'ply'])
            assert result.exit_code == 0, result.output
            assert "GeoSTL_island_s11.ply" in result.output

    def test_random_seed(self, tmp_path):
        out = tmp_path / "random.stl"
        result = CliRunner().invoke(cli, ['build', '-r', '2', '-o', str(out)])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_invalid_resolution(self, tmp_path):
        result = CliRunner().invoke(cli, [
            'build', '--resolution', '0', '-o', str(tmp_path / "bad.stl"),
        ])
        assert result.exit_code == 1
        assert "resolution" in result.output
        assert not (tmp_path / "bad.stl").exists()

    def test_unknown_landform(self):
        result = CliRunner().invoke(cli, ['build', '--landform', 'fjord'])
        assert result.exit_code == 2

    def test_landforms(self):
        result = CliRunner().invoke(cli, ['landforms'])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 14
        assert lines[0].startswith("island")
        assert any("Glacial Valley (U)" in line for line in lines)
