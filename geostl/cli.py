"""Click CLI commands for GeoSTL."""

import logging
import random

import click

from .builder import export_terrain
from .constants import (
    DEFAULT_BASE_THICKNESS,
    DEFAULT_DISTORTION,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_NOISE_SCALE,
    DEFAULT_RESOLUTION,
    DEFAULT_ROUGHNESS,
    DEFAULT_SIZE,
    OUTPUT_FORMATS,
    RANDOM_SEED_LIMIT,
)
from .models import InvalidTerrainParams, Landform, TerrainParams

logger = logging.getLogger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """GeoSTL CLI for generating 3D-printable landform terrain."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')


@cli.command()
@click.option('--landform', '-l', default=Landform.ISLAND.value,
              type=click.Choice([lf.value for lf in Landform]),
              help='Landform archetype')
@click.option('--size', default=DEFAULT_SIZE, help='Footprint edge length (mm)')
@click.option('--max-height', default=DEFAULT_MAX_HEIGHT, help='Relief height (mm)')
@click.option('--resolution', '-r', default=DEFAULT_RESOLUTION, help='Grid segments per side')
@click.option('--noise-scale', default=DEFAULT_NOISE_SCALE, help='Base frequency of detail noise')
@click.option('--roughness', default=DEFAULT_ROUGHNESS, help='Per-octave amplitude falloff')
@click.option('--distortion', default=DEFAULT_DISTORTION, help='Shape-warp strength (0-1)')
@click.option('--seed', '-s', type=int, default=None, help='Generator seed (random if omitted)')
@click.option('--base-thickness', default=DEFAULT_BASE_THICKNESS, help='Solid base under the relief (mm)')
@click.option('--format', '-f', 'file_format', default='stl',
              type=click.Choice(list(OUTPUT_FORMATS)), help='Output file format')
@click.option('--output', '-o', default=None, help='Output file path')
def build(landform: str, size: float, max_height: float, resolution: int,
          noise_scale: float, roughness: float, distortion: float, seed,
          base_thickness: float, file_format: str, output):
    """Generate a landform and write it as a printable solid."""
    if seed is None:
        seed = random.randrange(RANDOM_SEED_LIMIT)
        logger.info(f"Using random seed {seed}")

    try:
        params = TerrainParams(
            landform=Landform(landform),
            size=size,
            max_height=max_height,
            resolution=resolution,
            noise_scale=noise_scale,
            roughness=roughness,
            distortion=distortion,
            seed=seed,
            base_thickness=base_thickness,
        )
        result = export_terrain(params, output, file_format=file_format)
    except InvalidTerrainParams as e:
        logger.error(f"Invalid parameters: {e}")
        raise click.ClickException(str(e))
    except OSError as e:
        logger.error(f"Error writing terrain model: {e}")
        raise click.ClickException(str(e))

    click.echo(f"{params.landform.label} (seed {params.seed}) → {result['output_path']}")
    click.echo(f"  {result['faces']} facets, {result['vertices']} vertices, "
               f"volume {result['volume_mm3']:.0f} mm³, "
               f"height {result['height_range'][0]:.2f}-{result['height_range'][1]:.2f} mm")


@cli.command()
def landforms():
    """List the available landform archetypes."""
    for lf in Landform:
        click.echo(f"{lf.value:<16} {lf.label:<20} {lf.description}")


if __name__ == '__main__':
    cli()
