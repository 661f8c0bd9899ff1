"""vpype plugin for pointfill.

Fills every closed path of a layer with a point pattern, each marker drawn
as a small circle so a pen plotter can trace it.

Usage:
    vpype read input.svg pointfill --spacing 0.05 --density 0.5 write output.svg
"""

import logging

import click
import numpy as np
import vpype as vp
import vpype_cli

from .errors import PatternError
from .geometry import Viewport
from .patterns import make_pattern
from .style import PatternStyle

logger = logging.getLogger(__name__)

# Distance between first and last vertex under which a path counts as closed
CLOSED_TOLERANCE = 0.1


def fill_line_collection(
    lines: vp.LineCollection,
    style: PatternStyle,
    quantization: float = 0.1,
) -> vp.LineCollection:
    """Return the input lines plus marker circles for every closed line."""
    result = vp.LineCollection(lines)

    for line in lines:
        if len(line) < 4 or abs(line[-1] - line[0]) > CLOSED_TOLERANCE:
            continue

        boundary = np.column_stack([line.real, line.imag])
        try:
            viewport = Viewport.from_points(boundary)
            group = make_pattern(style, viewport.to_normalized(boundary), viewport.aspect_ratio)
        except PatternError as e:
            logger.warning("skipping path: %s", e)
            continue

        for layer in group:
            r = layer.size * viewport.snpc / 2
            if r <= 0:
                continue
            for x, y in viewport.to_user(layer.points):
                result.append(vp.circle(x, y, r, quantization))

    return result


@click.command()
@click.option('--spacing', '-s', default=0.05, type=float,
              help='Marker spacing as a fraction of the shape size')
@click.option('--density', '-d', default=0.5, type=float,
              help='Marker diameter as a fraction of the spacing')
@click.option('--angle', '-a', default=30.0, type=float, help='Lattice angle in degrees')
@click.option('--x-offset', default=0.0, type=float, help='Lattice x offset')
@click.option('--y-offset', default=0.0, type=float, help='Lattice y offset')
@click.option('--quantization', '-q', default=0.1, type=float,
              help='Maximum segment length of the marker circles')
@vpype_cli.layer_processor
def pointfill(
    lines: vp.LineCollection,
    spacing: float,
    density: float,
    angle: float,
    x_offset: float,
    y_offset: float,
    quantization: float,
) -> vp.LineCollection:
    """Fill closed paths with a grid of circle markers."""
    try:
        style = PatternStyle(
            spacing=spacing, density=density, angle=angle, x_offset=x_offset, y_offset=y_offset,
        )
    except PatternError as e:
        raise click.UsageError(str(e)) from e

    return fill_line_collection(lines, style, quantization)


pointfill.help_group = "Plugins"
