"""Command-line interface for pointfill."""

import logging
import sys
import time
from functools import partial

import click

from .errors import InvalidStyle, PatternError
from .geometry import Point, Viewport
from .patterns import band_as_interior, default_patterns, make_pattern
from .style import LINETYPES, MARKER_SHAPES, PatternStyle
from .svg_io import (
    create_svg_document,
    extract_shapes_from_svg,
    outline_element,
    read_svg,
    render_pattern,
    write_svg,
)


def _style_options(command):
    """Options shared by the commands that build a PatternStyle."""
    options = [
        click.option('--angle', '-a', type=float, help='Lattice angle in degrees (default: 30)'),
        click.option('--spacing', '-s', type=float,
                     help='Marker spacing as a fraction of the shape size (default: 0.05)'),
        click.option('--density', '-d', type=float,
                     help='Marker size as a fraction of the spacing (default: 0.2)'),
        click.option('--shape', type=click.Choice(MARKER_SHAPES), help='Marker shape'),
        click.option('--fill', 'fill_colour', help='Marker fill colour'),
        click.option('--colour', '--color', 'colour', help='Marker outline colour'),
        click.option('--alpha', type=float, help='Marker opacity, 0-1'),
        click.option('--linewidth', type=float, help='Marker outline width'),
        click.option('--linetype', type=click.Choice(LINETYPES), help='Marker outline dash style'),
        click.option('--x-offset', type=float, help='Lattice x offset, fraction of shape width'),
        click.option('--y-offset', type=float, help='Lattice y offset, fraction of shape height'),
        click.option('--param', 'params', multiple=True, metavar='KEY=VALUE',
                     help='Extra style parameter, e.g. pattern_angle=45 (repeatable)'),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_style(params, **options) -> PatternStyle:
    """Merge explicit options and KEY=VALUE pairs into a PatternStyle."""
    values = {
        'fill' if key == 'fill_colour' else key: value
        for key, value in options.items()
        if value is not None
    }
    for item in params:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint='--param')
        values[key.strip()] = value.strip()

    try:
        return PatternStyle.from_mapping(values)
    except InvalidStyle as e:
        raise click.UsageError(str(e)) from e


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s', stream=sys.stderr)


@click.group()
@click.version_option()
def main():
    """pointfill: Point-marker fill patterns for SVG shapes.

    Fills closed shapes with a rotated grid of markers, keeping only markers
    that sit fully inside each shape.

    Examples:

        pointfill fill input.svg -o output.svg

        cat input.svg | pointfill fill --spacing 0.1 --density 0.5 > output.svg
    """
    pass


@main.command()
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--pattern', '-p', default='points', help='Fill pattern name (default: points)')
@_style_options
@click.option('--outline/--no-outline', default=True,
              help='Draw the shape outlines (default: outline)')
@click.option('--band/--no-band', default=False,
              help='Also draw markers overlapping the shape edge (default: no band)')
@click.option('--stroke', default='black', help='Outline colour (default: black)')
@click.option('--stroke-width', default='1', help='Outline width (default: 1)')
@click.option('--verbose', '-v', is_flag=True, help='Print timing and statistics')
def fill(input, output, pattern, params, outline, band, stroke, stroke_width, verbose, **options):
    """Fill the shapes of an SVG file with a point pattern.

    INPUT: SVG file path, or - for stdin (default)

    Each shape is filled within its own bounding box: spacing and offsets are
    fractions of that box. A shape that cannot be filled is drawn unfilled.
    """
    _configure_logging(verbose)
    start_time = time.time()

    style = build_style(params, **options)

    table = default_patterns()
    if band:
        table.register('points', partial(make_pattern, band_treatment=band_as_interior))

    if pattern not in table:
        raise click.BadParameter(
            f"unknown pattern {pattern!r}, available: {', '.join(table.names())}",
            param_hint='--pattern',
        )
    generator = table.get(pattern)

    try:
        svg_content = read_svg(input if input != '-' else None)
    except OSError as e:
        click.echo(f"Error reading input: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(f"Read {len(svg_content)} bytes", err=True)

    shapes, metadata = extract_shapes_from_svg(svg_content)

    if verbose:
        click.echo(f"Found {len(shapes)} shapes", err=True)

    if not shapes:
        click.echo("No fillable shapes found in input", err=True)
        sys.exit(1)

    elements = []
    marker_count = 0
    failed = 0

    for i, boundary in enumerate(shapes):
        if verbose:
            click.echo(f"Processing shape {i + 1}/{len(shapes)}...", err=True)

        try:
            viewport = Viewport.from_points(boundary)
            group = generator(style, viewport.to_normalized(boundary), viewport.aspect_ratio, False)
        except PatternError as e:
            click.echo(f"Shape {i + 1}: {e}; leaving it unfilled", err=True)
            failed += 1
        else:
            elements.append(render_pattern(group, viewport))
            marker_count += sum(len(layer) for layer in group)

        if outline:
            elements.append(outline_element(boundary, stroke, stroke_width))

    if verbose:
        click.echo(f"Generated {marker_count} markers", err=True)
        if failed:
            click.echo(f"{failed} shapes left unfilled", err=True)

    output_svg = create_svg_document(
        elements,
        viewbox=metadata.get('viewBox', ''),
        width=metadata.get('width', ''),
        height=metadata.get('height', ''),
    )

    try:
        write_svg(output_svg, output if output != '-' else None)
    except OSError as e:
        click.echo(f"Error writing output: {e}", err=True)
        sys.exit(1)

    elapsed = time.time() - start_time
    if verbose:
        click.echo(f"Completed in {elapsed:.3f}s", err=True)


@main.command()
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--width', default=40.0, type=float, help='Swatch width (default: 40)')
@click.option('--height', default=40.0, type=float, help='Swatch height (default: 40)')
@_style_options
@click.option('--verbose', '-v', is_flag=True, help='Print diagnostics')
def swatch(output, width, height, params, verbose, **options):
    """Render a legend swatch of a point pattern."""
    _configure_logging(verbose)
    style = build_style(params, **options)

    try:
        viewport = Viewport(0.0, 0.0, width, height)
        square = [(0, 0), (1, 0), (1, 1), (0, 1)]
        group = default_patterns().get('points')(style, square, viewport.aspect_ratio, True)
    except PatternError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    corners = [Point(0, 0), Point(width, 0), Point(width, height), Point(0, height)]
    output_svg = create_svg_document(
        [render_pattern(group, viewport), outline_element(corners)],
        viewbox=f"0 0 {width:g} {height:g}",
        width=f"{width:g}",
        height=f"{height:g}",
    )
    write_svg(output_svg, output if output != '-' else None)


@main.command()
def patterns():
    """List available fill patterns."""
    click.echo("Available patterns:")
    click.echo()
    for name in default_patterns().names():
        click.echo(f"  {name}")
    click.echo()
    click.echo("Use: pointfill fill --pattern <name> input.svg")


if __name__ == '__main__':
    main()
