"""SVG input/output for pointfill.

Shapes are read from SVG elements as boundaries in user space; point
patterns are written back as SVG marker elements.
"""

import logging
import math
import re
import sys
from typing import Dict, Iterable, List, Optional, Tuple
from xml.etree import ElementTree as ET
from xml.sax.saxutils import quoteattr

import numpy as np
from svgpathtools import Line, parse_path

from .geometry import Point, Viewport
from .renderable import PatternGroup, PointLayer

logger = logging.getLogger(__name__)

SHAPE_TAGS = ("path", "polygon", "polyline", "rect", "circle", "ellipse")

# Elements whose content is never drawn directly
SKIPPED_TAGS = ("defs", "clippath", "mask", "symbol", "marker", "pattern")

CURVE_SAMPLES = 16
ELLIPSE_SEGMENTS = 64

DASH_ARRAYS = {
    "solid": None,
    "dashed": "4,4",
    "dotted": "1,3",
    "dotdash": "1,3,4,3",
    "longdash": "8,4",
    "twodash": "2,2,6,2",
}

_NUMBER = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')


def path_to_boundaries(d: str) -> List[List[Point]]:
    """Convert an SVG path d attribute into one boundary per subpath.

    Straight segments contribute their start point, curves are sampled.
    Every subpath is treated as closed; an open one keeps its last endpoint.
    """
    if not d or not d.strip():
        return []

    boundaries: List[List[Point]] = []
    for subpath in parse_path(d).continuous_subpaths():
        points: List[Point] = []
        for segment in subpath:
            if isinstance(segment, Line):
                samples = [segment.start]
            else:
                samples = [segment.point(t) for t in np.linspace(0, 1, CURVE_SAMPLES, endpoint=False)]
            points.extend(Point(float(z.real), float(z.imag)) for z in samples)
        if not subpath.isclosed():
            end = subpath[-1].end
            points.append(Point(float(end.real), float(end.imag)))
        if len(points) >= 3:
            boundaries.append(points)

    return boundaries


def _length(element: ET.Element, name: str) -> float:
    """Numeric value of a length attribute; unit suffixes are ignored.

    Raises:
        ValueError: if the attribute does not start with a number
    """
    value = (element.get(name) or '').strip()
    if not value:
        return 0.0
    match = _NUMBER.match(value)
    if match is None:
        raise ValueError(f"{name}={value!r} is not a length")
    return float(match.group())


def _parse_points_attr(value: str) -> List[Point]:
    coords = [float(c) for c in _NUMBER.findall(value or '')]
    return [Point(coords[i], coords[i + 1]) for i in range(0, len(coords) - 1, 2)]


def _ellipse_points(cx: float, cy: float, rx: float, ry: float) -> List[Point]:
    return [
        Point(cx + rx * math.cos(a), cy + ry * math.sin(a))
        for a in np.linspace(0, 2 * math.pi, ELLIPSE_SEGMENTS, endpoint=False)
    ]


def element_to_boundaries(element: ET.Element) -> List[List[Point]]:
    """Convert an SVG shape element to zero or more user-space boundaries."""
    tag = element.tag.split('}')[-1].lower()  # Remove namespace

    if tag == 'path':
        return path_to_boundaries(element.get('d', ''))

    if tag in ('polygon', 'polyline'):
        points = _parse_points_attr(element.get('points', ''))

    elif tag == 'rect':
        x = _length(element, 'x')
        y = _length(element, 'y')
        w = _length(element, 'width')
        h = _length(element, 'height')
        points = [Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h)]

    elif tag == 'circle':
        r = _length(element, 'r')
        points = _ellipse_points(_length(element, 'cx'), _length(element, 'cy'), r, r)

    elif tag == 'ellipse':
        points = _ellipse_points(
            _length(element, 'cx'),
            _length(element, 'cy'),
            _length(element, 'rx'),
            _length(element, 'ry'),
        )

    else:
        return []

    return [points] if len(points) >= 3 else []


def extract_shapes_from_svg(svg_content: str) -> Tuple[List[List[Point]], Dict[str, str]]:
    """Extract all fillable shapes from SVG content.

    Returns:
        Tuple of (list of user-space boundaries, SVG metadata dict with
        viewBox, width, height)
    """
    root = ET.fromstring(svg_content)

    metadata = {
        'viewBox': root.get('viewBox', ''),
        'width': root.get('width', ''),
        'height': root.get('height', ''),
    }

    boundaries: List[List[Point]] = []

    def process_element(elem: ET.Element):
        tag = elem.tag.split('}')[-1].lower()
        if tag in SKIPPED_TAGS:
            return
        if tag in SHAPE_TAGS:
            try:
                found = element_to_boundaries(elem)
            except ValueError as e:
                logger.debug("skipping <%s>: %s", tag, e)
                found = []
            else:
                if not found:
                    logger.debug("skipping <%s> with fewer than 3 points", tag)
            boundaries.extend(found)

        for child in elem:
            process_element(child)

    process_element(root)

    return boundaries, metadata


def _fmt(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def marker_element(shape: str, cx: float, cy: float, r: float, precision: int = 2) -> str:
    """SVG element for one marker of half-size r centered on (cx, cy)."""
    f = lambda v: _fmt(v, precision)  # noqa: E731

    if shape == 'circle':
        return f'<circle cx="{f(cx)}" cy="{f(cy)}" r="{f(r)}"/>'
    if shape == 'square':
        return f'<rect x="{f(cx - r)}" y="{f(cy - r)}" width="{f(2 * r)}" height="{f(2 * r)}"/>'
    if shape == 'diamond':
        return (f'<polygon points="{f(cx)},{f(cy - r)} {f(cx + r)},{f(cy)} '
                f'{f(cx)},{f(cy + r)} {f(cx - r)},{f(cy)}"/>')
    if shape == 'triangle':
        dx = r * math.sqrt(3) / 2
        return (f'<polygon points="{f(cx)},{f(cy - r)} {f(cx + dx)},{f(cy + r / 2)} '
                f'{f(cx - dx)},{f(cy + r / 2)}"/>')
    if shape == 'cross':
        return (f'<path d="M{f(cx - r)},{f(cy - r)} L{f(cx + r)},{f(cy + r)} '
                f'M{f(cx - r)},{f(cy + r)} L{f(cx + r)},{f(cy - r)}" fill="none"/>')
    if shape == 'plus':
        return (f'<path d="M{f(cx - r)},{f(cy)} L{f(cx + r)},{f(cy)} '
                f'M{f(cx)},{f(cy - r)} L{f(cx)},{f(cy + r)}" fill="none"/>')

    raise ValueError(f"unknown marker shape {shape!r}")


def render_layer(layer: PointLayer, viewport: Viewport, precision: int = 2) -> str:
    """Render one point layer as an SVG group in the viewport's user space."""
    if len(layer) == 0:
        return ''

    style = layer.style
    attrs = [
        f'class={quoteattr("pointfill-" + layer.name)}',
        f'fill={quoteattr(style.fill)}',
        f'fill-opacity="{style.alpha:g}"',
        f'stroke-opacity="{style.alpha:g}"',
    ]
    if style.linetype == 'blank' or style.linewidth == 0:
        attrs.append('stroke="none"')
    else:
        attrs.append(f'stroke={quoteattr(style.colour)}')
        attrs.append(f'stroke-width="{style.linewidth:g}"')
        dash = DASH_ARRAYS[style.linetype]
        if dash:
            attrs.append(f'stroke-dasharray="{dash}"')

    r = layer.size * viewport.snpc / 2
    markers = [
        marker_element(style.shape, x, y, r, precision)
        for x, y in viewport.to_user(layer.points)
    ]

    return f'<g {" ".join(attrs)}>\n    ' + '\n    '.join(markers) + '\n  </g>'


def render_pattern(group: PatternGroup, viewport: Viewport, precision: int = 2) -> str:
    """Render every layer of a pattern group; empty groups render to ''."""
    rendered = [render_layer(layer, viewport, precision) for layer in group]
    return '\n  '.join(r for r in rendered if r)


def outline_element(
    boundary: Iterable[Point],
    stroke: str = 'black',
    stroke_width: str = '1',
    precision: int = 2,
) -> str:
    """Closed, unfilled SVG path tracing a user-space boundary."""
    points = list(boundary)
    commands = [f"M{_fmt(points[0].x, precision)},{_fmt(points[0].y, precision)}"]
    commands.extend(f"L{_fmt(p.x, precision)},{_fmt(p.y, precision)}" for p in points[1:])
    commands.append("Z")
    return (f'<path d="{" ".join(commands)}" fill="none" '
            f'stroke={quoteattr(stroke)} stroke-width={quoteattr(stroke_width)}/>')


def create_svg_document(
    elements: List[str],
    viewbox: str = '',
    width: str = '',
    height: str = '',
) -> str:
    """Create a complete SVG document from rendered elements.

    Args:
        elements: SVG markup fragments
        viewbox: SVG viewBox attribute
        width: SVG width attribute
        height: SVG height attribute

    Returns:
        Complete SVG document as string
    """
    attrs = ['xmlns="http://www.w3.org/2000/svg"']
    if viewbox:
        attrs.append(f'viewBox="{viewbox}"')
    if width:
        attrs.append(f'width="{width}"')
    if height:
        attrs.append(f'height="{height}"')

    body = '\n  '.join(e for e in elements if e)

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<svg {' '.join(attrs)}>
  {body}
</svg>
'''


def read_svg(path: Optional[str] = None) -> str:
    """Read SVG content from file or stdin.

    Args:
        path: File path, or None to read from stdin

    Returns:
        SVG content as string
    """
    if path is None or path == '-':
        return sys.stdin.read()
    else:
        with open(path, 'r') as f:
            return f.read()


def write_svg(content: str, path: Optional[str] = None):
    """Write SVG content to file or stdout.

    Args:
        content: SVG content
        path: File path, or None to write to stdout
    """
    if path is None or path == '-':
        sys.stdout.write(content)
    else:
        with open(path, 'w') as f:
            f.write(content)
