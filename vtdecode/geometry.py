"""
Decoded vector tile geometries.

Command and point values hold the parameters exactly as they appear in the
command stream: zigzag decoded, but still relative to the previous cursor
position. ``to_geojson`` accumulates them into absolute tile coordinates:

    {"type": "LineString", "coordinates": [(2, 2), (2, 10), (10, 10)]}
"""

from dataclasses import dataclass
from typing import Tuple, Union

GEOM_UNKNOWN = 0
GEOM_POINT = 1
GEOM_LINESTRING = 2
GEOM_POLYGON = 3


# ── Commands ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MoveTo:
    x: int
    y: int


@dataclass(frozen=True)
class LineTo:
    x: int
    y: int


@dataclass(frozen=True)
class ClosePath:
    pass


Command = Union[MoveTo, LineTo, ClosePath]


# ── Geometries ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UnknownGeometry:
    geom_type = GEOM_UNKNOWN


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    geom_type = GEOM_POINT


@dataclass(frozen=True)
class MultiPoint:
    points: Tuple[Point, ...]

    geom_type = GEOM_POINT


@dataclass(frozen=True)
class LineString:
    commands: Tuple[Command, ...] = ()

    geom_type = GEOM_LINESTRING


@dataclass(frozen=True)
class Polygon:
    commands: Tuple[Command, ...] = ()

    geom_type = GEOM_POLYGON


Geometry = Union[UnknownGeometry, Point, MultiPoint, LineString, Polygon]


# ── GeoJSON conversion ───────────────────────────────────────────────────

def _accumulate_points(geometry):
    points = geometry.points if isinstance(geometry, MultiPoint) else (geometry,)
    cx, cy = 0, 0
    coords = []
    for point in points:
        cx += point.x
        cy += point.y
        coords.append((cx, cy))
    return coords


def _accumulate_paths(commands):
    """Split commands into absolute coordinate paths, one per MoveTo."""
    cx, cy = 0, 0
    paths = []
    current = []

    for command in commands:
        if isinstance(command, MoveTo):
            cx += command.x
            cy += command.y
            if current:
                paths.append(current)
            current = [(cx, cy)]
        elif isinstance(command, LineTo):
            cx += command.x
            cy += command.y
            current.append((cx, cy))
        elif isinstance(command, ClosePath):
            if len(current) >= 2:
                current.append(current[0])
            if current:
                paths.append(current)
                current = []

    if current:
        paths.append(current)
    return paths


def signed_area(ring):
    """Signed area of a ring (shoelace formula); positive for exterior rings."""
    following = ring[1:] + ring[:1]
    return sum(x0 * y1 - x1 * y0 for (x0, y0), (x1, y1) in zip(ring, following)) / 2.0


def _group_rings(rings):
    """Each exterior ring opens a polygon; holes join the polygon before them."""
    polygons = []
    for ring in rings:
        if polygons and signed_area(ring) < 0:
            polygons[-1].append(ring)
        else:
            polygons.append([ring])
    return polygons


def _flip(coords, extent):
    return [(x, extent - y) for x, y in coords]


def to_geojson(geometry, extent=4096, y_coord_down=True):
    """
    Convert a decoded geometry into a GeoJSON-style dict in tile coordinates.

    Ring orientation is evaluated in the tile's native y-down space, before
    the optional flip to y-up.
    """
    if isinstance(geometry, (Point, MultiPoint)):
        coords = _accumulate_points(geometry)
        if not y_coord_down:
            coords = _flip(coords, extent)
        if isinstance(geometry, Point):
            return {"type": "Point", "coordinates": coords[0]}
        return {"type": "MultiPoint", "coordinates": coords}

    if isinstance(geometry, LineString):
        lines = _accumulate_paths(geometry.commands)
        if not y_coord_down:
            lines = [_flip(line, extent) for line in lines]
        if len(lines) == 1:
            return {"type": "LineString", "coordinates": lines[0]}
        return {"type": "MultiLineString", "coordinates": lines}

    if isinstance(geometry, Polygon):
        polygons = _group_rings(_accumulate_paths(geometry.commands))
        if not y_coord_down:
            polygons = [[_flip(ring, extent) for ring in polygon] for polygon in polygons]
        if len(polygons) == 1:
            return {"type": "Polygon", "coordinates": polygons[0]}
        return {"type": "MultiPolygon", "coordinates": polygons}

    return {"type": "Unknown", "coordinates": []}
