"""
Mapbox Vector Tile (MVT) decoder.

Turns parsed ``vector_tile`` protobuf messages (see ``vtdecode.proto``) into
immutable ``vtdecode.tile`` values. Parsing the wire bytes themselves is left
to the protobuf runtime; ``decode`` is a thin wrapper doing both steps.

Layers and features keep the order they were declared in. Geometry command
parameters are zigzag decoded and stored as they appear in the stream
(relative to the previous cursor position); ``Tile.to_dict`` accumulates them
into tile coordinates.

Options (``default_options``):
    unknown_command (str): "raise" (default) to fail on an unsupported
        geometry command, "skip" to drop its header and carry on.
    y_coord_down (bool): only used by ``decode_dict``. If True, keep Y
        pointing down (default True).
"""

import logging

from google.protobuf import message as protobuf_message

from vtdecode import geometry as geom
from vtdecode import proto
from vtdecode.errors import DecodeError, MalformedCommandStreamError, UnknownCommandError
from vtdecode.tile import Feature, Layer, PropertyValue, Tile, ValueKind

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    "unknown_command": "raise",
    "y_coord_down": True,
}
UNKNOWN_COMMAND_POLICIES = ("raise", "skip")


def resolve_options(default_options=None):
    options = dict(DEFAULT_OPTIONS)
    if default_options:
        unknown = set(default_options) - set(DEFAULT_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown decode options: {', '.join(sorted(unknown))}")
        options.update(default_options)
    if options["unknown_command"] not in UNKNOWN_COMMAND_POLICIES:
        raise ValueError(
            f"unknown_command must be one of {UNKNOWN_COMMAND_POLICIES}, "
            f"got {options['unknown_command']!r}"
        )
    return options


# ── Command stream primitives ────────────────────────────────────────────

CMD_MOVE_TO = 1
CMD_LINE_TO = 2
CMD_CLOSE_PATH = 7

# parameters consumed per repetition of each command
COMMAND_ARITY = {
    CMD_MOVE_TO: 2,
    CMD_LINE_TO: 2,
    CMD_CLOSE_PATH: 0,
}


def zigzag(value):
    """Decodes a zigzag encoded unsigned integer: 0, 1, 2, 3 -> 0, -1, 1, -2."""
    return (value >> 1) ^ -(value & 1)


def parse_header(header):
    """Split a command header into ``(command, count)``."""
    return header & 0x7, header >> 3


def _check_params(stream, pos, needed):
    if pos + needed > len(stream):
        raise MalformedCommandStreamError(
            f"Command needs {needed} parameters, only {len(stream) - pos} left", pos
        )


def _check_close_path(command, count, pos):
    # ClosePath carries no parameters, so its count is not bounded by the stream
    if command == CMD_CLOSE_PATH and count > 1:
        raise MalformedCommandStreamError(f"ClosePath repeated {count} times", pos)


def _command(command, stream, pos):
    if command == CMD_MOVE_TO:
        return geom.MoveTo(zigzag(stream[pos]), zigzag(stream[pos + 1]))
    if command == CMD_LINE_TO:
        return geom.LineTo(zigzag(stream[pos]), zigzag(stream[pos + 1]))
    return geom.ClosePath()


# ── Geometry decoders ────────────────────────────────────────────────────

def decode_point(stream, skip_unknown=False):
    """
    Decode a point command stream (MoveTo headers only).

    Returns a ``Point`` for one point, a ``MultiPoint`` for several and
    ``Point(0, 0)`` when the stream holds none.
    """
    points = []
    i = 0

    while i < len(stream):
        command, count = parse_header(stream[i])

        if command != CMD_MOVE_TO:
            if not skip_unknown:
                raise UnknownCommandError(command, i, geometry="point")
            logger.debug("Skipping command %d at index %d in point geometry", command, i)
            i += 1 + count * COMMAND_ARITY.get(command, 0)
            continue

        i += 1
        _check_params(stream, i, count * COMMAND_ARITY[CMD_MOVE_TO])
        for _ in range(count):
            points.append(geom.Point(zigzag(stream[i]), zigzag(stream[i + 1])))
            i += COMMAND_ARITY[CMD_MOVE_TO]

    if len(points) == 1:
        return points[0]
    if len(points) > 1:
        return geom.MultiPoint(tuple(points))
    return geom.Point(0, 0)  # point is at the origin


def decode_line_string(stream, skip_unknown=False):
    commands = []
    i = 0

    while i < len(stream):
        command, count = parse_header(stream[i])
        arity = COMMAND_ARITY.get(command)

        if arity is None:
            if not skip_unknown:
                raise UnknownCommandError(command, i, geometry="line string")
            logger.debug("Skipping unknown command %d at index %d", command, i)
            i += 1
            continue

        _check_close_path(command, count, i)
        i += 1
        _check_params(stream, i, count * arity)
        for n in range(count):
            commands.append(_command(command, stream, i + n * arity))
        i += count * arity

    return geom.LineString(tuple(commands))


def decode_polygon(stream, skip_unknown=False):
    """
    Decode a polygon command stream.

    Rings are not checked for closure or winding; the commands come back in
    stream order.
    """
    commands = []
    i = 0

    while i < len(stream):
        command, count = parse_header(stream[i])
        arity = COMMAND_ARITY.get(command)

        if arity is None:
            if not skip_unknown:
                raise UnknownCommandError(command, i, geometry="polygon")
            logger.debug("Skipping unknown command %d at index %d", command, i)
            i += 1
            continue

        _check_close_path(command, count, i)
        # parsed command and count => +1
        i += 1
        for _ in range(count):
            _check_params(stream, i, arity)
            commands.append(_command(command, stream, i))
            i += arity

    return geom.Polygon(tuple(commands))


GEOMETRY_DECODERS = {
    geom.GEOM_POINT: decode_point,
    geom.GEOM_LINESTRING: decode_line_string,
    geom.GEOM_POLYGON: decode_polygon,
}


def decode_geometry(geom_type, stream, skip_unknown=False):
    decoder = GEOMETRY_DECODERS.get(geom_type)
    if decoder is None:
        if geom_type != geom.GEOM_UNKNOWN:
            logger.debug("Unrecognised geometry type %r, using unknown geometry", geom_type)
        return geom.UnknownGeometry()
    return decoder(stream, skip_unknown=skip_unknown)


# ── Properties ───────────────────────────────────────────────────────────

# checked in this order, first field that is set wins
VALUE_FIELDS = (
    ("bool_value", ValueKind.BOOL),
    ("string_value", ValueKind.STRING),
    ("float_value", ValueKind.FLOAT),
    ("int_value", ValueKind.INT),
    ("sint_value", ValueKind.SINT),
    ("uint_value", ValueKind.UINT),
    ("double_value", ValueKind.DOUBLE),
)


def decode_value(value):
    """Decode a protobuf Value message."""
    for field, kind in VALUE_FIELDS:
        if value.HasField(field):
            return PropertyValue(kind, getattr(value, field))
    return PropertyValue.unknown()


def decode_properties(keys, values, tags):
    """
    Resolve alternating key/value indices against a layer's tables.

    A pair pointing outside either table is dropped; an odd trailing index
    is ignored.
    """
    properties = {}

    if len(tags) % 2:
        logger.debug("Ignoring trailing tag index %d", tags[-1])

    for i in range(0, len(tags) - 1, 2):
        ki = tags[i]
        vi = tags[i + 1]
        if ki < len(keys) and vi < len(values):
            properties[keys[ki]] = values[vi]
        else:
            logger.debug("Dropping tag pair (%d, %d): index out of range", ki, vi)

    return properties


# ── Features, layers, tiles ──────────────────────────────────────────────

def decode_feature(keys, values, feature, skip_unknown=False):
    """
    Decode a single Feature message.

    ``keys`` and ``values`` are the owning layer's tables, values already
    run through ``decode_value``.
    """
    geometry = decode_geometry(feature.type, list(feature.geometry), skip_unknown)
    properties = decode_properties(keys, values, list(feature.tags))
    return Feature(id=feature.id, geometry=geometry, properties=properties)


def decode_layer(layer, skip_unknown=False):
    """Decode a single Layer message."""
    keys = list(layer.keys)
    values = [decode_value(value) for value in layer.values]

    features = tuple(
        decode_feature(keys, values, feature, skip_unknown) for feature in layer.features
    )
    logger.debug("Decoded layer %r with %d features", layer.name, len(features))

    return Layer(
        name=layer.name,
        features=features,
        version=layer.version,
        extent=layer.extent,
    )


def decode_tile(message, default_options=None):
    """Decode a parsed Tile message into a ``Tile``."""
    options = resolve_options(default_options)
    skip_unknown = options["unknown_command"] == "skip"

    layers = tuple(decode_layer(layer, skip_unknown) for layer in message.layers)
    return Tile(layers=layers)


def decode(tile_bytes, default_options=None):
    """Parse MVT tile bytes and decode them into a ``Tile``."""
    buf = bytes(tile_bytes) if not isinstance(tile_bytes, bytes) else tile_bytes
    try:
        message = proto.Tile.FromString(buf)
    except protobuf_message.DecodeError as exc:
        raise DecodeError(f"Invalid vector tile: {exc}") from exc
    return decode_tile(message, default_options)


def decode_dict(tile_bytes, default_options=None):
    """
    Decode MVT tile bytes into a dict of layers.

    Same shape as ``mapbox_vector_tile.decode()``, see ``Tile.to_dict``.
    """
    options = resolve_options(default_options)
    return decode(tile_bytes, options).to_dict(y_coord_down=options["y_coord_down"])
