"""
Message classes for the Mapbox Vector Tile protobuf schema (version 2.1).

The schema is assembled with the protobuf runtime at import time, so no
protoc-generated module is needed:

    message Tile {
        enum GeomType { UNKNOWN = 0; POINT = 1; LINESTRING = 2; POLYGON = 3; }
        message Value { string_value = 1 ... bool_value = 7 }
        message Feature { id = 1; tags = 2; type = 3; geometry = 4 }
        message Layer { version = 15; name = 1; features = 2; keys = 3;
                        values = 4; extent = 5 }
        repeated Layer layers = 3;
    }

Extension ranges of the published schema are left out.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

FieldProto = descriptor_pb2.FieldDescriptorProto

PACKAGE = "vector_tile"


def _field(message, name, number, field_type, label=FieldProto.LABEL_OPTIONAL,
           type_name=None, default=None, packed=False):
    fd = message.field.add(name=name, number=number, type=field_type, label=label)
    if type_name is not None:
        fd.type_name = f".{PACKAGE}.{type_name}"
    if default is not None:
        fd.default_value = default
    if packed:
        fd.options.packed = True
    return fd


def build_file_descriptor():
    fdp = descriptor_pb2.FileDescriptorProto(
        name="vector_tile.proto", package=PACKAGE, syntax="proto2"
    )
    tile = fdp.message_type.add(name="Tile")

    geom_type = tile.enum_type.add(name="GeomType")
    for name, number in (("UNKNOWN", 0), ("POINT", 1), ("LINESTRING", 2), ("POLYGON", 3)):
        geom_type.value.add(name=name, number=number)

    value = tile.nested_type.add(name="Value")
    _field(value, "string_value", 1, FieldProto.TYPE_STRING)
    _field(value, "float_value", 2, FieldProto.TYPE_FLOAT)
    _field(value, "double_value", 3, FieldProto.TYPE_DOUBLE)
    _field(value, "int_value", 4, FieldProto.TYPE_INT64)
    _field(value, "uint_value", 5, FieldProto.TYPE_UINT64)
    _field(value, "sint_value", 6, FieldProto.TYPE_SINT64)
    _field(value, "bool_value", 7, FieldProto.TYPE_BOOL)

    feature = tile.nested_type.add(name="Feature")
    _field(feature, "id", 1, FieldProto.TYPE_UINT64, default="0")
    _field(feature, "tags", 2, FieldProto.TYPE_UINT32,
           label=FieldProto.LABEL_REPEATED, packed=True)
    _field(feature, "type", 3, FieldProto.TYPE_ENUM,
           type_name="Tile.GeomType", default="UNKNOWN")
    _field(feature, "geometry", 4, FieldProto.TYPE_UINT32,
           label=FieldProto.LABEL_REPEATED, packed=True)

    layer = tile.nested_type.add(name="Layer")
    _field(layer, "version", 15, FieldProto.TYPE_UINT32,
           label=FieldProto.LABEL_REQUIRED, default="1")
    _field(layer, "name", 1, FieldProto.TYPE_STRING, label=FieldProto.LABEL_REQUIRED)
    _field(layer, "features", 2, FieldProto.TYPE_MESSAGE,
           label=FieldProto.LABEL_REPEATED, type_name="Tile.Feature")
    _field(layer, "keys", 3, FieldProto.TYPE_STRING, label=FieldProto.LABEL_REPEATED)
    _field(layer, "values", 4, FieldProto.TYPE_MESSAGE,
           label=FieldProto.LABEL_REPEATED, type_name="Tile.Value")
    _field(layer, "extent", 5, FieldProto.TYPE_UINT32, default="4096")

    _field(tile, "layers", 3, FieldProto.TYPE_MESSAGE,
           label=FieldProto.LABEL_REPEATED, type_name="Tile.Layer")
    return fdp


pool = descriptor_pool.DescriptorPool()
pool.AddSerializedFile(build_file_descriptor().SerializeToString())


def _message_class(name):
    return message_factory.GetMessageClass(pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Tile = _message_class("Tile")
Layer = _message_class("Tile.Layer")
Feature = _message_class("Tile.Feature")
Value = _message_class("Tile.Value")
