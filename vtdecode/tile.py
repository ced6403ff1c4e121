"""
Decoded tile, layer and feature values.

All of them are frozen and hashable. Feature properties are exposed as a
read-only mapping.
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from vtdecode import geometry as geom


class ValueKind(enum.Enum):
    BOOL = "bool"
    STRING = "string"
    FLOAT = "float"
    INT = "int"
    SINT = "sint"
    UINT = "uint"
    DOUBLE = "double"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PropertyValue:
    kind: ValueKind
    value: Any = None

    @classmethod
    def unknown(cls):
        return cls(ValueKind.UNKNOWN)


@dataclass(frozen=True)
class Feature:
    id: int
    geometry: geom.Geometry
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def __hash__(self):
        return hash((self.id, self.geometry, frozenset(self.properties.items())))

    def to_dict(self, extent=4096, y_coord_down=True):
        return {
            "id": self.id,
            "geometry": geom.to_geojson(self.geometry, extent, y_coord_down),
            "properties": {k: v.value for k, v in self.properties.items()},
        }


@dataclass(frozen=True)
class Layer:
    name: str
    features: Tuple[Feature, ...] = ()
    version: int = 1
    extent: int = 4096

    def to_dict(self, y_coord_down=True):
        return {
            "extent": self.extent,
            "version": self.version,
            "features": [f.to_dict(self.extent, y_coord_down) for f in self.features],
        }


@dataclass(frozen=True)
class Tile:
    layers: Tuple[Layer, ...] = ()

    @property
    def layer_names(self):
        return [layer.name for layer in self.layers]

    def layer(self, name) -> Optional[Layer]:
        """First layer called ``name``, or None."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def to_dict(self, y_coord_down=True):
        """
        Plain dict view of the tile, keyed by layer name:

            {
                "water": {
                    "extent": 4096,
                    "version": 2,
                    "features": [
                        {
                            "id": 1,
                            "geometry": {"type": "Polygon", "coordinates": [...]},
                            "properties": {"class": "lake"},
                        },
                    ],
                },
            }

        Unnamed layers are left out; a repeated name keeps the last layer.
        """
        result = {}
        for layer in self.layers:
            if layer.name:
                result[layer.name] = layer.to_dict(y_coord_down)
        return result
