"""Decode tiles written by mapbox-vector-tile, the reference encoder."""

import mapbox_vector_tile

from vtdecode import mvt_decoder
from vtdecode.geometry import MultiPoint, Point


def encode(name, features):
    return mapbox_vector_tile.encode([{"name": name, "features": features}])


def decode_layer(data, name):
    # the encoder flips y by default, so flip it back
    return mvt_decoder.decode(data).layer(name).to_dict(y_coord_down=False)


def test_point():
    data = encode("points", [{"geometry": "POINT(10 20)", "properties": {"kind": "stop"}}])
    feature = decode_layer(data, "points")["features"][0]

    assert feature["geometry"] == {"type": "Point", "coordinates": (10, 20)}
    assert feature["properties"] == {"kind": "stop"}


def test_multipoint_deltas_are_accumulated():
    data = encode("points", [{"geometry": "MULTIPOINT(10 10, 20 30, 5 5)", "properties": {}}])

    geometry = mvt_decoder.decode(data).layer("points").features[0].geometry
    assert isinstance(geometry, MultiPoint)
    # second and third points are stored relative to the previous one
    assert geometry.points[1] == Point(10, -20)

    feature = decode_layer(data, "points")["features"][0]
    assert feature["geometry"] == {
        "type": "MultiPoint",
        "coordinates": [(10, 10), (20, 30), (5, 5)],
    }


def test_line_string():
    data = encode("roads", [{
        "geometry": "LINESTRING(0 0, 10 10, 20 0, 20 40)",
        "properties": {"name": "Main St", "lanes": 2, "speed": 1.5},
    }])
    feature = decode_layer(data, "roads")["features"][0]

    assert feature["geometry"] == {
        "type": "LineString",
        "coordinates": [(0, 0), (10, 10), (20, 0), (20, 40)],
    }
    assert feature["properties"] == {"name": "Main St", "lanes": 2, "speed": 1.5}


def test_polygon():
    data = encode("water", [{
        "geometry": "POLYGON((0 0, 0 100, 100 100, 100 0, 0 0))",
        "properties": {"class": "lake"},
    }])
    feature = decode_layer(data, "water")["features"][0]

    assert feature["geometry"]["type"] == "Polygon"
    (ring,) = feature["geometry"]["coordinates"]
    assert ring[0] == ring[-1]
    assert set(ring) == {(0, 0), (0, 100), (100, 100), (100, 0)}
    assert feature["properties"] == {"class": "lake"}


def test_features_keep_order():
    data = encode("points", [
        {"geometry": f"POINT({n} {n})", "properties": {"n": n}} for n in range(1, 6)
    ])
    features = decode_layer(data, "points")["features"]
    assert [f["properties"]["n"] for f in features] == [1, 2, 3, 4, 5]
