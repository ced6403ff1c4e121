from vtdecode import mvt_decoder
from vtdecode.geometry import (
    ClosePath,
    LineString,
    LineTo,
    MoveTo,
    MultiPoint,
    Point,
    Polygon,
    UnknownGeometry,
    signed_area,
    to_geojson,
)


def test_point():
    assert to_geojson(Point(25, 17)) == {"type": "Point", "coordinates": (25, 17)}


def test_multipoint_accumulates_cursor():
    geometry = MultiPoint((Point(5, 7), Point(-2, 3)))
    assert to_geojson(geometry) == {"type": "MultiPoint", "coordinates": [(5, 7), (3, 10)]}


def test_line_string_accumulates_cursor():
    geometry = mvt_decoder.decode_line_string([9, 4, 4, 18, 0, 16, 16, 0])
    assert to_geojson(geometry) == {
        "type": "LineString",
        "coordinates": [(2, 2), (2, 10), (10, 10)],
    }


def test_multi_line_string():
    geometry = LineString((MoveTo(2, 2), LineTo(0, 8), MoveTo(1, 1), LineTo(3, 0)))
    assert to_geojson(geometry) == {
        "type": "MultiLineString",
        "coordinates": [[(2, 2), (2, 10)], [(3, 11), (6, 11)]],
    }


def test_y_flip():
    geometry = to_geojson(Point(10, 100), extent=4096, y_coord_down=False)
    assert geometry["coordinates"] == (10, 3996)


def test_polygon_ring_is_closed():
    geometry = mvt_decoder.decode_polygon([9, 6, 12, 26, 6, 12, 12, 6, 5, 11, 15])
    result = to_geojson(geometry)
    assert result["type"] == "Polygon"
    (ring,) = result["coordinates"]
    assert ring == [(3, 6), (6, 12), (12, 15), (9, 9), (3, 6)]


def test_polygon_with_hole():
    # exterior clockwise in y-down space, hole counter-clockwise
    stream = [
        9, 0, 0, 26, 20, 0, 0, 20, 19, 0, 15,
        9, 10, 9, 26, 0, 4, 4, 0, 0, 3, 15,
    ]
    result = to_geojson(mvt_decoder.decode_polygon(stream))
    assert result["type"] == "Polygon"
    exterior, hole = result["coordinates"]
    assert signed_area(exterior) > 0
    assert signed_area(hole) < 0
    assert hole[0] == (5, 5)


def test_multi_polygon():
    square = [9, 0, 0, 26, 20, 0, 0, 20, 19, 0, 15]
    shifted = [9, 40, 0, 26, 20, 0, 0, 20, 19, 0, 15]
    result = to_geojson(mvt_decoder.decode_polygon(square + shifted))
    assert result["type"] == "MultiPolygon"
    assert len(result["coordinates"]) == 2
    assert result["coordinates"][1][0][0] == (20, 10)


def test_unknown():
    assert to_geojson(UnknownGeometry()) == {"type": "Unknown", "coordinates": []}


def test_leading_hole_stands_on_its_own():
    geometry = Polygon((
        MoveTo(0, 0), LineTo(0, 10), LineTo(10, 0), LineTo(0, -10), ClosePath(),
        MoveTo(20, 0), LineTo(10, 0), LineTo(0, 10), LineTo(-10, 0), ClosePath(),
    ))
    result = to_geojson(geometry)
    assert result["type"] == "MultiPolygon"
    hole_only, exterior_only = result["coordinates"]
    assert len(hole_only) == 1 and signed_area(hole_only[0]) < 0
    assert len(exterior_only) == 1 and exterior_only[0][0] == (30, 0)


def test_signed_area_of_empty_ring():
    assert signed_area([]) == 0
