"""Tests for coordinate helpers."""

import pytest

from golfmatch.exceptions import ValidationError
from golfmatch.utils.geo import BoundingBox
from golfmatch.utils.geo import google_search_link
from golfmatch.utils.geo import validate_coordinates
from golfmatch.utils.geo import within_tolerance


def test_validate_coordinates_converts_strings():
    assert validate_coordinates("40.4", "-3.7") == (40.4, -3.7)

@pytest.mark.parametrize("lat,lng", [
    (91, 0),
    (-91, 0),
    (0, 181),
    (0, -181),
    ("north", 0),
    (None, 0),
])
def test_validate_coordinates_rejects(lat, lng):
    with pytest.raises(ValidationError):
        validate_coordinates(lat, lng)

def test_bounding_box_valid():
    box = BoundingBox(south=40.0, west=-4.0, north=41.0, east=-3.0)
    assert box.to_overpass() == "40.0,-4.0,41.0,-3.0"

def test_bounding_box_south_above_north():
    with pytest.raises(ValidationError) as exc_info:
        BoundingBox(south=41.0, west=-4.0, north=40.0, east=-3.0)
    assert "South" in exc_info.value.message

def test_bounding_box_west_beyond_east():
    with pytest.raises(ValidationError):
        BoundingBox(south=40.0, west=-3.0, north=41.0, east=-4.0)

def test_bounding_box_from_mapping_reports_missing_sides():
    with pytest.raises(ValidationError) as exc_info:
        BoundingBox.from_mapping({'south': '40', 'west': '-4'})
    assert exc_info.value.details == {"missing": ['north', 'east']}

def test_bounding_box_from_mapping_rejects_text():
    with pytest.raises(ValidationError):
        BoundingBox.from_mapping({'south': 'a', 'west': '-4', 'north': '41', 'east': '-3'})

def test_google_search_link_encodes_name():
    assert google_search_link("El Encín Golf") == (
        "https://www.google.com/search?q=El%20Enc%C3%ADn%20Golf%20golf%20booking"
    )

def test_within_tolerance_treats_missing_as_zero():
    assert within_tolerance(None, 0.0005)
    assert not within_tolerance(None, 40.0)
    assert within_tolerance(40.0, 40.0009)
    assert not within_tolerance(40.0, 40.0011)
