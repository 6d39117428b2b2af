"""Tests for the Overpass map-data client."""

from unittest.mock import MagicMock, Mock

import pytest
import requests

from golfmatch.api.overpass import DEFAULT_RATING, PLACEHOLDER_IMAGE, UNNAMED_COURSE
from golfmatch.api.overpass import OverpassClient, build_query, element_to_course, parse_elements
from golfmatch.exceptions import ValidationError
from golfmatch.utils.geo import BoundingBox
from golfmatch.utils.rate_limiter import RateLimiter

OVERPASS_URL = "https://overpass.example.org/api/interpreter"

NODE = {
    "type": "node",
    "id": 123,
    "lat": 40.45,
    "lon": -3.75,
    "tags": {
        "leisure": "golf_course",
        "name": "Golf Las Rozas",
        "addr:city": "Las Rozas",
        "addr:street": "Calle del Golf 1",
        "website": "https://golflasrozas.example.es"
    }
}

WAY = {
    "type": "way",
    "id": 456,
    "center": {"lat": 40.3, "lon": -3.9},
    "tags": {"leisure": "golf_course"}
}

@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session

@pytest.fixture
def rate_limiter():
    limiter = Mock(spec=RateLimiter)
    limiter.wait.return_value = 0.0
    return limiter

@pytest.fixture
def client(session, rate_limiter):
    return OverpassClient(OVERPASS_URL, timeout=12, rate_limiter=rate_limiter, session=session)

def _answer(body):
    response = Mock()
    response.status_code = 200
    response.json.return_value = body
    return response

def test_build_query_uses_overpass_bbox_order():
    query = build_query(BoundingBox(south=40.0, west=-4.0, north=41.0, east=-3.0))

    assert '[out:json][timeout:25];' in query
    assert 'node["leisure"="golf_course"](40.0,-4.0,41.0,-3.0);' in query
    assert 'way["leisure"="golf_course"](40.0,-4.0,41.0,-3.0);' in query
    assert 'relation["leisure"="golf_course"](40.0,-4.0,41.0,-3.0);' in query
    assert query.strip().endswith('out center;')

def test_element_with_tags():
    course = element_to_course(NODE)

    assert course.id == "osm-123"
    assert course.is_external
    assert course.name == "Golf Las Rozas"
    assert course.location == "Las Rozas, España"
    assert course.address == "Calle del Golf 1"
    assert course.lat == 40.45
    assert course.lng == -3.75
    assert course.holes == 18
    assert course.par == 72
    assert course.rating == DEFAULT_RATING
    assert course.amenities == ['Campo de Golf']
    assert course.image_url == PLACEHOLDER_IMAGE
    assert course.booking_url == "https://golflasrozas.example.es"

def test_element_without_tags_uses_center_and_defaults():
    course = element_to_course(WAY)

    assert course.id == "osm-456"
    assert course.name == UNNAMED_COURSE
    assert course.location == "España"
    assert course.address == "España"
    assert (course.lat, course.lng) == (40.3, -3.9)
    assert course.booking_url.startswith("https://www.google.com/search?q=")
    assert "golf%20booking" in course.booking_url

def test_parse_elements_drops_courses_without_coordinates():
    no_coordinates = {"type": "relation", "id": 789, "tags": {"name": "Nowhere"}}

    courses = parse_elements({"elements": [NODE, no_coordinates, WAY]})

    assert [c.id for c in courses] == ["osm-123", "osm-456"]

def test_parse_elements_rejects_non_object():
    with pytest.raises(ValueError):
        parse_elements(["not", "an", "object"])

def test_search_returns_courses(client, session, rate_limiter):
    session.request.return_value = _answer({"elements": [NODE, WAY]})

    courses = client.search_golf_courses_in_bounds(40.0, -4.0, 41.0, -3.0)

    assert [c.name for c in courses] == ["Golf Las Rozas", UNNAMED_COURSE]
    rate_limiter.wait.assert_called_once()
    kwargs = session.request.call_args[1]
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == OVERPASS_URL
    assert "(40.0,-4.0,41.0,-3.0)" in kwargs["params"]["data"]
    assert kwargs["timeout"] == 12

@pytest.mark.parametrize("failure", [
    requests.exceptions.ConnectionError("offline"),
    requests.exceptions.Timeout("slow"),
])
def test_search_network_failure_returns_empty_list(client, session, failure):
    session.request.side_effect = failure
    assert client.search_golf_courses_in_bounds(40.0, -4.0, 41.0, -3.0) == []

def test_search_http_error_returns_empty_list(client, session):
    response = Mock()
    response.status_code = 504
    response.json.return_value = {"message": "gateway timeout"}
    response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    session.request.return_value = response

    assert client.search_golf_courses_in_bounds(40.0, -4.0, 41.0, -3.0) == []

def test_search_malformed_answer_returns_empty_list(client, session):
    session.request.return_value = _answer([1, 2, 3])
    assert client.search_golf_courses_in_bounds(40.0, -4.0, 41.0, -3.0) == []

def test_search_invalid_bounds_raises(client, session, rate_limiter):
    with pytest.raises(ValidationError):
        client.search_golf_courses_in_bounds(41.0, -4.0, 40.0, -3.0)

    session.request.assert_not_called()
    rate_limiter.wait.assert_not_called()

def test_from_config(demo_config):
    client = OverpassClient.from_config(demo_config, rate_limiter=RateLimiter(max_calls=1, time_window=1))

    assert client.base_url == demo_config.overpass['url']
    assert client.timeout == 30.0
    assert client.cache_expire == 3600
