"""
Client for the Overpass map-data query service.

Source: OpenStreetMap via Overpass API
API Documentation: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

from typing import Any

import requests
import requests_cache
from retry_requests import retry

from golfmatch.api.base_api import BaseAPI
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import APIError
from golfmatch.models.course import EXTERNAL_ID_PREFIX
from golfmatch.models.course import Course
from golfmatch.utils.geo import BoundingBox
from golfmatch.utils.geo import google_search_link
from golfmatch.utils.logging_utils import log_execution
from golfmatch.utils.rate_limiter import RateLimiter

UNNAMED_COURSE = 'Campo de Golf (Sin nombre)'
COUNTRY = 'España'
PLACEHOLDER_IMAGE = '/courses/course-1.jpg'
DEFAULT_RATING = 4.0
DEFAULT_AMENITIES = ['Campo de Golf']

QUERY_TEMPLATE = """
[out:json][timeout:25];
(
  node["leisure"="golf_course"]({bbox});
  way["leisure"="golf_course"]({bbox});
  relation["leisure"="golf_course"]({bbox});
);
out center;
"""

def build_query(bounds: BoundingBox) -> str:
    """Overpass QL for golf courses inside ``bounds``, with centers for ways and relations."""
    return QUERY_TEMPLATE.format(bbox=bounds.to_overpass())

def element_to_course(element: dict[str, Any]) -> Course:
    """Map one Overpass element to a Course.

    Coordinates come from the element itself, else from its ``center``;
    missing coordinates resolve to 0.
    """
    tags = element.get('tags') or {}
    center = element.get('center') or {}
    lat = element.get('lat') or center.get('lat') or 0.0
    lng = element.get('lon') or center.get('lon') or 0.0

    name = tags.get('name') or UNNAMED_COURSE
    city = tags.get('addr:city')
    location = f"{city}, {COUNTRY}" if city else COUNTRY

    return Course(
        id=f"{EXTERNAL_ID_PREFIX}{element.get('id')}",
        name=name,
        location=location,
        holes=18,
        par=72,
        rating=DEFAULT_RATING,
        amenities=list(DEFAULT_AMENITIES),
        image_url=PLACEHOLDER_IMAGE,
        lat=float(lat),
        lng=float(lng),
        booking_url=tags.get('website') or google_search_link(name),
        address=tags.get('addr:street') or location
    )

def parse_elements(data: Any) -> list[Course]:
    """Convert an Overpass JSON answer into courses, dropping ones without coordinates."""
    if not isinstance(data, dict):
        raise ValueError("Overpass response is not an object")
    courses = [element_to_course(element) for element in data.get('elements', [])]
    return [course for course in courses if course.lat != 0 and course.lng != 0]

class OverpassClient(BaseAPI):
    """Searches golf courses inside a map area."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        cache_name: str = 'golfmatch_overpass',
        cache_expire: int = 3600,
        rate_limiter: RateLimiter | None = None,
        session: requests.Session | None = None
    ):
        """Initialize client.

        Args:
            url: Interpreter endpoint URL
            timeout: Request timeout in seconds
            cache_name: requests-cache cache name
            cache_expire: Seconds before cached answers expire
            rate_limiter: Client-side limiter shared between requests
            session: Ready-made session, skips cache and retry setup
        """
        self.cache_name = cache_name
        self.cache_expire = cache_expire
        self._injected_session = session
        self.rate_limiter = rate_limiter or RateLimiter(max_calls=2, time_window=10)
        super().__init__(url, timeout=timeout)
        self.set_log_context(service="overpass")

    @classmethod
    def from_config(cls, config: AppConfig, rate_limiter: RateLimiter | None = None) -> 'OverpassClient':
        overpass = config.overpass
        return cls(
            overpass['url'],
            timeout=float(overpass.get('timeout', 30.0)),
            cache_name=overpass.get('cache_name', 'golfmatch_overpass'),
            cache_expire=int(overpass.get('cache_expire', 3600)),
            rate_limiter=rate_limiter or RateLimiter(
                max_calls=int(overpass.get('max_calls', 2)),
                time_window=overpass.get('time_window', 10)
            )
        )

    def _create_session(self) -> requests.Session:
        """Create a cached session with retries."""
        if self._injected_session is not None:
            return self._injected_session
        cache_session = requests_cache.CachedSession(self.cache_name, expire_after=self.cache_expire)
        return retry(cache_session, retries=3, backoff_factor=0.5)

    @log_execution(level='DEBUG', include_args=True)
    def search_golf_courses_in_bounds(self, south: float, west: float, north: float, east: float) -> list[Course]:
        """Find golf courses inside a bounding box.

        Network, HTTP and parse failures are logged and yield an empty list.

        Raises:
            ValidationError: If the bounding box is invalid
        """
        bounds = BoundingBox(south=south, west=west, north=north, east=east)
        query = build_query(bounds)

        waited = self.rate_limiter.wait()
        if waited:
            self.debug(f"Rate limited, waited {waited:.2f}s")

        try:
            data = self._make_request("GET", "", params={'data': query})
            courses = parse_elements(data)
        except (APIError, ValueError, TypeError) as e:
            self.warning(f"Error fetching map data: {e}", bbox=bounds.to_overpass())
            return []

        self.info(f"Found {len(courses)} golf courses", bbox=bounds.to_overpass())
        return courses
