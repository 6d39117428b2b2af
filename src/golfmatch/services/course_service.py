"""
Course discovery service.

Courses come from the hosted backend when one is configured, enriched with
the curated dataset, and from live map searches for the map view.
"""

from dataclasses import replace
from typing import Any

from golfmatch.api.backend import BackendClient
from golfmatch.api.overpass import OverpassClient
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import GolfMatchError
from golfmatch.exceptions import NotFoundError
from golfmatch.exceptions import handle_errors
from golfmatch.models.course import Course
from golfmatch.services import curated_dataset
from golfmatch.utils.geo import BoundingBox
from golfmatch.utils.geo import google_search_link
from golfmatch.utils.geo import validate_coordinates
from golfmatch.utils.geo import within_tolerance
from golfmatch.utils.logging_utils import EnhancedLoggerMixin

COURSE_DETAIL_PATH = '/courses/{id}'

def booking_link(course: Course) -> str:
    """The course booking page, or a web search for one."""
    return course.booking_url or google_search_link(course.name)

def merge_with_curated(course: Course) -> Course:
    """Enrich a backend course with the curated entry of the same name.

    The curated image always wins; coordinates and booking link are only
    taken from the curated entry when the backend has none.
    """
    curated = curated_dataset.find_by_name(course.name)
    if curated is None:
        return course
    return replace(
        course,
        image_url=curated.image_url or course.image_url,
        lat=course.lat or curated.lat,
        lng=course.lng or curated.lng,
        booking_url=course.booking_url or curated.booking_url
    )

def filter_courses(courses: list[Course], term: str | None) -> list[Course]:
    """Case-insensitive substring match on name or location."""
    if not term:
        return list(courses)
    needle = term.lower()
    return [
        course for course in courses
        if needle in course.name.lower() or needle in course.location.lower()
    ]

def _is_duplicate(candidate: Course, existing: list[Course]) -> bool:
    return any(
        course.name == candidate.name
        and within_tolerance(course.lat, candidate.lat)
        for course in existing
    )

def merge_search_results(existing: list[Course], found: list[Course]) -> list[Course]:
    """Append map search results that are not already listed.

    A found course is a duplicate when a listed course has the same name and
    a latitude within 0.001 degrees. Neither input is modified.
    """
    merged = list(existing)
    for course in found:
        if not _is_duplicate(course, merged):
            merged.append(course)
    return merged

class CourseService(EnhancedLoggerMixin):
    """Lists, looks up and searches golf courses."""

    def __init__(
        self,
        config: AppConfig,
        backend: BackendClient | None = None,
        overpass: OverpassClient | None = None
    ):
        super().__init__()
        self.config = config
        self._backend = backend
        self._overpass = overpass
        self.set_log_context(service="courses")

    @property
    def demo_mode(self) -> bool:
        return self._backend is None and self.config.demo_mode

    @property
    def backend(self) -> BackendClient:
        if self._backend is None:
            self._backend = BackendClient.from_config(self.config)
        return self._backend

    @property
    def overpass(self) -> OverpassClient:
        if self._overpass is None:
            self._overpass = OverpassClient.from_config(self.config)
        return self._overpass

    def list_courses(self) -> list[Course]:
        """All courses, best rated first.

        Falls back to the curated dataset in demo mode, when the backend has
        no courses, or when the backend request fails.
        """
        if self.demo_mode:
            self.debug("Backend not configured, using curated courses")
            return curated_dataset.load_curated_courses()

        try:
            with handle_errors(GolfMatchError, "courses", "list courses"):
                rows = self.backend.select('courses', order=('rating', False))
                courses = [Course.from_dict(row) for row in rows]
        except Exception as e:
            self.warning(f"Backend course listing failed, using curated courses: {e}")
            return curated_dataset.load_curated_courses()

        if not courses:
            self.info("Backend has no courses, using curated courses")
            return curated_dataset.load_curated_courses()

        return [merge_with_curated(course) for course in courses]

    def _curated_or_not_found(self, course_id: str) -> Course:
        course = curated_dataset.find_by_id(course_id)
        if course is None:
            raise NotFoundError(f"Course {course_id} not found", {"course_id": course_id})
        return course

    def get_course(self, course_id: str) -> Course:
        """Look up one course.

        Raises:
            NotFoundError: If neither the backend nor the curated dataset has it
        """
        if self.demo_mode:
            return self._curated_or_not_found(course_id)

        try:
            with handle_errors(GolfMatchError, "courses", "get course"):
                row = self.backend.select(
                    'courses',
                    filters={'id': course_id},
                    single=True,
                    timeout=float(self.config.backend.get('detail_timeout', 2.5))
                )
                if row is None:
                    raise NotFoundError(f"Course {course_id} not found", {"course_id": course_id})
                course = Course.from_dict(row)
        except Exception as e:
            self.warning(f"Backend course lookup failed, using curated course: {e}", course_id=course_id)
            return self._curated_or_not_found(course_id)

        if not course.booking_url:
            curated = curated_dataset.find_by_name(course.name)
            if curated is not None:
                course = replace(course, booking_url=curated.booking_url)
        return course

    def courses_for_round_logging(self) -> list[Course]:
        """Courses a round can be logged against, ordered by name."""
        if self.demo_mode:
            return sorted(curated_dataset.load_curated_courses(), key=lambda c: c.name)

        try:
            rows = self.backend.select('courses', columns='id,name,par', order=('name', True))
            return [Course.from_dict(row) for row in rows]
        except Exception as e:
            self.warning(f"Backend course listing failed, using curated courses: {e}")
            return sorted(curated_dataset.load_curated_courses(), key=lambda c: c.name)

    def search_area(self, bounds: BoundingBox, existing: list[Course] | None = None) -> list[Course]:
        """Search a map area and merge the results into ``existing``."""
        if existing is None:
            existing = self.list_courses()
        found = self.overpass.search_golf_courses_in_bounds(
            bounds.south, bounds.west, bounds.north, bounds.east
        )
        merged = merge_search_results(existing, found)
        self.info(f"Map search added {len(merged) - len(existing)} courses", found=len(found))
        return merged

    def map_view(
        self,
        courses: list[Course],
        user_location: tuple[float, float] | None = None
    ) -> dict[str, Any]:
        """Center, zoom and markers for the course map.

        Raises:
            ValidationError: If the user location is out of range
        """
        map_config = self.config.map
        if user_location is not None:
            center = list(validate_coordinates(*user_location))
            zoom = int(map_config.get('user_zoom', 10))
        else:
            center = list(map_config.get('default_center', [40.4168, -3.7038]))
            zoom = int(map_config.get('default_zoom', 6))

        markers = [
            {
                'id': course.id,
                'name': course.name,
                'location': course.location,
                'rating': course.rating,
                'lat': course.lat,
                'lng': course.lng,
                'image_url': course.image_url,
                'external': course.is_external,
                'detail_url': None if course.is_external else COURSE_DETAIL_PATH.format(id=course.id),
                'booking_url': booking_link(course)
            }
            for course in courses
            if course.has_coordinates
        ]
        return {'center': center, 'zoom': zoom, 'markers': markers}
