"""Course listing, detail, map and map-area search endpoints."""

from flask import Blueprint
from flask import jsonify
from flask import request

from golfmatch.utils.geo import BoundingBox
from golfmatch.services.course_service import filter_courses
from golfmatch.web.context import optional_float
from golfmatch.web.context import services

bp = Blueprint('courses', __name__, url_prefix='/api/courses')

@bp.get('')
def list_courses():
    courses = filter_courses(services().courses.list_courses(), request.args.get('q'))
    return jsonify({'courses': [c.to_dict() for c in courses], 'count': len(courses)})

@bp.get('/map')
def course_map():
    """Map view; ``lat``/``lng`` stand in for the user's location when given."""
    lat = optional_float('lat')
    lng = optional_float('lng')
    user_location = (lat, lng) if lat is not None and lng is not None else None

    course_service = services().courses
    courses = filter_courses(course_service.list_courses(), request.args.get('q'))
    return jsonify(course_service.map_view(courses, user_location))

@bp.get('/search-area')
def search_area():
    bounds = BoundingBox.from_mapping(request.args.to_dict())
    courses = services().courses.search_area(bounds)
    return jsonify({'courses': [c.to_dict() for c in courses], 'count': len(courses)})

@bp.get('/<course_id>')
def get_course(course_id: str):
    return jsonify(services().courses.get_course(course_id).to_dict())
