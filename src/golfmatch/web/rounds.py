"""Round logging endpoints."""

from flask import Blueprint
from flask import jsonify

from golfmatch.web.context import bearer_token
from golfmatch.web.context import json_body
from golfmatch.web.context import services

bp = Blueprint('rounds', __name__, url_prefix='/api/rounds')

@bp.get('')
def list_rounds():
    rounds = services().rounds.list_rounds(bearer_token())
    return jsonify({'rounds': [r.to_dict() for r in rounds]})

@bp.post('')
def log_round():
    body = json_body()
    logged = services().rounds.log_round(
        bearer_token(),
        body.get('course_id'),
        body.get('date'),
        body.get('score'),
        body.get('stableford_points'),
        body.get('notes')
    )
    return jsonify(logged.to_dict()), 201

@bp.get('/courses')
def round_courses():
    """Courses offered when logging a round, by name."""
    courses = services().courses.courses_for_round_logging()
    return jsonify({'courses': [{'id': c.id, 'name': c.name, 'par': c.par} for c in courses]})
