"""Statistics endpoint."""

from flask import Blueprint
from flask import jsonify

from golfmatch.web.context import bearer_token
from golfmatch.web.context import services

bp = Blueprint('stats', __name__, url_prefix='/api')

@bp.get('/stats')
def get_stats():
    return jsonify(services().stats.get_user_stats(bearer_token()))
