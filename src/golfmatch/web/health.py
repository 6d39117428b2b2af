"""Health endpoint."""

from flask import Blueprint
from flask import jsonify

from golfmatch.health import UNHEALTHY
from golfmatch.health import get_health_status
from golfmatch.web.context import services

bp = Blueprint('health', __name__)

@bp.get('/health')
def health():
    status = get_health_status(services().config, services().backend)
    code = 503 if status['status'] == UNHEALTHY else 200
    return jsonify(status), code
