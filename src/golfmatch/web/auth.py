"""Sign-up, sign-in, sign-out, session and profile endpoints."""

from flask import Blueprint
from flask import jsonify

from golfmatch.web.context import bearer_token
from golfmatch.web.context import json_body
from golfmatch.web.context import services

bp = Blueprint('auth', __name__, url_prefix='/api')

@bp.post('/auth/signup')
def sign_up():
    body = json_body()
    result = services().auth.sign_up(body.get('email'), body.get('password'))
    return jsonify(result.to_dict()), 201

@bp.post('/auth/signin')
def sign_in():
    body = json_body()
    session = services().auth.sign_in(body.get('email'), body.get('password'))
    return jsonify(session.to_dict())

@bp.post('/auth/signout')
def sign_out():
    services().auth.sign_out(bearer_token())
    return '', 204

@bp.get('/auth/session')
def get_session():
    session = services().auth.get_session(bearer_token())
    return jsonify({'session': session.to_dict() if session else None})

@bp.get('/profile')
def get_profile():
    return jsonify(services().auth.get_profile(bearer_token()).to_dict())
