"""Tee-time and booking endpoints."""

from flask import Blueprint
from flask import jsonify

from golfmatch.services.booking_service import DEFAULT_PLAYERS
from golfmatch.services.booking_service import TEE_TIME_SLOTS
from golfmatch.web.context import bearer_token
from golfmatch.web.context import json_body
from golfmatch.web.context import services

bp = Blueprint('bookings', __name__, url_prefix='/api')

@bp.get('/tee-times')
def tee_times():
    return jsonify({'slots': list(TEE_TIME_SLOTS)})

@bp.get('/bookings')
def list_bookings():
    bookings = services().bookings.list_bookings(bearer_token())
    return jsonify({'bookings': [b.to_dict() for b in bookings]})

@bp.post('/bookings')
def create_booking():
    body = json_body()
    booking = services().bookings.create_booking(
        bearer_token(),
        body.get('course_id'),
        body.get('date'),
        body.get('time'),
        body.get('players', DEFAULT_PLAYERS)
    )
    return jsonify(booking.to_dict()), 201

@bp.get('/bookings/next')
def next_booking():
    booking = services().bookings.next_booking(bearer_token())
    return jsonify({'booking': booking.to_dict() if booking else None})
