"""Tests for round logging."""

import pytest

from golfmatch.exceptions import AuthError, BackendNotConfiguredError, ValidationError
from golfmatch.services.auth_service import AuthService
from golfmatch.services.round_service import ROUND_COLUMNS, RoundService

@pytest.fixture
def service(backend_config, mock_backend, signed_in_user):
    mock_backend.get_user.return_value = signed_in_user
    return RoundService(backend_config, mock_backend, auth=AuthService(backend_config, mock_backend))

def test_log_round(service, mock_backend):
    mock_backend.insert.return_value = {'id': 'r-1'}

    logged = service.log_round('access-1', '1', '2024-05-20', '85', stableford_points=30, notes='Windy')

    assert logged.id == 'r-1'
    assert logged.score == 85
    assert logged.stableford_points == 30
    mock_backend.insert.assert_called_once_with(
        'rounds',
        {
            'course_id': '1',
            'date': '2024-05-20',
            'score': 85,
            'stableford_points': 30,
            'notes': 'Windy',
            'user_id': 'user-1'
        },
        access_token='access-1'
    )

def test_optional_fields_are_omitted(service, mock_backend):
    mock_backend.insert.return_value = {'id': 'r-2'}

    service.log_round('access-1', '1', '2024-05-20', 90, stableford_points='', notes='')

    row = mock_backend.insert.call_args[0][1]
    assert 'stableford_points' not in row
    assert 'notes' not in row

@pytest.mark.parametrize("course_id,round_date,score", [
    (None, '2024-05-20', 85),
    ('1', '', 85),
    ('1', '2024-05-20', None),
    ('1', '2024-05-20', ''),
])
def test_required_fields(service, course_id, round_date, score):
    with pytest.raises(ValidationError) as exc_info:
        service.log_round('access-1', course_id, round_date, score)
    assert exc_info.value.message == "Course, date and score are required"

@pytest.mark.parametrize("score", [0, -3, 'eighty', 85.5, True])
def test_invalid_score(service, mock_backend, score):
    with pytest.raises(ValidationError):
        service.log_round('access-1', '1', '2024-05-20', score)
    mock_backend.insert.assert_not_called()

def test_negative_stableford(service):
    with pytest.raises(ValidationError):
        service.log_round('access-1', '1', '2024-05-20', 85, stableford_points=-1)

def test_not_signed_in(service, mock_backend):
    mock_backend.get_user.side_effect = AuthError("expired")
    with pytest.raises(AuthError):
        service.log_round('stale', '1', '2024-05-20', 85)

def test_demo_mode_cannot_log(demo_config):
    with pytest.raises(BackendNotConfiguredError):
        RoundService(demo_config).log_round('demo-token', '1', '2024-05-20', 85)

def test_list_rounds_with_course(service, mock_backend):
    mock_backend.select.return_value = [
        {'id': 'r-2', 'user_id': 'user-1', 'course_id': '6', 'date': '2024-05-21', 'score': 30,
         'course': {'name': 'Golf Park', 'par': 27}},
        {'id': 'r-1', 'user_id': 'user-1', 'course_id': '1', 'date': '2024-05-20', 'score': 85,
         'course': None},
    ]

    rounds = service.list_rounds('access-1')

    assert [r.id for r in rounds] == ['r-2', 'r-1']
    assert rounds[0].course_name == 'Golf Park'
    assert rounds[0].par == 27
    assert rounds[1].par == 72
    mock_backend.select.assert_called_once_with(
        'rounds',
        columns=ROUND_COLUMNS,
        filters={'user_id': 'user-1'},
        order=('date', False),
        access_token='access-1'
    )

def test_demo_mode_has_no_rounds(demo_config):
    assert RoundService(demo_config).list_rounds('demo-token') == []
