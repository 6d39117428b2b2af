"""Tests for the hosted backend client."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from golfmatch.api.backend import BackendClient
from golfmatch.error_codes import ErrorCode
from golfmatch.exceptions import APIError, APIResponseError, APITimeoutError, AuthError, BackendNotConfiguredError

def _response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = ''
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    return response

@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session

@pytest.fixture
def client(session):
    with patch('requests.Session', return_value=session):
        return BackendClient("https://test-project.example.co", "anon-key", timeout=4)

def test_from_config_requires_backend(demo_config):
    with pytest.raises(BackendNotConfiguredError) as exc_info:
        BackendClient.from_config(demo_config)
    assert exc_info.value.code == ErrorCode.BACKEND_NOT_CONFIGURED

def test_from_config(backend_config):
    client = BackendClient.from_config(backend_config)
    assert client.base_url == "https://test-project.example.co"
    assert client.session.headers["apikey"] == "test-anon-key"

def test_select_builds_postgrest_query(client, session):
    session.request.return_value = _response(body=[{"id": "1", "name": "A"}])

    rows = client.select('courses', filters={'id': '1'}, order=('rating', False))

    assert rows == [{"id": "1", "name": "A"}]
    kwargs = session.request.call_args[1]
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "https://test-project.example.co/rest/v1/courses"
    assert kwargs["params"] == {'select': '*', 'id': 'eq.1', 'order': 'rating.desc'}
    assert kwargs["headers"] == {'Authorization': 'Bearer anon-key'}
    assert kwargs["timeout"] == 4

def test_select_single_returns_first_row_or_none(client, session):
    session.request.return_value = _response(body=[{"id": "1"}])
    assert client.select('courses', filters={'id': '1'}, single=True) == {"id": "1"}
    assert session.request.call_args[1]["params"]["limit"] == '1'

    session.request.return_value = _response(body=[])
    assert client.select('courses', filters={'id': '2'}, single=True) is None

def test_select_uses_user_token_and_timeout_override(client, session):
    session.request.return_value = _response(body=[])
    client.select('rounds', access_token='user-token', timeout=2.5)

    kwargs = session.request.call_args[1]
    assert kwargs["headers"] == {'Authorization': 'Bearer user-token'}
    assert kwargs["timeout"] == 2.5

def test_insert_returns_created_row(client, session):
    session.request.return_value = _response(201, [{"id": "b1", "players": 2}])

    created = client.insert('bookings', {"players": 2}, access_token='user-token')

    assert created == {"id": "b1", "players": 2}
    kwargs = session.request.call_args[1]
    assert kwargs["method"] == "POST"
    assert kwargs["json"] == {"players": 2}
    assert kwargs["headers"]["Prefer"] == 'return=representation'
    assert kwargs["headers"]["Authorization"] == 'Bearer user-token'

def test_insert_without_representation_fails(client, session):
    session.request.return_value = _response(201, [])
    with pytest.raises(APIResponseError):
        client.insert('bookings', {"players": 2})

def test_sign_in_with_password(client, session):
    session.request.return_value = _response(body={"access_token": "t", "user": {"id": "u"}})

    result = client.sign_in_with_password("a@b.com", "secret")

    assert result["access_token"] == "t"
    kwargs = session.request.call_args[1]
    assert kwargs["url"] == "https://test-project.example.co/auth/v1/token"
    assert kwargs["params"] == {'grant_type': 'password'}
    assert kwargs["json"] == {'email': 'a@b.com', 'password': 'secret'}

def test_sign_in_rejection_raises_auth_error(client, session):
    session.request.return_value = _response(400, {"error": "invalid_grant", "error_description": "Invalid login credentials"})

    with pytest.raises(AuthError) as exc_info:
        client.sign_in_with_password("a@b.com", "wrong")

    assert exc_info.value.message == "Invalid login credentials"
    assert exc_info.value.code == ErrorCode.INVALID_CREDENTIALS

def test_auth_server_error_is_not_auth_error(client, session):
    session.request.return_value = _response(503, {"message": "down"})
    with pytest.raises(APIResponseError):
        client.get_user("token")

def test_sign_up_sends_metadata_and_redirect(client, session):
    session.request.return_value = _response(body={"id": "u1", "email": "a@b.com"})

    client.sign_up("a@b.com", "secret", data={"full_name": "a"}, redirect_to="http://localhost:3000/profile")

    kwargs = session.request.call_args[1]
    assert kwargs["url"] == "https://test-project.example.co/auth/v1/signup"
    assert kwargs["params"] == {'redirect_to': 'http://localhost:3000/profile'}
    assert kwargs["json"]["data"] == {"full_name": "a"}

def test_get_user_sends_bearer_token(client, session):
    session.request.return_value = _response(body={"id": "u1"})
    assert client.get_user("user-token") == {"id": "u1"}
    assert session.request.call_args[1]["headers"] == {'Authorization': 'Bearer user-token'}

@pytest.mark.parametrize("status_code", [200, 401, 404])
def test_check_connection_any_status_is_reachable(client, session, status_code):
    session.head.return_value = Mock(status_code=status_code)

    assert client.check_connection(timeout=5) == status_code
    args, kwargs = session.head.call_args
    assert args[0] == "https://test-project.example.co/rest/v1/"
    assert kwargs["timeout"] == 5

def test_check_connection_timeout(client, session):
    session.head.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(APITimeoutError):
        client.check_connection()

def test_check_connection_network_error(client, session):
    session.head.side_effect = requests.exceptions.ConnectionError("refused")
    with pytest.raises(APIError) as exc_info:
        client.check_connection()
    assert exc_info.value.code == ErrorCode.SERVICE_UNAVAILABLE
