"""Tests for the base API implementation."""

import json
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from golfmatch.api.base_api import BaseAPI
from golfmatch.exceptions import APIError, APIResponseError, APITimeoutError, APIValidationError

@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session

@pytest.fixture
def base_api(mock_session):
    """Create a BaseAPI instance for testing."""
    with patch('requests.Session', return_value=mock_session):
        return BaseAPI(base_url="https://api.test.com/", headers={"apikey": "test-key"})

def test_base_api_initialization():
    """Test BaseAPI initialization."""
    api = BaseAPI(base_url="https://api.test.com/", headers={"apikey": "test-key"}, timeout=5)
    assert api.base_url == "https://api.test.com"
    assert api.timeout == 5
    assert api.session.headers["apikey"] == "test-key"

def test_create_session_retry_config(base_api):
    """Test session creation with retry configuration."""
    session = base_api._create_session()
    assert session.adapters["https://"].max_retries.total == 3
    assert session.adapters["http://"].max_retries.total == 3

@pytest.mark.parametrize("status_code,body,expected_error", [
    (400, {"error": "Bad Request"}, "Request failed: Bad Request (Code: invalid_response)"),
    (401, {"msg": "Invalid API key"}, "Request failed: Invalid API key (Code: invalid_response)"),
    (400, {"error": "invalid_grant", "error_description": "Invalid login credentials"},
     "Request failed: Invalid login credentials (Code: invalid_response)"),
    (500, None, "Request failed: HTTP 500 (Code: invalid_response)")
])
def test_validate_response_errors(base_api, status_code, body, expected_error):
    """Test response validation with different error scenarios."""
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    if body is None:
        mock_response.json.side_effect = ValueError("not json")
    else:
        mock_response.json.return_value = body

    with pytest.raises(APIResponseError) as exc_info:
        base_api._validate_response(mock_response)
    assert str(exc_info.value) == expected_error
    assert exc_info.value.status_code == status_code

@pytest.mark.parametrize("response_text,expected_result", [
    ('{"key": "value"}', {"key": "value"}),
    ('[{"id": 1}, {"id": 2}]', [{"id": 1}, {"id": 2}]),
    ("", None),
    ("null", None)
])
def test_parse_response_formats(base_api, response_text, expected_result):
    """Test parsing different response formats."""
    mock_response = Mock()
    mock_response.text = response_text

    if response_text and response_text != "null":
        mock_response.json.return_value = json.loads(response_text)
    else:
        mock_response.json.return_value = None

    result = base_api._parse_response(mock_response)
    assert result == expected_result

def test_parse_response_invalid_format(base_api):
    """Test parsing invalid JSON format."""
    mock_response = Mock()
    mock_response.text = "invalid json"
    mock_response.json.side_effect = ValueError("Invalid JSON")

    with pytest.raises(APIValidationError) as exc_info:
        base_api._parse_response(mock_response)
    assert "Failed to parse response" in str(exc_info.value)

@pytest.mark.parametrize("exception_class,expected_error", [
    (Timeout, APITimeoutError),
    (ConnectionError, APIResponseError),
    (RequestException, APIResponseError),
    (Exception, APIError)
])
def test_make_request_error_handling(base_api, exception_class, expected_error):
    """Test error handling in make_request method."""
    base_api.session.request.side_effect = exception_class("Test error")
    with pytest.raises(expected_error):
        base_api._make_request("GET", "/test")

def test_network_errors_have_no_status(base_api):
    base_api.session.request.side_effect = ConnectionError("refused")
    with pytest.raises(APIResponseError) as exc_info:
        base_api._make_request("GET", "/test")
    assert exc_info.value.status_code is None

def test_make_request_success(base_api):
    """Test successful request."""
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {"success": True}
    base_api.session.request.return_value = mock_response
    result = base_api._make_request("GET", "/test")
    assert result == {"success": True}

def test_make_request_custom_timeout(base_api):
    """Test request with custom timeout."""
    mock_response = Mock()
    mock_response.json.return_value = {"success": True}
    base_api.session.request.return_value = mock_response
    base_api._make_request("GET", "/test", timeout=30)

    kwargs = base_api.session.request.call_args[1]
    assert kwargs.get("timeout") == 30

def test_make_request_default_timeout(base_api):
    mock_response = Mock()
    mock_response.json.return_value = {}
    base_api.session.request.return_value = mock_response
    base_api._make_request("GET", "/test")

    assert base_api.session.request.call_args[1]["timeout"] == BaseAPI.DEFAULT_TIMEOUT

def test_make_request_with_params_data_and_headers(base_api):
    """Test request with query parameters, body and per-request headers."""
    mock_response = Mock()
    mock_response.json.return_value = {"success": True}
    base_api.session.request.return_value = mock_response

    result = base_api._make_request(
        "POST",
        "/rest/v1/test",
        params={"key": "value"},
        data={"data": "test"},
        headers={"Authorization": "Bearer token"}
    )

    assert result == {"success": True}
    base_api.session.request.assert_called_once()
    kwargs = base_api.session.request.call_args[1]
    assert kwargs.get("method") == "POST"
    assert kwargs.get("url") == "https://api.test.com/rest/v1/test"
    assert kwargs.get("params") == {"key": "value"}
    assert kwargs.get("json") == {"data": "test"}
    assert kwargs.get("headers") == {"Authorization": "Bearer token"}

def test_make_request_empty_endpoint_uses_base_url(base_api):
    mock_response = Mock()
    mock_response.json.return_value = {}
    base_api.session.request.return_value = mock_response

    base_api._make_request("GET", "")

    assert base_api.session.request.call_args[1]["url"] == "https://api.test.com"
