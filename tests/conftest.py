"""Pytest configuration and shared fixtures."""

import logging
import os
from unittest.mock import Mock

import pytest

from golfmatch.api.backend import BackendClient
from golfmatch.api.overpass import OverpassClient
from golfmatch.config import error_aggregator
from golfmatch.config.settings import ConfigurationManager

BACKEND_OVERRIDES = {
    'backend': {
        'url': 'https://test-project.example.co',
        'anon_key': 'test-anon-key',
    }
}

@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and cached configuration."""
    for name in list(os.environ):
        if name.startswith('GOLFMATCH_'):
            monkeypatch.delenv(name)
    monkeypatch.setenv("GOLFMATCH_CONFIG_DIR", str(tmp_path))

    ConfigurationManager().reset()
    yield
    ConfigurationManager().reset()
    app_logger = logging.getLogger('golfmatch')
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    if error_aggregator._error_aggregator is not None:
        error_aggregator._error_aggregator.shutdown()
        error_aggregator._error_aggregator = None

@pytest.fixture
def demo_config():
    """Configuration without a backend."""
    return ConfigurationManager().load_config()

@pytest.fixture
def backend_config():
    """Configuration with a (fake) backend."""
    return ConfigurationManager().load_config(overrides=BACKEND_OVERRIDES)

@pytest.fixture
def mock_backend():
    """Backend client double, every call must be configured by the test."""
    backend = Mock(spec=BackendClient)
    backend.check_connection.return_value = 200
    return backend

@pytest.fixture
def mock_overpass():
    overpass = Mock(spec=OverpassClient)
    overpass.search_golf_courses_in_bounds.return_value = []
    return overpass

@pytest.fixture
def signed_in_user():
    return {'id': 'user-1', 'email': 'player@example.com', 'user_metadata': {'full_name': 'player'}}
