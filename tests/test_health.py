"""Tests for health checks."""

from unittest.mock import patch

from golfmatch import __version__
from golfmatch.exceptions import APIError
from golfmatch.health import DEGRADED, HEALTHY, UNHEALTHY, check_backend, check_curated_dataset, get_health_status

def test_demo_mode_is_healthy(demo_config):
    status = get_health_status(demo_config)

    assert status['status'] == HEALTHY
    assert status['version'] == __version__
    assert [c['name'] for c in status['checks']] == ['config', 'curated_dataset', 'logging']
    assert status['checks'][0]['message'] == 'Configuration loaded (demo mode)'
    assert status['checks'][1]['message'] == '10 curated courses'

def test_loads_configuration_when_not_given():
    status = get_health_status()
    assert status['status'] == HEALTHY

def test_reachable_backend(backend_config, mock_backend):
    mock_backend.check_connection.return_value = 404

    status = get_health_status(backend_config, mock_backend)

    assert status['status'] == HEALTHY
    assert status['checks'][-1] == {'name': 'backend', 'status': HEALTHY, 'message': 'Backend reachable (HTTP 404)'}
    mock_backend.check_connection.assert_called_once_with(timeout=5.0)

def test_unreachable_backend_is_degraded(backend_config, mock_backend):
    mock_backend.check_connection.side_effect = APIError("Backend unreachable: refused")

    status = get_health_status(backend_config, mock_backend)

    assert status['status'] == DEGRADED
    assert status['checks'][-1]['status'] == DEGRADED

def test_backend_skipped_in_demo_mode(demo_config):
    assert check_backend(demo_config) is None

def test_unreadable_dataset_is_unhealthy(demo_config):
    with patch('golfmatch.health.curated_dataset.load_curated_courses', side_effect=OSError("missing")):
        assert check_curated_dataset()[0] == UNHEALTHY
        assert get_health_status(demo_config)['status'] == UNHEALTHY
