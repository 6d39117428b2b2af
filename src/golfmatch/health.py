"""Health check functionality for golfmatch."""

import logging
from datetime import datetime
from datetime import timezone
from typing import Any

from golfmatch import __version__
from golfmatch.api.backend import BackendClient
from golfmatch.config.settings import ConfigurationManager
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import APIError
from golfmatch.services import curated_dataset
from golfmatch.utils.logging_utils import get_logger

logger = get_logger(__name__)

HEALTHY = "healthy"
DEGRADED = "degraded"
UNHEALTHY = "unhealthy"

def check_config_access(config: AppConfig | None = None) -> tuple[str, str]:
    """Check if configuration is loaded.

    Returns:
        Tuple of (status, message)
    """
    try:
        if config is None:
            config = ConfigurationManager().load_config()
        mode = "demo mode" if config.demo_mode else "backend configured"
        return HEALTHY, f"Configuration loaded ({mode})"
    except Exception as e:
        return UNHEALTHY, f"Configuration error: {e!s}"

def check_curated_dataset() -> tuple[str, str]:
    try:
        courses = curated_dataset.load_curated_courses()
    except (OSError, ValueError) as e:
        return UNHEALTHY, f"Curated dataset unreadable: {e!s}"
    return HEALTHY, f"{len(courses)} curated courses"

def check_logging() -> tuple[str, str]:
    """Check if logging is working.

    Returns:
        Tuple of (status, message)
    """
    try:
        test_logger = logging.getLogger("golfmatch.healthcheck")
        test_logger.debug("Health check test log message")
        return HEALTHY, "Logging system operational"
    except Exception as e:
        return UNHEALTHY, f"Logging error: {e!s}"

def check_backend(config: AppConfig, backend: BackendClient | None = None) -> tuple[str, str] | None:
    """Probe the backend. Skipped (None) in demo mode; unreachable is degraded."""
    if backend is None:
        if config.demo_mode:
            return None
        backend = BackendClient.from_config(config)

    timeout = float(config.backend.get('connection_check_timeout', 5.0))
    try:
        status_code = backend.check_connection(timeout=timeout)
    except APIError as e:
        return DEGRADED, f"Backend unreachable: {e.message}"
    return HEALTHY, f"Backend reachable (HTTP {status_code})"

def get_health_status(config: AppConfig | None = None, backend: BackendClient | None = None) -> dict[str, Any]:
    """Get complete health status of the application.

    Returns:
        Dictionary containing health status information
    """
    status: dict[str, Any] = {
        "status": HEALTHY,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": [],
        "version": __version__
    }

    checks: list[tuple[str, tuple[str, str]]] = [
        ("config", check_config_access(config)),
        ("curated_dataset", check_curated_dataset()),
        ("logging", check_logging()),
    ]

    if config is None and ConfigurationManager().is_loaded:
        config = ConfigurationManager().config
    if config is not None:
        backend_check = check_backend(config, backend)
        if backend_check is not None:
            checks.append(("backend", backend_check))

    for name, (check_status, message) in checks:
        status["checks"].append({
            "name": name,
            "status": check_status,
            "message": message
        })
        if check_status == UNHEALTHY:
            status["status"] = UNHEALTHY
        elif check_status == DEGRADED and status["status"] == HEALTHY:
            status["status"] = DEGRADED

    if status["status"] != HEALTHY:
        logger.warning(f"Health check {status['status']}")

    return status
