"""
REST client for the hosted database and auth backend.

Talks to PostgREST style table endpoints under ``/rest/v1`` and GoTrue
style auth endpoints under ``/auth/v1``.
"""

from typing import Any

import requests

from golfmatch.api.base_api import BaseAPI
from golfmatch.api.base_api import JsonBody
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import APIError
from golfmatch.exceptions import APIResponseError
from golfmatch.exceptions import APITimeoutError
from golfmatch.exceptions import AuthError
from golfmatch.exceptions import BackendNotConfiguredError
from golfmatch.error_codes import ErrorCode


class BackendClient(BaseAPI):
    """Client for the ``courses``, ``profiles``, ``rounds`` and ``bookings`` tables and auth."""

    REST_PATH = "rest/v1"
    AUTH_PATH = "auth/v1"

    def __init__(self, url: str, anon_key: str, timeout: float = 10.0):
        """Initialize backend client.

        Args:
            url: Backend project URL
            anon_key: Public (anonymous) API key
            timeout: Default request timeout in seconds
        """
        self.anon_key = anon_key
        super().__init__(
            url,
            headers={
                'apikey': anon_key,
                'Accept': 'application/json',
                'Content-Type': 'application/json'
            },
            timeout=timeout
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> 'BackendClient':
        """Create a client from application configuration.

        Raises:
            BackendNotConfiguredError: If the app runs in demo mode
        """
        if not config.backend_configured:
            raise BackendNotConfiguredError("connect to the backend")
        backend = config.backend
        return cls(backend['url'], backend['anon_key'], float(backend.get('timeout', 10.0)))

    def _auth_headers(self, access_token: str | None = None) -> dict[str, str]:
        return {'Authorization': f"Bearer {access_token or self.anon_key}"}

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: tuple[str, bool] | None = None,
        single: bool = False,
        access_token: str | None = None,
        timeout: float | None = None
    ) -> JsonBody:
        """Select rows from a table.

        Args:
            table: Table name
            columns: PostgREST select expression, may embed related tables
            filters: Column equality filters
            order: ``(column, ascending)`` ordering
            single: Return one object instead of a list
            access_token: User token, the anon key is used when omitted
            timeout: Request timeout override

        Returns:
            List of rows, or one row (None if absent) when ``single``
        """
        params: dict[str, str] = {'select': columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        if order is not None:
            column, ascending = order
            params['order'] = f"{column}.{'asc' if ascending else 'desc'}"
        if single:
            params['limit'] = '1'

        rows = self._make_request(
            "GET",
            f"{self.REST_PATH}/{table}",
            params=params,
            headers=self._auth_headers(access_token),
            timeout=timeout
        )
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            rows = [rows]

        self.debug(f"Selected {len(rows)} rows", table=table)
        if single:
            return rows[0] if rows else None
        return rows

    def insert(
        self,
        table: str,
        row: dict[str, Any],
        access_token: str | None = None
    ) -> dict[str, Any]:
        """Insert one row and return the created record."""
        headers = self._auth_headers(access_token)
        headers['Prefer'] = 'return=representation'
        created = self._make_request(
            "POST",
            f"{self.REST_PATH}/{table}",
            data=row,
            headers=headers
        )
        if isinstance(created, list):
            created = created[0] if created else None
        if not created:
            raise APIResponseError(f"Insert into {table} returned no row")
        self.info("Inserted row", table=table)
        return created

    def _auth_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        access_token: str | None = None
    ) -> dict[str, Any]:
        """Call an auth endpoint, turning 4xx answers into AuthError."""
        try:
            result = self._make_request(
                method,
                f"{self.AUTH_PATH}/{endpoint}",
                params=params,
                data=data,
                headers=self._auth_headers(access_token)
            )
        except APIResponseError as e:
            if e.status_code is not None and 400 <= e.status_code < 500:
                message = e.message.removeprefix("Request failed: ")
                code = ErrorCode.INVALID_CREDENTIALS if e.status_code in (400, 401) else ErrorCode.AUTH_FAILED
                raise AuthError(message, {"status": e.status_code}, code=code) from e
            raise
        return result if isinstance(result, dict) else {}

    def sign_up(
        self,
        email: str,
        password: str,
        data: dict[str, Any] | None = None,
        redirect_to: str | None = None
    ) -> dict[str, Any]:
        """Register a new account.

        Returns:
            Session payload when confirmation is disabled, else the user
        """
        params = {'redirect_to': redirect_to} if redirect_to else None
        return self._auth_request(
            "POST",
            "signup",
            params=params,
            data={'email': email, 'password': password, 'data': data or {}}
        )

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email and password for a session."""
        return self._auth_request(
            "POST",
            "token",
            params={'grant_type': 'password'},
            data={'email': email, 'password': password}
        )

    def sign_out(self, access_token: str) -> None:
        """Invalidate the session behind ``access_token``."""
        self._auth_request("POST", "logout", access_token=access_token)

    def get_user(self, access_token: str) -> dict[str, Any]:
        """Get the auth user for ``access_token``.

        Raises:
            AuthError: If the token is invalid or expired
        """
        return self._auth_request("GET", "user", access_token=access_token)

    def check_connection(self, timeout: float = 5.0) -> int:
        """Check that the backend answers at all.

        Any HTTP status counts as reachable.

        Returns:
            HTTP status code of the probe

        Raises:
            APITimeoutError: If the backend does not answer in time
            APIError: On any other network failure
        """
        url = f"{self.base_url}/{self.REST_PATH}/"
        try:
            response = self.session.head(url, headers=self._auth_headers(), timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise APITimeoutError(f"Backend did not answer within {timeout}s", {"url": url}) from e
        except requests.exceptions.RequestException as e:
            raise APIError(f"Backend unreachable: {e!s}", ErrorCode.SERVICE_UNAVAILABLE, details={"url": url}) from e
        self.debug("Backend reachable", status=response.status_code)
        return response.status_code
