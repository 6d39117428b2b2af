"""
Base API client for the golf booking application.
"""

import json
import time
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from golfmatch.exceptions import APIError
from golfmatch.exceptions import APIResponseError
from golfmatch.exceptions import APITimeoutError
from golfmatch.exceptions import APIValidationError
from golfmatch.utils.logging_utils import LoggerMixin

JsonBody = dict[str, Any] | list[dict[str, Any]] | None
Timeout = float | tuple[float, float]

class BaseAPI(LoggerMixin):
    """Base class for API clients."""

    # Default timeouts (connection timeout, read timeout)
    DEFAULT_TIMEOUT: Timeout = (7, 20)

    # Default retry settings
    DEFAULT_RETRY_TOTAL = 3
    DEFAULT_RETRY_BACKOFF_FACTOR = 0.5
    DEFAULT_RETRY_STATUS_FORCELIST = [408, 429, 500, 502, 503, 504]

    # Keys that may carry a human readable message in error bodies
    ERROR_MESSAGE_KEYS = ('message', 'msg', 'error_description', 'error')

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: Timeout | None = None
    ):
        """Initialize API client.

        Args:
            base_url: Base URL for API
            headers: Headers sent with every request
            timeout: Default request timeout
        """
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

        self.session = self._create_session()
        if headers:
            self.session.headers.update(headers)

        self.logger.debug(f"{self.__class__.__name__}: base_url {self.base_url}")

    def _create_session(self) -> requests.Session:
        """
        Create a requests session with retry strategy.

        Returns:
            Session with configured retry strategy
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.DEFAULT_RETRY_TOTAL,
            backoff_factor=self.DEFAULT_RETRY_BACKOFF_FACTOR,
            status_forcelist=self.DEFAULT_RETRY_STATUS_FORCELIST,
            allowed_methods=["GET", "HEAD"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _error_message(self, response: requests.Response) -> str | None:
        """Extract the error message from an error response body, if any."""
        try:
            error_data = response.json()
        except (ValueError, AttributeError):
            return None
        if not isinstance(error_data, dict):
            return None
        for key in self.ERROR_MESSAGE_KEYS:
            value = error_data.get(key)
            if isinstance(value, str) and value:
                return value
        return None

    def _validate_response(self, response: requests.Response) -> None:
        """
        Validate response and raise appropriate errors.

        Args:
            response: Response to validate

        Raises:
            APIResponseError: If response status code indicates an error
        """
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = self._error_message(response) or f"HTTP {response.status_code}"
            raise APIResponseError(f"Request failed: {error_msg}", response=response) from e

    def _parse_response(self, response: requests.Response) -> JsonBody:
        """Parse response content.

        Args:
            response: Response object to parse

        Returns:
            Parsed response data or None if empty

        Raises:
            APIValidationError: If response cannot be parsed
        """
        try:
            result: dict[str, Any] | list[dict[str, Any]] = response.json()
            return result
        except ValueError:
            content = response.text.strip()

            if not content or content == "null":
                return None

            if content.startswith("[") and content.endswith("]"):
                try:
                    array_result: list[dict[str, Any]] = json.loads(content)
                    return array_result
                except json.JSONDecodeError:
                    pass

            raise APIValidationError(f"Failed to parse response: {content[:100]}...")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        data: dict[str, Any] | list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
        timeout: Timeout | None = None,
        validate_response: bool = True
    ) -> JsonBody:
        """
        Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint
            params: Query parameters
            data: Request body data
            headers: Extra headers for this request only
            timeout: Request timeout (connection timeout, read timeout)
            validate_response: Whether to validate the response

        Returns:
            Response data

        Raises:
            APITimeoutError: If request times out
            APIResponseError: If request fails
            APIValidationError: If response validation fails
            APIError: For other errors
        """
        start_time = time.time()
        url = urljoin(self.base_url + "/", endpoint.lstrip("/")) if endpoint else self.base_url

        if timeout is None:
            timeout = self.timeout

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=data,
                headers=headers,
                timeout=timeout
            )

            if validate_response:
                self._validate_response(response)

            return self._parse_response(response)

        except requests.exceptions.Timeout as e:
            elapsed = time.time() - start_time
            self.warning(f"Request timed out after {elapsed:.2f} seconds", url=url, timeout=timeout)
            raise APITimeoutError(f"Request timed out after {elapsed:.2f} seconds: {e!s}") from e

        except requests.exceptions.RequestException as e:
            elapsed = time.time() - start_time
            self.warning(f"Request failed after {elapsed:.2f} seconds: {e}", url=url)
            raise APIResponseError(f"Request failed after {elapsed:.2f} seconds: {e!s}") from e

        except (APIResponseError, APIValidationError) as e:
            self.warning(f"API error: {e.message}", url=url, status=e.status_code)
            raise

        except Exception as e:
            elapsed = time.time() - start_time
            self.error(f"Unexpected error after {elapsed:.2f} seconds: {e}", exc_info=True, url=url)
            raise APIError(f"Unexpected error after {elapsed:.2f} seconds: {e!s}") from e
