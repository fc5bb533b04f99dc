"""
Registry API Client

Thin HTTP client for the registry application the components are embedded in.
It covers the three round trips the components make (schema fetch, outcome
validation, attendance submission) plus the plain page requests the host page
performs when it navigates or submits a form.
"""

import logging
from urllib.parse import quote

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


class RegistryAPIError(Exception):
    """Exception raised for registry API errors."""

    pass


class RegistryAPIClient:
    """API client for the registry application's HTTP endpoints."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """Initialize API client.

        Args:
            base_url: Origin of the registry application, defaults to ``REGISTRY_BASE_URL``
            timeout: Request timeout in seconds, defaults to ``REGISTRY_HTTP_TIMEOUT``
        """
        self.base_url = (base_url or settings.REGISTRY_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REGISTRY_HTTP_TIMEOUT
        self.http_client = httpx.Client(base_url=self.base_url, timeout=self.timeout)

    def close(self):
        """Close HTTP client."""
        if self.http_client:
            self.http_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close client."""
        self.close()

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, url: str, headers: dict | None = None) -> httpx.Response:
        """Plain GET used for page loads. Status errors are left to the caller."""
        try:
            logger.debug(f"GET {url}")
            return self.http_client.get(self.url(url), headers=headers)
        except httpx.HTTPError as e:
            raise RegistryAPIError(f"Request to {url} failed: {e}") from e

    def get_json(self, url: str) -> dict:
        """GET a JSON document.

        Raises:
            RegistryAPIError: On transport errors, non-2xx statuses or an undecodable body
        """
        try:
            logger.debug(f"GET {url}")
            response = self.http_client.get(self.url(url))
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise RegistryAPIError(f"Failed to fetch {url}: {e}") from e
        except ValueError as e:
            raise RegistryAPIError(f"Invalid JSON returned by {url}: {e}") from e

    def post_json(self, path: str, payload) -> dict:
        """POST a JSON payload and decode the JSON answer.

        The body is decoded whatever the HTTP status is: the registry reports
        business failures (``{"valid": false}``, ``{"error": ...}``) in the body
        and callers decide what they mean.

        Raises:
            RegistryAPIError: On transport errors or an undecodable body
        """
        try:
            logger.debug(f"POST {path}")
            response = self.http_client.post(self.url(path), json=payload)
            return response.json()
        except httpx.HTTPError as e:
            raise RegistryAPIError(f"POST {path} failed: {e}") from e
        except ValueError as e:
            raise RegistryAPIError(f"Invalid JSON returned by {path}: {e}") from e

    def post_form(self, url: str, data: dict) -> httpx.Response:
        """Form-encoded POST, the way a plain HTML form submission is sent."""
        try:
            logger.debug(f"POST {url} (form, {len(data)} fields)")
            return self.http_client.post(self.url(url), data=data)
        except httpx.HTTPError as e:
            raise RegistryAPIError(f"Form submission to {url} failed: {e}") from e

    def fetch_schema(self, schema_url: str) -> dict:
        return self.get_json(schema_url)

    def validate_outcome(self, outcome_definition_id, data: dict) -> dict:
        payload = {"outcome_definition_id": outcome_definition_id, "data": data}
        return self.post_json(settings.REGISTRY_VALIDATION_PATH, payload)

    def submit_attendance(self, event_id: str, attendance: dict[str, str]) -> dict:
        base = settings.REGISTRY_ATTENDANCE_BASE.strip("/")
        return self.post_json(f"/{base}/attendance/{quote(str(event_id), safe='')}", attendance)
