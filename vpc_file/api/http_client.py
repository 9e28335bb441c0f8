"""
HTTP client for the VPC and IAM APIs.

Provides a synchronous request primitive with bearer authentication, the API
version query parameter, and translation of error responses into APIError.
"""

import threading
from typing import Any, Self

import httpx
import structlog

from vpc_file.exceptions import (
    APIError,
    InvalidResponseError,
    NetworkError,
    VolumeNotFoundError,
)
from vpc_file.models.errors import ErrorEnvelope

logger = structlog.get_logger(__name__)

USER_AGENT = "vpc-file-client/0.1.0"

SENSITIVE_KEYS = frozenset(
    {
        "apikey",
        "api_key",
        "access_token",
        "refresh_token",
        "Authorization",
        "authorization",
        "credential",
        "delegated_refresh_token",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class HttpClient:
    """Synchronous HTTP client bound to one API base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        api_version: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. "https://us-south.iaas.cloud.ibm.com".
            timeout: Default request timeout in seconds.
            api_version: Sent as the ``version`` query parameter on every request when set.
            transport: Optional transport for testing (mock transport).
        """
        self._base_url = base_url
        self._timeout = timeout
        self._api_version = api_version
        self._transport = transport

        self._access_token: str | None = None
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    def __enter__(self) -> Self:
        self._ensure_client()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def api_version(self) -> str | None:
        return self._api_version

    def _ensure_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self._base_url,
                    timeout=self._timeout,
                    transport=self._transport,
                    headers={
                        "Accept": "application/json",
                        "User-Agent": USER_AGENT,
                    },
                )
            return self._client

    def close(self) -> None:
        """Close the underlying connection pool. Safe to call more than once."""
        with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            self._client.close()
            self._client = None

    def set_token(self, access_token: str) -> None:
        """Set the bearer token sent with authenticated requests."""
        self._access_token = access_token

    def clear_token(self) -> None:
        self._access_token = None

    @property
    def is_authenticated(self) -> bool:
        """Check if a bearer token is set."""
        return self._access_token is not None

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        authenticated: bool = True,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: Path relative to the base URL (e.g., "/v1/shares") or an absolute URL.
            json: JSON body for POST/PATCH requests.
            data: Form-encoded body.
            params: Query parameters; ``version`` is added automatically.
            headers: Extra request headers.
            authenticated: Whether to include the bearer token.
            timeout: Per-request timeout overriding the default.

        Returns:
            Decoded JSON body, or an empty dict for empty responses.

        Raises:
            VolumeNotFoundError: On a 404 response.
            APIError: On any other error response or an undecodable success body.
            NetworkError: If the request could not be completed.
        """
        query = dict(params or {})
        if self._api_version is not None:
            query["version"] = self._api_version

        headers = dict(headers or {})
        if authenticated and self._access_token is not None:
            headers["Authorization"] = f"Bearer {self._access_token}"

        client = self._ensure_client()
        logger.debug(
            "API request",
            method=method,
            endpoint=endpoint,
            params=query,
            body=sanitize_for_log(json or data or {}),
        )
        try:
            response = client.request(
                method=method,
                url=endpoint,
                json=json,
                data=data,
                params=query,
                headers=headers,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.TransportError as e:
            msg = f"Request failed: {e}"
            raise NetworkError(msg, endpoint=endpoint) from e

        body = self._decode(response, endpoint)
        if response.is_error:
            self._raise_api_error(response.status_code, body, endpoint)
        return body

    @staticmethod
    def _decode(response: httpx.Response, endpoint: str) -> dict[str, Any]:
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            if response.is_error:
                return {"message": response.text}
            raise InvalidResponseError(
                "Invalid JSON response from API",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e
        return data if isinstance(data, dict) else {"items": data}

    @staticmethod
    def _raise_api_error(status_code: int, data: dict[str, Any], endpoint: str) -> None:
        envelope = ErrorEnvelope.from_response(data)
        if envelope is not None:
            error_msg = envelope.first.message or "Unknown error"
        else:
            error_msg = data.get("errorMessage") or data.get("message") or "Unknown error"

        logger.debug(
            "API error",
            endpoint=endpoint,
            status_code=status_code,
            code=envelope.code if envelope else None,
            trace=envelope.trace if envelope else None,
        )
        if status_code == httpx.codes.NOT_FOUND:
            raise VolumeNotFoundError(error_msg, envelope=envelope, endpoint=endpoint)

        raise APIError(error_msg, status_code=status_code, envelope=envelope, endpoint=endpoint)
