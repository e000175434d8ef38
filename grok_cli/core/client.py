"""
Core HTTP client for the Grok API.

Handles authentication, request/response and error classification.
"""

import http.client
import json
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from grok_cli.logging import get_logger

# Configuration
DEFAULT_BASE_URL = "https://api.grok.ai/v1"


class CLIError(Exception):
    """Base error class for CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(CLIError):
    """Missing or invalid client configuration."""


class APIError(CLIError):
    """API error with status code and message."""

    def __init__(self, message: str, status: int = 0, details: dict | None = None):
        super().__init__(message, details)
        self.status = status


class RequestBuildError(APIError):
    """The outbound request could not be serialized or constructed."""

    def __init__(self, message: str = "internal error preparing request"):
        super().__init__(message)


class NetworkError(APIError):
    """The remote host could not be reached or the response could not be read."""

    def __init__(self, message: str = "network error: unable to reach API"):
        super().__init__(message)


class HTTPStatusError(APIError):
    """The remote service answered with a non-success status."""

    def __init__(self, status: int):
        super().__init__(f"API error: received status {status}", status=status)


class MalformedResponseError(APIError):
    """The response was not the JSON shape the operation expects."""

    def __init__(self, field: str | None = None):
        super().__init__("invalid API response", details={"field": field} if field else None)
        self.field = field


class ValidationError(CLIError):
    """Validation error for local input/data issues (not API errors)."""


class InputFormatError(ValidationError):
    """A command line that could not be parsed or pre-checked."""


def _is_valid_header_value(value: str) -> bool:
    """Check that http.client can send value as a single header line."""
    if "\r" in value or "\n" in value:
        return False
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the Grok API."""

    api_key: str | None
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a config from GROK_* environment variables.

        Raises:
            ConfigError: If GROK_TIMEOUT is set but not a positive number

        """
        return cls(
            api_key=os.environ.get("GROK_API_KEY"),
            base_url=os.environ.get("GROK_BASE_URL") or DEFAULT_BASE_URL,
            timeout=cls.timeout_from_env(),
        )

    @staticmethod
    def timeout_from_env() -> float | None:
        """Read GROK_TIMEOUT, or None when unset."""
        raw_timeout = os.environ.get("GROK_TIMEOUT")
        if not raw_timeout:
            return None
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"GROK_TIMEOUT must be a number, got {raw_timeout!r}")
        if not timeout > 0:
            raise ConfigError("GROK_TIMEOUT must be greater than zero")
        return timeout


class APIClient:
    """
    Low-level HTTP client for the Grok API.

    Handles:
    - Bearer authentication
    - JSON POST round trips over a shared opener
    - Classifying failures into user-safe APIError subclasses
    """

    def __init__(
        self,
        config: ClientConfig,
        logger: Any = None,
        opener: urllib.request.OpenerDirector | None = None,
    ):
        """
        Initialize the API client.

        Args:
            config: Base URL, API key and timeout
            logger: Diagnostic logger (defaults to this module's logger)
            opener: Transport to send requests through (built once if omitted)

        Raises:
            ConfigError: If the API key is missing or empty

        """
        self.logger = logger or get_logger(__name__)
        if not config.api_key:
            self.logger.error("missing api key", env_var="GROK_API_KEY")
            raise ConfigError("GROK_API_KEY environment variable is not set")

        self.api_key = config.api_key
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self._opener = opener or urllib.request.build_opener()

    def _build_url(self, path: str) -> str:
        """Build full URL from path."""
        return f"{self.base_url}{path}"

    def _build_request(self, url: str, data: dict[str, Any]) -> urllib.request.Request:
        """Serialize the body and attach auth headers."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        for name, value in headers.items():
            if not _is_valid_header_value(value):
                # the value may be the credential, so only the header name is logged
                self.logger.error("invalid header value", url=url, header=name)
                raise RequestBuildError()

        try:
            body = json.dumps(data).encode("utf-8")
        except (TypeError, ValueError) as e:
            self.logger.error("failed to serialize request body", url=url, error=str(e))
            raise RequestBuildError()

        try:
            return urllib.request.Request(url, data=body, headers=headers, method="POST")
        except ValueError as e:
            self.logger.error("failed to create request", url=url, error=str(e))
            raise RequestBuildError()

    def _send(self, req: urllib.request.Request) -> bytes:
        """Send the request and return the raw body of a 200 response."""
        url = req.full_url
        try:
            if self.timeout is not None:
                response = self._opener.open(req, timeout=self.timeout)
            else:
                response = self._opener.open(req)
        except urllib.error.HTTPError as e:
            self.logger.error("api returned non-200 status", url=url, status=e.code, reason=e.reason)
            raise HTTPStatusError(e.code)
        except urllib.error.URLError as e:
            self.logger.error("error sending request", url=url, error=str(e.reason))
            raise NetworkError()
        except (OSError, http.client.HTTPException) as e:
            self.logger.error("error sending request", url=url, error=repr(e))
            raise NetworkError()
        except ValueError as e:
            # http.client rejects URLs and headers it cannot encode; repr(e) can echo the credential
            self.logger.error("failed to encode request", url=url, error=type(e).__name__)
            raise RequestBuildError()

        with response:
            status = response.status
            if status != 200:
                self.logger.error("api returned non-200 status", url=url, status=status)
                raise HTTPStatusError(status)
            try:
                return response.read()
            except (OSError, http.client.HTTPException) as e:
                self.logger.error("error reading response body", url=url, error=repr(e))
                raise NetworkError("failed to read API response")

    def post(self, path: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Make a POST request to the API.

        Args:
            path: API path relative to the base URL (e.g., /ask)
            data: JSON request body

        Returns:
            Parsed JSON object from the response

        Raises:
            RequestBuildError: If the request could not be built
            NetworkError: If the API could not be reached
            HTTPStatusError: On any status other than 200
            MalformedResponseError: If the body is not a JSON object

        """
        url = self._build_url(path)
        req = self._build_request(url, data)
        raw = self._send(req)

        try:
            result = json.loads(raw.decode("utf-8"))
        except (ValueError, RecursionError) as e:
            # ValueError covers bad UTF-8, bad JSON and over-long integer literals
            self.logger.error("error parsing response", endpoint=path, error=repr(e))
            raise MalformedResponseError()

        if not isinstance(result, dict):
            self.logger.error("response is not a json object", endpoint=path, type=type(result).__name__)
            raise MalformedResponseError()
        return result
