"""HTTP client for communicating with the SDK daemon."""

import dataclasses
import json
import logging
from typing import Any

import httpx

from ctoai.config import SdkConfig
from ctoai.errors import DaemonRequestError, DaemonResponseError
from ctoai.values import JsonValue, to_json_object

logger = logging.getLogger(__name__)


class DaemonClient:
    """Client for the SDK daemon listening on a local HTTP port.

    Every call is a single blocking POST on a fresh connection. There are
    no retries and no timeout: some operations wait on the user answering
    a prompt on the daemon side.
    """

    timeout: float | None = None

    def __init__(self, config: SdkConfig) -> None:
        """Initialize client for the daemon described by config."""
        self.config = config

    def _url(self, operation: str) -> str:
        return f"{self.config.daemon_url}/{operation}"

    def _post(self, operation: str, body: Any) -> httpx.Response:
        """POST body as JSON to the operation endpoint.

        Raises:
            DaemonRequestError: On a body that is not strict JSON, a malformed
                URL, transport failure or non-success status
        """
        if dataclasses.is_dataclass(body) and not isinstance(body, type):
            body = dataclasses.asdict(body)

        try:
            content = json.dumps(body, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise DaemonRequestError(
                f"Request body for {operation} is not JSON serializable: {e}",
                original_error=e,
            ) from e

        url = self._url(operation)
        logger.debug(f"POST {url}")
        try:
            # Daemon is local: ignore proxy environment variables
            response = httpx.post(
                url,
                content=content,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                trust_env=False,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise DaemonRequestError(
                f"Daemon returned status {status} for {operation}",
                status_code=status,
                original_error=e,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DaemonRequestError(
                f"Request to daemon for {operation} failed: {e}", original_error=e
            ) from e

        logger.debug(f"{operation}: daemon answered {response.status_code}")
        return response

    def simple_request(self, operation: str, body: Any) -> None:
        """Send a request and ignore the response body.

        Args:
            operation: Daemon operation path (e.g., "print", "progress-bar/start")
            body: Request body, a dataclass or a JSON-compatible dict

        Raises:
            DaemonRequestError: If the request did not reach the daemon or
                the daemon answered with a failure status
        """
        self._post(operation, body)

    def async_request(self, operation: str, body: Any) -> dict[str, JsonValue]:
        """Send a request and return the daemon's JSON object response.

        Args:
            operation: Daemon operation path (e.g., "secret/get")
            body: Request body, a dataclass or a JSON-compatible dict

        Returns:
            Response object with every value tagged

        Raises:
            DaemonRequestError: If the request failed at the transport level
            DaemonResponseError: If the response is not a JSON object
        """
        response = self._post(operation, body)
        try:
            data = response.json()
        except ValueError as e:
            raise DaemonResponseError(
                f"Invalid JSON response from daemon for {operation}: {e}", e
            ) from e

        if not isinstance(data, dict):
            raise DaemonResponseError(
                f"Expected a JSON object from daemon for {operation}, "
                f"got {type(data).__name__}"
            )
        return to_json_object(data)
