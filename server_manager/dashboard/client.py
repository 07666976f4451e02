"""
HTTP client for the Update Service.
"""
import logging
from typing import Any, Dict

import requests

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Update failed"


class UpdateRequestError(Exception):
    """Raised when an update request fails, with the message shown to the operator."""

    def __init__(self, message: str, status_code: int = None, payload: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class UpdateServiceClient:
    """
    Talks to the Update Service over HTTP.

    No retries: a failed update is reported once and left to the operator.
    """

    def __init__(self, base_url: str = "http://localhost:3001", timeout: float = None):
        """
        Args:
            base_url: Base URL of the Update Service
            timeout: Request timeout in seconds (None waits for the script to finish)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})

    def health(self) -> Dict[str, Any]:
        """Return the health payload; raises requests exceptions on transport errors."""
        response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def trigger_update(self) -> Dict[str, Any]:
        """
        POST /update and wait for the result.

        Returns:
            The UpdateResult payload on a 2xx response

        Raises:
            UpdateRequestError: non-2xx response, a 2xx body that is not a
                successful UpdateResult, or transport failure
        """
        url = f"{self.base_url}/update"
        try:
            response = self.session.post(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Update request to {url} failed: {e}")
            raise UpdateRequestError(str(e) or DEFAULT_FAILURE_MESSAGE) from e

        try:
            data = response.json()
        except ValueError:
            data = None
        # Proxies may answer with non-JSON bodies or JSON that is not an object
        payload = data if isinstance(data, dict) else {}

        if not response.ok:
            message = payload.get("message") or DEFAULT_FAILURE_MESSAGE
            logger.error(f"Update failed ({response.status_code}): {payload.get('error', message)}")
            raise UpdateRequestError(message, status_code=response.status_code, payload=payload)

        if payload.get("success") is not True:
            logger.error(f"Update response ({response.status_code}) is not a successful UpdateResult: {data!r}")
            raise UpdateRequestError(DEFAULT_FAILURE_MESSAGE, status_code=response.status_code, payload=payload)

        logger.info("Update request succeeded")
        return payload
