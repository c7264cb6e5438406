"""Minimal JSON-over-HTTP client for local service endpoints."""

import logging
from typing import Any, Optional

import httpx


class HttpClient:
    """Single-attempt GET requests returning decoded JSON bodies."""

    def __init__(self, timeout: float = 10.0, logger: Optional[logging.Logger] = None):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            logger: Optional logger instance
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def get_json(self, url: str, verify: bool = True) -> Any:
        """
        GET url and decode the body as JSON.

        The status code is not checked: health endpoints answer with a JSON
        body even when degraded, and callers inspect the payload.

        Args:
            url: Absolute URL
            verify: Verify TLS certificates

        Returns:
            Decoded JSON document

        Raises:
            httpx.HTTPError: On connection errors and timeouts
            ValueError: If the body is not valid JSON
        """
        self.logger.debug(f"GET {url}")
        with httpx.Client(verify=verify, timeout=self.timeout) as client:
            response = client.get(url)
        return response.json()
