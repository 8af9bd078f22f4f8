"""
HTTP transport for the OSM API

Performs a single GET per call:
- No retries, failures surface immediately
- Non-2xx responses become TransportError with status, reason and body
- Optional auth hook to prepare the session
"""

from typing import Callable, Optional

import requests
from loguru import logger

from ..config import ClientConfig, get_config
from ..errors import TransportError

AuthHook = Callable[[requests.Session], None]


class HTTPTransport:
    """Sends GET requests to the OSM API"""

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or get_config()
        self.timeout = self.config.api.request_timeout
        self.headers = {"User-Agent": self.config.api.user_agent}

    def send(self, url: str, auth: Optional[AuthHook] = None) -> bytes:
        """
        Perform a GET request

        Args:
            url: Absolute request URL
            auth: Called with the session before the request is sent,
                e.g. to set session.auth or an Authorization header

        Returns:
            Raw response body

        Raises:
            TransportError: On a non-2xx status or when no response was received
        """
        logger.debug(f"GET {url}")
        with requests.Session() as session:
            session.headers.update(self.headers)
            if auth is not None:
                auth(session)
            try:
                response = session.get(url, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                logger.error(f"OSM API request failed: {url}: {e}")
                raise TransportError(f"Request failed: {e}", reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            body = response.text
            logger.error(f"OSM API failed: HTTP {response.status_code} {response.reason} for {url}")
            raise TransportError(
                f"Request failed: {response.status_code}-{response.reason}",
                status_code=response.status_code,
                reason=response.reason,
                body=body
            )

        return response.content
