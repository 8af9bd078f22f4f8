"""
Exceptions raised by the OSM API client

All errors propagate directly to the caller, nothing is retried or recovered.
"""

from typing import Optional


class OSMClientError(Exception):
    """Base class for all client errors"""


class ValidationError(OSMClientError, ValueError):
    """Invalid arguments, raised before any request is sent"""


class TransportError(OSMClientError):
    """
    Failed HTTP request

    Attributes:
        status_code: HTTP status, None when no response was received
        reason: HTTP reason phrase or transport failure description
        body: Response body text, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 reason: Optional[str] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body

    def __str__(self):
        text = super().__str__()
        if self.body:
            text += f" {self.body}"
        return text


class ParseError(OSMClientError):
    """Malformed XML or unexpected document structure"""


class ResolutionError(OSMClientError):
    """A requested entity or one of its references is missing from the response"""
