"""Data models for cache storage."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class CachedResponse:
    """Stored copy of a network response.

    Attributes:
        method: HTTP method of the original request
        url: Full URL of the original request, query string included
        status_code: Status code of the stored response
        headers: Response headers as (name, value) pairs, in order
        body: Raw response body
        timestamp: When this entry was stored
    """

    method: str
    url: str
    status_code: int
    headers: list[tuple[str, str]]
    body: bytes
    timestamp: datetime = field(default_factory=datetime.now)
