"""Provider package for ttsproxy.

This package talks to the upstream text-to-speech service.
"""

from .client import ProviderClient, encode_uri_component
from .errors import ProviderError, ProviderStatusError, ProviderTransportError

__all__ = [
    "ProviderClient",
    "ProviderError",
    "ProviderStatusError",
    "ProviderTransportError",
    "encode_uri_component",
]
