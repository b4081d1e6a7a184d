"""Outbound client for the Google Translate TTS endpoint."""

import logging
from urllib.parse import quote

import httpx

from .errors import ProviderStatusError, ProviderTransportError

logger = logging.getLogger(__name__)

PROVIDER_URL = "https://translate.google.com/translate_tts"

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(text: str) -> str:
    """Percent-encode text the way browsers encode a URI component.

    Args:
        text: Raw text to place in a query string value

    Returns:
        UTF-8 percent-encoded string with spaces as %20
    """
    return quote(text, safe=_URI_COMPONENT_SAFE)


class ProviderClient:
    """Client for the third-party text-to-speech provider.

    Owns a single httpx.AsyncClient that is shared by all requests and
    closed with aclose().
    """

    def __init__(
        self,
        language: str = "hi",
        client: str = "tw-ob",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize provider client.

        Args:
            language: Target language sent as the tl parameter
            client: Client identifier sent as the client parameter
            timeout: Outbound timeout in seconds, None to wait indefinitely
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.language = language
        self.client = client
        # The provider must send the audio uncompressed so it can be relayed as is
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept-Encoding": "identity"},
        )

    def build_url(self, text: str) -> str:
        """Build the provider URL for the given text."""
        return (
            f"{PROVIDER_URL}?ie=UTF-8&tl={self.language}"
            f"&client={self.client}&q={encode_uri_component(text)}"
        )

    async def open_stream(self, text: str) -> httpx.Response:
        """Send the provider request and return the response unread.

        The caller owns the returned response and must close it once the
        body has been relayed.

        Args:
            text: Text to convert to speech

        Returns:
            Open streaming response with status 200

        Raises:
            ProviderStatusError: If the provider answers with a non-200 status
            ProviderTransportError: If the provider cannot be reached
        """
        url = self.build_url(text)
        logger.debug(f"Requesting provider audio: {url}")

        try:
            request = self._client.build_request("GET", url)
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as e:
            raise ProviderTransportError(f"Failed to reach provider: {e}", e) from e

        if response.status_code != 200:
            await response.aclose()
            raise ProviderStatusError(
                f"Provider request failed with status: {response.status_code}",
                response.status_code,
            )

        return response

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
