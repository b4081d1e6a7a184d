"""Core client functionality for ttsproxy - fetches audio through the cache."""

import logging

import httpx

from .audio.player import AudioPlayer
from .cache import get_cache_dir
from .cache.interceptor import CACHED_PATH, create_cached_client
from .cache.storage import CacheStore
from .config import load_config
from .provider.errors import ProviderStatusError, ProviderTransportError

logger = logging.getLogger(__name__)


async def fetch_audio(
    text: str,
    base_url: str,
    store: CacheStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Request audio for text from a proxy server.

    Args:
        text: Text to convert to speech
        base_url: Root URL of the proxy
        store: Response store; None bypasses the cache entirely
        transport: Network transport (defaults to httpx's HTTP transport)

    Returns:
        Audio bytes returned by the proxy

    Raises:
        ValueError: If text is empty
        ProviderStatusError: If the proxy answers with a non-200 status
        ProviderTransportError: If the proxy cannot be reached
    """
    if not text:
        raise ValueError("Text cannot be empty")

    if store is not None:
        client = create_cached_client(base_url, store, transport=transport)
    else:
        client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=None)

    async with client:
        try:
            response = await client.get(CACHED_PATH, params={"text": text})
        except httpx.TransportError as e:
            raise ProviderTransportError(f"Failed to reach proxy at {base_url}: {e}", e) from e

    if response.status_code != 200:
        raise ProviderStatusError(
            f"Proxy returned status {response.status_code}: {response.text}",
            response.status_code,
        )

    logger.debug(f"Received {len(response.content)} bytes of audio")
    return response.content


async def speak_text(
    text: str,
    output_file: str | None = None,
    cache: bool = True,
    base_url: str | None = None,
) -> bytes:
    """Fetch audio for text and play or save it.

    Args:
        text: Text to convert to speech
        output_file: Optional file path to save audio. If not provided, plays through speakers
        cache: Whether to serve repeated requests from the local store
        base_url: Proxy root URL (config value if omitted)

    Returns:
        The audio bytes that were played or saved

    Raises:
        ProviderStatusError: If the proxy answers with a non-200 status
        ProviderTransportError: If the proxy cannot be reached
        RuntimeError: If audio playback fails
        OSError: If file save fails
        ValueError: If text is empty
    """
    config = load_config()
    store = None
    if cache:
        store = CacheStore(config.cache.path or get_cache_dir(), config.cache.store)

    audio = await fetch_audio(text, base_url or config.cache.base_url, store)

    if output_file:
        saved = AudioPlayer.save_to_file(audio, output_file)
        logger.debug(f"Saved audio to {saved}")
    else:
        await AudioPlayer().play_bytes_async(audio)

    return audio
