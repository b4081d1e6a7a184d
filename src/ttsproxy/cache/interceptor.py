"""Cache-or-fetch interceptor for requests to the TTS endpoint.

Mounted as an httpx transport, it sits between a client and the network.
Requests to the audio path are answered from a named CacheStore when a
copy exists; otherwise they go to the network and the response is stored
before being handed back. Every other request passes through untouched.

Example:
    store = CacheStore(get_cache_dir(), "hindi-audio-cache-v1")
    async with create_cached_client("http://localhost:3010", store) as client:
        # First call - cache miss, fetched from the proxy and stored
        audio = (await client.get("/tts", params={"text": "नमस्ते"})).content

        # Same URL again - served from the store, no network call
        audio = (await client.get("/tts", params={"text": "नमस्ते"})).content
"""

import logging

import httpx

from .models import CachedResponse
from .storage import CacheStore

logger = logging.getLogger(__name__)

CACHED_PATH = "/tts"

# Hop-by-hop framing does not describe a stored body
_UNSTORED_HEADERS = {"transfer-encoding", "connection", "keep-alive"}


class CacheInterceptor(httpx.AsyncBaseTransport):
    """httpx transport that serves /tts requests from a CacheStore.

    Only GET requests are cached. Keys are the exact method and URL
    string: query parameter order and casing matter. There is no in-flight
    coordination, so two concurrent misses for one key both reach the
    network and both store.
    """

    def __init__(
        self,
        store: CacheStore,
        transport: httpx.AsyncBaseTransport | None = None,
        path: str = CACHED_PATH,
    ) -> None:
        """Initialize the interceptor.

        Args:
            store: Named store holding response copies
            transport: Network transport for misses and non-cached paths
            path: Exact URL path that takes part in caching
        """
        self.store = store
        self.transport = transport or httpx.AsyncHTTPTransport()
        self.path = path

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        # Only GETs are keyed; other methods carry bodies the key ignores
        if request.method != "GET" or request.url.path != self.path:
            return await self.transport.handle_async_request(request)

        url = str(request.url)
        cached = self.store.match(request.method, url)
        if cached is not None:
            logger.info(f"Cache hit: {url}")
            return httpx.Response(
                status_code=cached.status_code,
                headers=cached.headers,
                content=cached.body,
                request=request,
            )

        logger.info(f"Cache miss, fetching from network: {url}")
        response = await self.transport.handle_async_request(request)

        # The network body can only be read once: take it in full, then
        # hand one copy to the store and another to the caller
        try:
            body = b"".join([chunk async for chunk in response.stream])
        finally:
            await response.aclose()

        headers = [
            (name, value)
            for name, value in response.headers.multi_items()
            if name.lower() not in _UNSTORED_HEADERS
        ]
        self.store.put(
            CachedResponse(
                method=request.method,
                url=url,
                status_code=response.status_code,
                headers=headers,
                body=body,
            )
        )

        return httpx.Response(
            status_code=response.status_code,
            headers=headers,
            content=body,
            extensions=response.extensions,
            request=request,
        )

    async def aclose(self) -> None:
        await self.transport.aclose()


def create_cached_client(
    base_url: str,
    store: CacheStore,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Create an httpx client whose /tts requests go through the cache.

    Args:
        base_url: Root URL of a server implementing the proxy endpoint
        store: Named store holding response copies
        transport: Network transport (defaults to httpx's HTTP transport)
        timeout: Request timeout in seconds, None to wait indefinitely

    Returns:
        AsyncClient mounted on a CacheInterceptor
    """
    return httpx.AsyncClient(
        base_url=base_url,
        transport=CacheInterceptor(store, transport),
        timeout=timeout,
    )
