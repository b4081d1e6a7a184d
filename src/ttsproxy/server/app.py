"""FastAPI application exposing the TTS proxy routes."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from ttsproxy.config import ProxyConfig, load_config
from ttsproxy.provider import (
    ProviderClient,
    ProviderStatusError,
    ProviderTransportError,
)

logger = logging.getLogger(__name__)

MISSING_TEXT_MESSAGE = 'Error: "text" query parameter is required.'
PROVIDER_FAILED_MESSAGE = "Failed to fetch audio from provider."
SERVER_ERROR_MESSAGE = "Server error while trying to fetch audio."

# Statuses that must not carry a message body
BODYLESS_STATUSES = frozenset({204, 304})


async def relay_body(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield the provider body chunk by chunk, closing it when done."""
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except httpx.TransportError as e:
        # Headers are already sent; all we can do is cut the connection
        logger.error(f"Provider stream interrupted: {e}")
        raise
    finally:
        await response.aclose()


def create_app(
    config: ProxyConfig | None = None, provider: ProviderClient | None = None
) -> FastAPI:
    """Build the proxy application.

    Args:
        config: Loaded configuration (read from disk/env if omitted)
        provider: Provider client to use (built from config if omitted)

    Returns:
        Configured FastAPI application
    """
    config = config or load_config()
    provider = provider or ProviderClient(
        language=config.provider.language,
        client=config.provider.client,
        timeout=config.provider.timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"TTS proxy server running on port {config.server.port}")
        yield
        await provider.aclose()

    app = FastAPI(title="ttsproxy", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.allowed_origin],
    )

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> PlainTextResponse:
        """Health check for load balancers and monitors."""
        return PlainTextResponse("OK")

    @app.get("/tts", response_model=None)
    async def tts(text: str | None = None) -> Response:
        """Fetch audio for text from the provider and stream it back."""
        if not text:
            return PlainTextResponse(MISSING_TEXT_MESSAGE, status_code=400)

        try:
            response = await provider.open_stream(text)
        except ProviderStatusError as e:
            logger.error(f"Google TTS request failed with status: {e.status_code}")
            if e.status_code in BODYLESS_STATUSES:
                return Response(status_code=e.status_code)
            return PlainTextResponse(PROVIDER_FAILED_MESSAGE, status_code=e.status_code)
        except ProviderTransportError as e:
            logger.error(f"Error proxying TTS request: {e}")
            return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=500)

        return StreamingResponse(
            relay_body(response),
            media_type="audio/mpeg",
            headers={"Content-Disposition": "inline"},
        )

    return app


def serve(host: str | None = None, port: int | None = None, debug: bool = False) -> None:
    """Run the proxy server with uvicorn until interrupted.

    Args:
        host: Bind address (config value if omitted)
        port: Listening port (config value if omitted)
        debug: Enable debug logging
    """
    config = load_config()

    # Logging is configured by the entry point; keep uvicorn from replacing it
    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
        log_level="debug" if debug else "info",
        log_config=None,
    )
