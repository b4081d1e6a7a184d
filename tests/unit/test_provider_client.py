"""Unit tests for ProviderClient URL building and error mapping."""

import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from ttsproxy.provider.client import ProviderClient, encode_uri_component
from ttsproxy.provider.errors import (
    ProviderError,
    ProviderStatusError,
    ProviderTransportError,
)


class TestEncodeUriComponent:
    """Test browser-compatible percent-encoding."""

    def test_spaces_become_percent_20(self) -> None:
        assert encode_uri_component("hello world") == "hello%20world"

    def test_reserved_characters_are_encoded(self) -> None:
        assert encode_uri_component("a&b=c?d/e#f+g") == "a%26b%3Dc%3Fd%2Fe%23f%2Bg"

    def test_unreserved_marks_are_kept(self) -> None:
        assert encode_uri_component("it's (ok)!*~-_.") == "it's%20(ok)!*~-_."

    def test_devanagari_is_utf8_encoded(self) -> None:
        assert (
            encode_uri_component("नमस्ते")
            == "%E0%A4%A8%E0%A4%AE%E0%A4%B8%E0%A5%8D%E0%A4%A4%E0%A5%87"
        )


class TestBuildUrl:
    """Test provider URL template."""

    def test_fixed_parameters_and_encoded_text(self) -> None:
        client = ProviderClient()

        url = client.build_url("hello world")

        assert url == (
            "https://translate.google.com/translate_tts"
            "?ie=UTF-8&tl=hi&client=tw-ob&q=hello%20world"
        )

    def test_query_injection_stays_inside_q(self) -> None:
        client = ProviderClient()

        url = httpx.URL(client.build_url("x&tl=en"))

        assert url.params["tl"] == "hi"
        assert url.params["q"] == "x&tl=en"


class TestOpenStream:
    """Test status and transport error handling."""

    @pytest.mark.asyncio
    async def test_success_returns_open_response(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"ID3audio")

        client = ProviderClient(transport=httpx.MockTransport(handler))
        try:
            response = await client.open_stream("नमस्ते")
            body = b"".join([chunk async for chunk in response.aiter_bytes()])
            await response.aclose()
        finally:
            await client.aclose()

        assert body == b"ID3audio"
        assert seen[0].method == "GET"
        assert seen[0].url.params["q"] == "नमस्ते"
        assert seen[0].headers["accept-encoding"] == "identity"

    @pytest.mark.asyncio
    async def test_non_200_raises_status_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, content=b"slow down")

        client = ProviderClient(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(ProviderStatusError) as exc_info:
                await client.open_stream("hello")
        finally:
            await client.aclose()

        assert exc_info.value.status_code == 429
        assert isinstance(exc_info.value, ProviderError)

    @pytest.mark.asyncio
    async def test_connect_error_raises_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        client = ProviderClient(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(ProviderTransportError) as exc_info:
                await client.open_stream("hello")
        finally:
            await client.aclose()

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
