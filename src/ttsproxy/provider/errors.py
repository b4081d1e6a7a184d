"""Provider exceptions."""


class ProviderError(Exception):
    """Base exception for failures talking to the TTS provider."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ProviderStatusError(ProviderError):
    """Exception raised when the provider answers with a non-200 status.

    The provider's response body is not kept; only the status code is
    relayed to the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class ProviderTransportError(ProviderError):
    """Exception raised when the provider cannot be reached at all.

    This typically occurs when:
    - DNS resolution or the TCP connection fails
    - The TLS handshake or HTTP exchange is broken off
    - A configured timeout expires
    """

    pass
