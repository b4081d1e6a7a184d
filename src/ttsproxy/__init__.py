"""ttsproxy - streaming text-to-speech proxy with a client-side response cache."""

__version__ = "0.1.0"
__all__ = ["create_app", "fetch_audio"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "create_app":
        from .server.app import create_app

        return create_app
    if name == "fetch_audio":
        from .core import fetch_audio

        return fetch_audio
    raise AttributeError(f"module 'ttsproxy' has no attribute {name!r}")
