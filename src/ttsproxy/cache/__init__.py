"""Client-side response cache for ttsproxy."""

from pathlib import Path


def get_cache_dir() -> Path:
    """Get or create the ttsproxy cache directory.

    Creates ~/.cache/ttsproxy/ if it doesn't exist.

    Returns:
        Path to the cache directory
    """
    cache_dir = Path.home() / ".cache" / "ttsproxy"
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir
