"""Audio playback package for ttsproxy.

This package plays fetched audio locally using pygame.
"""

from .player import AudioPlayer

__all__ = ["AudioPlayer"]
