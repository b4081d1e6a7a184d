"""Local playback of audio returned by the proxy's /tts endpoint."""

# ruff: noqa: E402
import os

# Must be set before pygame is imported
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import warnings

warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import asyncio
import io
from pathlib import Path

import pygame

# Polling rate while waiting for the mixer to drain
POLL_HZ = 10


def _require_audio(audio_data: bytes) -> None:
    if not audio_data:
        raise ValueError("No audio data provided")


class AudioPlayer:
    """Speaks proxy audio (always audio/mpeg) on the default output device.

    One pygame mixer is opened per player. The proxy answers a single
    utterance per request, so a clip is loaded into mixer.music and played
    to the end before control returns.
    """

    def __init__(self) -> None:
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise RuntimeError(f"Failed to initialize pygame audio mixer: {e}") from e

    def play_bytes(self, audio_data: bytes) -> None:
        """Play one MP3 clip, returning when the mixer goes idle.

        Raises:
            ValueError: If the clip is empty.
            RuntimeError: If pygame cannot decode or play it.
        """
        _require_audio(audio_data)

        clock = pygame.time.Clock()
        try:
            pygame.mixer.music.load(io.BytesIO(audio_data), "mp3")
            pygame.mixer.music.play()
            while pygame.mixer.music.get_busy():
                clock.tick(POLL_HZ)
        except pygame.error as e:
            raise RuntimeError(f"Failed to play audio: {e}") from e

    async def play_bytes_async(self, audio_data: bytes) -> None:
        """Run play_bytes on a worker thread so the event loop keeps going."""
        _require_audio(audio_data)
        await asyncio.to_thread(self.play_bytes, audio_data)

    @staticmethod
    def save_to_file(audio_data: bytes, filepath: str | Path) -> Path:
        """Write a fetched clip to disk as-is and return where it went.

        The bytes are exactly what /tts returned, so the file is a playable
        MP3 without any re-encoding.
        """
        _require_audio(audio_data)

        target = Path(filepath).expanduser()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as fh:
                fh.write(audio_data)
        except OSError as e:
            raise OSError(f"Failed to save audio to {target}: {e}") from e
        return target
