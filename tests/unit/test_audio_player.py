"""Unit tests for AudioPlayer validation and error handling logic."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from ttsproxy.audio.player import AudioPlayer


class TestAudioPlayerValidation:
    """Test AudioPlayer validation logic."""

    def test_play_bytes_with_empty_data_raises_value_error(self) -> None:
        with patch("ttsproxy.audio.player.pygame.mixer.init"):
            player = AudioPlayer()

            with pytest.raises(ValueError, match="No audio data provided"):
                player.play_bytes(b"")

    @pytest.mark.asyncio
    async def test_play_bytes_async_with_empty_data_raises_value_error(self) -> None:
        with patch("ttsproxy.audio.player.pygame.mixer.init"):
            player = AudioPlayer()

            with pytest.raises(ValueError, match="No audio data provided"):
                await player.play_bytes_async(b"")

    def test_save_to_file_with_empty_data_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="No audio data provided"):
            AudioPlayer.save_to_file(b"", "output.mp3")

    def test_save_to_file_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "namaste.mp3"

        AudioPlayer.save_to_file(b"ID3 data", str(target))

        assert target.read_bytes() == b"ID3 data"

    def test_save_to_file_returns_written_path(self, tmp_path: Path) -> None:
        saved = AudioPlayer.save_to_file(b"ID3 data", str(tmp_path / "clip.mp3"))

        assert saved == tmp_path / "clip.mp3"
        assert saved.read_bytes() == b"ID3 data"

    def test_play_bytes_loads_clip_as_mp3(self) -> None:
        with (
            patch("ttsproxy.audio.player.pygame.mixer.init"),
            patch("ttsproxy.audio.player.pygame.mixer.music") as music,
        ):
            music.get_busy.return_value = False
            AudioPlayer().play_bytes(b"ID3 data")

        buffer, namehint = music.load.call_args.args
        assert buffer.read() == b"ID3 data"
        assert namehint == "mp3"
        music.play.assert_called_once_with()


class TestAudioPlayerErrorHandling:
    """Test AudioPlayer error handling."""

    def test_initialization_pygame_error_raises_runtime_error(self) -> None:
        import pygame

        with patch("ttsproxy.audio.player.pygame.mixer.init") as mock_init:
            mock_init.side_effect = pygame.error("Audio system unavailable")

            with pytest.raises(
                RuntimeError, match="Failed to initialize pygame audio mixer"
            ):
                AudioPlayer()

    def test_playback_pygame_error_raises_runtime_error(self) -> None:
        import pygame

        with (
            patch("ttsproxy.audio.player.pygame.mixer.init"),
            patch("ttsproxy.audio.player.pygame.mixer.music.load") as mock_load,
        ):
            mock_load.side_effect = pygame.error("Unrecognized audio format")
            player = AudioPlayer()

            with pytest.raises(RuntimeError, match="Failed to play audio"):
                player.play_bytes(b"not really mp3")

    def test_save_to_file_os_error_is_wrapped(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(OSError, match="Failed to save audio to"):
            AudioPlayer.save_to_file(b"data", blocker / "child.mp3")
