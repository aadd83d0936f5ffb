import logging
import os
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

logger = logging.getLogger(__name__)


class AudioError(RuntimeError):
    pass


class AudioTrack:
    """Owns the audio output device for the duration of a ``with`` block.

    Entering starts playback in the mixer's background stream; leaving stops
    it and releases the device, even if the frame loop raised.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def __enter__(self) -> "AudioTrack":
        if not self.path.is_file():
            raise FileNotFoundError(f"Audio file not found: {self.path}")
        try:
            pygame.mixer.init()
        except pygame.error as e:
            raise AudioError(f"No audio output device available: {e}") from e
        try:
            pygame.mixer.music.load(str(self.path))
            pygame.mixer.music.play()
        except pygame.error as e:
            pygame.mixer.quit()
            raise AudioError(f"Cannot play {self.path}: {e}") from e
        logger.debug("Started audio from %s", self.path)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        pygame.mixer.music.stop()
        pygame.mixer.quit()
        logger.debug("Released audio device")
