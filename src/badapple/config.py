import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ASSETS = Path("assets")
DEFAULT_RESOLUTION = (480, 360)
DEFAULT_GLYPH = "@"
DEFAULT_FPS = 30


@dataclass(frozen=True)
class Settings:
    """Configuration shared by the build pass and playback."""

    frames_dir: Path = DEFAULT_ASSETS / "frames"
    output_dir: Path = DEFAULT_ASSETS / "output"
    audio_path: Path = DEFAULT_ASSETS / "music.mp3"
    resolution: tuple[int, int] = DEFAULT_RESOLUTION
    glyph: str = DEFAULT_GLYPH
    fps: int = DEFAULT_FPS
    corrected: bool = False
    log_level: str = "WARNING"

    @property
    def interval(self) -> float:
        return 1.0 / self.fps

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from defaults, overridden by BADAPPLE_* environment variables.

        BADAPPLE_ASSETS     -> root holding frames/, output/ and music.mp3
        BADAPPLE_LOG_LEVEL  -> log_level
        """
        environ = os.environ if environ is None else environ
        settings = cls()
        assets = environ.get("BADAPPLE_ASSETS")
        if assets:
            root = Path(assets)
            settings = replace(
                settings,
                frames_dir=root / "frames",
                output_dir=root / "output",
                audio_path=root / "music.mp3",
            )
            logger.debug("Using assets from %s", root)
        log_level = environ.get("BADAPPLE_LOG_LEVEL")
        if log_level:
            settings = replace(settings, log_level=log_level.upper())
        return settings

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def setup_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
