import pytest
from PIL import Image

from badapple.config import Settings


def solid(value, size=(4, 4), mode="L"):
    return Image.new(mode, size, value)


@pytest.fixture
def assets(tmp_path):
    """An empty asset tree: frames/, output/ and a settings object pointing at it."""
    frames_dir = tmp_path / "frames"
    frames_dir.mkdir()
    return Settings(
        frames_dir=frames_dir,
        output_dir=tmp_path / "output",
        audio_path=tmp_path / "music.mp3",
    )


@pytest.fixture
def solid_frames(assets):
    """White, black and threshold-gray 4x4 source images named 1.png, 2.png, 3.png."""
    for name, value in (("1.png", 255), ("2.png", 0), ("3.png", 125)):
        solid(value).save(assets.frames_dir / name)
    return assets


class FakeClock:
    """Monotonic clock that only moves when slept on or advanced explicitly."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
