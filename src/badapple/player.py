import logging
import sys
import time
from collections.abc import Callable, Iterable
from typing import BinaryIO

from badapple.audio import AudioTrack
from badapple.config import Settings
from badapple.frames import load_frames
from badapple.terminal import CLEAR_SCREEN, CURSOR_HOME

logger = logging.getLogger(__name__)


class FrameSchedule:
    """Paces a loop against absolute deadlines spaced ``interval`` seconds apart.

    Each wait sleeps until the next deadline rather than for a fixed duration,
    so time spent drawing a frame does not accumulate as drift. A late frame
    proceeds immediately; no frames are dropped.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval = interval
        self.clock = clock
        self.sleep = sleep
        self.deadline: float | None = None

    def start(self) -> None:
        self.deadline = self.clock() + self.interval

    def wait(self) -> None:
        if self.deadline is None:
            self.start()
        remaining = self.deadline - self.clock()
        if remaining > 0:
            self.sleep(remaining)
        self.deadline += self.interval


def play_frames(frames: Iterable[bytes], out: BinaryIO, schedule: FrameSchedule) -> int:
    """Paint frames to ``out`` at the schedule's cadence. Returns the number of frames drawn."""
    count = 0
    out.write(CLEAR_SCREEN.encode())
    schedule.start()
    for frame in frames:
        out.write(CURSOR_HOME.encode())
        out.write(frame)
        out.flush()
        schedule.wait()
        count += 1
    return count


def play(
    settings: Settings,
    out: BinaryIO | None = None,
    audio_factory=AudioTrack,
    clock: Callable[[], float] = time.perf_counter,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Play the prebuilt frames in ``settings.output_dir`` alongside the audio track.

    All frames are read and the audio device opened before anything is drawn.
    """
    if out is None:
        out = sys.stdout.buffer
    frames = load_frames(settings.output_dir)
    logger.info("Playing %d frames at %d fps", len(frames), settings.fps)

    with audio_factory(settings.audio_path):
        schedule = FrameSchedule(settings.interval, clock=clock, sleep=sleep)
        return play_frames(frames, out, schedule)
