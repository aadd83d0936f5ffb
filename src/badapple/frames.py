import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class InvalidFrameName(ValueError):
    pass


def frame_index(name: str) -> int:
    """Playback position encoded in a frame file name: the digits before the first '.'."""
    prefix = name.split(".", 1)[0]
    if not (prefix.isascii() and prefix.isdigit()):
        raise InvalidFrameName(f"Frame file name does not start with a number: {name!r}")
    return int(prefix)


def load_frames(directory: str | Path) -> list[bytes]:
    """Read every frame in the directory into memory, ordered by frame index.

    Frames sharing an index are ordered by file name.
    """
    paths = [p for p in Path(directory).iterdir() if p.is_file()]
    paths.sort(key=lambda p: (frame_index(p.name), p.name))
    logger.debug("Loading %d frames from %s", len(paths), directory)
    return [p.read_bytes() for p in paths]
