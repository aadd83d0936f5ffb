import logging
from pathlib import Path

from PIL import Image

from badapple.config import Settings
from badapple.rasterizer import rasterize

logger = logging.getLogger(__name__)


def list_sources(frames_dir: str | Path) -> list[Path]:
    """Every regular file in the source directory, sorted by name."""
    return sorted(p for p in Path(frames_dir).iterdir() if p.is_file())


def build_frame(source: Path, output_dir: Path, settings: Settings) -> Path:
    with Image.open(source) as image:
        frame = rasterize(image, settings.resolution, settings.glyph, corrected=settings.corrected)
    output_path = output_dir / source.stem
    output_path.write_bytes(frame.encode("utf-8"))
    return output_path


def build_frames(settings: Settings) -> int:
    """Rasterize every source image into a text frame. Returns the number of frames written.

    The first decode or write failure aborts the remaining batch.
    """
    columns, rows = settings.resolution
    print(f"Building frames at resolution {columns}x{rows}")

    sources = list_sources(settings.frames_dir)
    output_dir = Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Found %d source images in %s", len(sources), settings.frames_dir)

    for i, source in enumerate(sources, start=1):
        print(f"\rConverting frame {i}/{len(sources)}", end="", flush=True)
        output_path = build_frame(source, output_dir, settings)
        logger.debug("Wrote %s", output_path)

    print()
    print("Done")
    return len(sources)
