import argparse
import logging
import sys
from pathlib import Path

from badapple.audio import AudioError
from badapple.compiler import build_frames
from badapple.config import Settings, setup_logging
from badapple.player import play
from badapple.terminal import fits_terminal

logger = logging.getLogger(__name__)

COMMANDS = ("build", "run")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="badapple-terminal",
        description="Convert video frames to ASCII art and play them back in the terminal",
    )
    parser.add_argument("command", nargs="?", help="build: rasterize frames; run: (optionally build, then) play")
    parser.add_argument("params", nargs="*", metavar="PARAM", help="columns rows [glyph]: target resolution and fill glyph")
    parser.add_argument("--frames-dir", type=Path, default=None, help="Directory of source images")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory of rasterized text frames")
    parser.add_argument("--audio", type=Path, default=None, help="Audio file played alongside the frames")
    parser.add_argument("--fps", type=int, default=None, help="Playback frame rate (default: 30)")
    parser.add_argument(
        "--corrected",
        action="store_true",
        default=None,
        help="Sample the whole image and average each block over its true pixel count",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def _positive_int(parser: argparse.ArgumentParser, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        parser.error(f"invalid resolution value: {value!r}")
    if number <= 0:
        parser.error(f"resolution values must be positive, got {number}")
    return number


def _parse_params(parser: argparse.ArgumentParser, params: list[str]) -> tuple[tuple[int, int] | None, str | None]:
    """Split positional parameters into an optional resolution and an optional glyph.

    A glyph is only honored together with both resolution values.
    """
    if len(params) > 3:
        parser.error(f"too many parameters: {' '.join(params)}")
    if len(params) < 2:
        return None, None
    resolution = (_positive_int(parser, params[0]), _positive_int(parser, params[1]))
    glyph = params[2] if len(params) == 3 else None
    return resolution, glyph


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env().with_overrides(
        frames_dir=args.frames_dir,
        output_dir=args.output_dir,
        audio_path=args.audio,
        fps=args.fps,
        corrected=args.corrected,
        log_level="DEBUG" if args.verbose else None,
    )
    setup_logging(settings)

    if args.command is None:
        parser.print_usage()
        return 0
    if args.command not in COMMANDS:
        print(f"Unknown command: {args.command}")
        parser.print_usage()
        return 0

    if settings.fps <= 0:
        parser.error(f"fps must be positive, got {settings.fps}")
    resolution, glyph = _parse_params(parser, args.params)
    settings = settings.with_overrides(resolution=resolution, glyph=glyph)
    if args.command == "run" and resolution is not None and not fits_terminal(resolution):
        logger.warning("Resolution %dx%d is larger than the terminal", *settings.resolution)

    try:
        if args.command == "build":
            build_frames(settings)
        else:
            if resolution is not None:
                build_frames(settings)
            play(settings)
    except (OSError, ValueError, AudioError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
