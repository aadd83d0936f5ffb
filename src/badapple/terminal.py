import os
import sys

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
CARRIAGE_RETURN = "\r"
CURSOR_DOWN = "\x1b[1B"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fits_terminal(resolution: tuple[int, int]) -> bool:
    columns, rows = get_terminal_size()
    return resolution[0] <= columns and resolution[1] <= rows
