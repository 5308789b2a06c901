"""
Terminal adapter — the controlling terminal, independent of stdin.

When the installer runs as ``curl … | python -`` stdin is the pipe, yet a
human may still be sitting at the terminal. Prompts are therefore written
to and read from ``/dev/tty`` directly.
"""

from __future__ import annotations

import io
import logging
import os
from typing import TextIO

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def open_controlling_terminal(path: str = TTY_PATH) -> TextIO | None:
    """Open the controlling terminal for reading and writing.

    Returns ``None`` when there is none (CI, cron, detached containers).
    The device node can exist without a terminal behind it, so opening it
    is the only reliable check.
    """
    try:
        fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    except OSError as e:
        logger.debug("No controlling terminal (%s): %s", path, e)
        return None
    # Ttys are not seekable, so no buffered "r+" wrapper
    return io.TextIOWrapper(
        io.FileIO(fd, "r+"),
        encoding="utf-8",
        errors="replace",
        write_through=True,
    )


def read_key(stream: TextIO) -> str:
    """Read a single character, without waiting for Enter when possible."""
    try:
        fd = stream.fileno()
        is_tty = os.isatty(fd)
    except (AttributeError, OSError, ValueError):
        is_tty = False

    if not is_tty:
        return stream.read(1)

    import termios
    import tty

    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        return os.read(fd, 1).decode("utf-8", errors="replace")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
