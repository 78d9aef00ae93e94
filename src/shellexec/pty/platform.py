"""Platform-specific terminal plumbing.

``session_popen_kwargs()`` returns the ``subprocess.Popen`` keyword
arguments that make the child a session leader with the pty slave as its
controlling terminal. The implementation is picked once at import time for
the running OS; platforms without the capability get an empty mapping.
"""

from __future__ import annotations

import fcntl
import struct
import sys
import termios
from typing import Any


def set_winsize(fd: int, rows: int, cols: int) -> None:
    """Apply a window size to a tty fd (TIOCSWINSZ)."""
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, cols, 0, 0))


def get_winsize(fd: int) -> tuple[int, int]:
    """Return (rows, cols) for the given tty fd."""
    rows, cols, _, _ = struct.unpack(
        "HHHH", fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\x00" * 8)
    )
    return rows, cols


_SUPPORTS_CTTY = sys.platform.startswith(
    ("linux", "darwin", "freebsd", "openbsd", "netbsd")
)


if _SUPPORTS_CTTY:

    def _acquire_controlling_tty() -> None:
        # Runs in the child after setsid() and after the slave is dup'ed to 0-2.
        fcntl.ioctl(0, termios.TIOCSCTTY, 0)

    def session_popen_kwargs() -> dict[str, Any]:
        return {
            "start_new_session": True,
            "preexec_fn": _acquire_controlling_tty,
        }

else:

    def session_popen_kwargs() -> dict[str, Any]:
        return {"start_new_session": True}
