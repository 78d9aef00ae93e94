"""Exceptions raised by the pty process layer."""

from __future__ import annotations

import signal as _signal


class ShellExecError(Exception):
    """Base class for all shellexec errors."""


class InvalidTermSizeError(ShellExecError):
    """Terminal size is still non-positive after default substitution."""

    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(f"invalid term size: rows={rows} cols={cols}")
        self.rows = rows
        self.cols = cols


class PtyOpenError(ShellExecError):
    """Opening a new pty pair failed."""

    def __init__(self, cause: OSError) -> None:
        super().__init__(f"opening new pty: {cause}")


class PtySizeError(ShellExecError):
    """Applying the window size to a new pty failed."""

    def __init__(self, rows: int, cols: int, cause: Exception) -> None:
        super().__init__(f"setting pty size {rows}x{cols}: {cause}")
        self.rows = rows
        self.cols = cols


class ProcessStartError(ShellExecError):
    """The OS refused to start the process."""

    def __init__(self, argv: list[str], cause: Exception) -> None:
        super().__init__(f"starting {argv[0] if argv else '?'}: {cause}")
        self.argv = argv


class ProcessExitError(ShellExecError):
    """The process was reaped with a non-zero return code.

    ``returncode`` follows ``subprocess`` conventions: a non-negative value
    is the exit status, a negative value ``-N`` means death by signal N.
    """

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        if returncode < 0:
            try:
                name = _signal.Signals(-returncode).name
            except ValueError:
                name = f"signal {-returncode}"
            message = f"process killed by {name}"
        else:
            message = f"process exited with status {returncode}"
        super().__init__(message)

    @property
    def exit_status(self) -> int | None:
        """Numeric exit status, or None when the process died by signal."""
        if self.returncode < 0:
            return None
        return self.returncode

    @property
    def signal(self) -> int | None:
        if self.returncode < 0:
            return -self.returncode
        return None
