"""Decode a wait error into an integer exit code."""

from __future__ import annotations

import subprocess

from shellexec.pty.errors import ProcessExitError


def exit_code_from_wait_err(err: object) -> int:
    """Map a wait error to an exit code.

    ``None`` is success (0). A normal non-zero exit yields its status.
    Anything else, including death by signal, yields -1.
    """
    if err is None:
        return 0
    if isinstance(err, ProcessExitError):
        status = err.exit_status
        return status if status is not None else -1
    if isinstance(err, subprocess.CalledProcessError):
        returncode = err.returncode
        if isinstance(returncode, int) and returncode >= 0:
            return returncode
    return -1
