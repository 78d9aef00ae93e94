"""PTY process management — shells and commands on pseudo-terminals.

Each ``ShellProc`` owns exactly one process and one pty master fd.
``run_simple_cmd_in_pty`` is the one-shot variant that captures output.
"""

from shellexec.pty.errors import (
    InvalidTermSizeError,
    ProcessExitError,
    ProcessStartError,
    PtyOpenError,
    PtySizeError,
    ShellExecError,
)
from shellexec.pty.exitcode import exit_code_from_wait_err
from shellexec.pty.proc import ShellProc, start_shell_proc
from shellexec.pty.run import run_simple_cmd_in_pty
from shellexec.pty.types import CommandOpts, PreparedCommand, TermSize, WaitResult

__all__ = [
    "CommandOpts",
    "InvalidTermSizeError",
    "PreparedCommand",
    "ProcessExitError",
    "ProcessStartError",
    "PtyOpenError",
    "PtySizeError",
    "ShellExecError",
    "ShellProc",
    "TermSize",
    "WaitResult",
    "exit_code_from_wait_err",
    "run_simple_cmd_in_pty",
    "start_shell_proc",
]
