"""shellexec — shell processes on pseudo-terminals."""

from shellexec.config import ShellExecConfig
from shellexec.pty import (
    CommandOpts,
    PreparedCommand,
    ShellProc,
    TermSize,
    WaitResult,
    exit_code_from_wait_err,
    run_simple_cmd_in_pty,
    start_shell_proc,
)

__version__ = "0.1.0"

__all__ = [
    "CommandOpts",
    "PreparedCommand",
    "ShellExecConfig",
    "ShellProc",
    "TermSize",
    "WaitResult",
    "exit_code_from_wait_err",
    "run_simple_cmd_in_pty",
    "start_shell_proc",
]
