"""Run a command to completion on a pty and capture everything it printed."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Mapping

from shellexec import shellutil
from shellexec.config import ShellExecConfig
from shellexec.pty.proc import spawn_in_pty, wait_error_from_returncode
from shellexec.pty.types import PreparedCommand, TermSize

logger = logging.getLogger(__name__)

_READ_SIZE = 4096


def drain_pty(master_fd: int, sink: Callable[[bytes], object]) -> None:
    """Feed everything readable from the pty master to ``sink``.

    Returns at end of stream or on the first read error.
    """
    while True:
        try:
            data = os.read(master_fd, _READ_SIZE)
        except OSError:
            # The master reports EIO once the last slave fd is closed.
            break
        if not data:
            break
        sink(data)


def run_simple_cmd_in_pty(
    cmd: PreparedCommand,
    term_size: TermSize,
    *,
    base_env: Mapping[str, str] | None = None,
    config: ShellExecConfig | None = None,
) -> bytes:
    """Run ``cmd`` on a new pty, wait for it, and return its output.

    Output is drained on a separate thread while this thread waits for the
    process. The pty master is closed only after both have finished.

    Raises:
        InvalidTermSizeError, PtyOpenError, PtySizeError, ProcessStartError: as for
            ``start_shell_proc``.
        ProcessExitError: the command exited non-zero or was killed. Any
            output already captured is discarded.
    """
    config = config or ShellExecConfig()
    size = term_size.resolve(config.term.rows, config.term.cols)
    env = shellutil.build_child_env(base_env, config, cmd.env)

    proc, master_fd = spawn_in_pty(cmd.argv, cwd=cmd.cwd, env=env, size=size)
    logger.debug("Running pid=%d in pty: %s", proc.pid, " ".join(cmd.argv))

    output = bytearray()
    drainer = threading.Thread(
        target=drain_pty,
        args=(master_fd, output.extend),
        name=f"pty-drain-{proc.pid}",
        daemon=True,
    )
    try:
        drainer.start()
        try:
            returncode = proc.wait()
        except BaseException:
            proc.kill()
            proc.wait()
            raise
        finally:
            drainer.join()
    finally:
        os.close(master_fd)

    error = wait_error_from_returncode(returncode)
    if error is not None:
        logger.debug("pid=%d failed: %s", proc.pid, error)
        raise error
    return bytes(output)
