"""Shell processes bound to a pty, and their termination.

``start_shell_proc()`` launches the user's shell on a fresh pty and hands
back a ``ShellProc``. The handle owns the ``subprocess.Popen`` and the pty
master fd for its whole life:

- ``close()`` kills the process at once, then a reaper thread waits for it,
  publishes the result and only then closes the master fd.
- The result is published exactly once. Whoever publishes first (the
  reaper, or a caller that reaped the process itself) wins.
- ``wait()`` / ``wait_nb()`` / ``wait_async()`` observe that single result.
"""

from __future__ import annotations

import asyncio
import logging
import os
import pty
import struct
import subprocess
import threading
from collections.abc import Mapping

from shellexec import shellutil
from shellexec.config import ShellExecConfig
from shellexec.pty.errors import (
    ProcessExitError,
    ProcessStartError,
    PtyOpenError,
    PtySizeError,
)
from shellexec.pty.platform import session_popen_kwargs, set_winsize
from shellexec.pty.types import CommandOpts, TermSize, WaitResult

logger = logging.getLogger(__name__)


def _open_pty(size: TermSize) -> tuple[int, int]:
    """Open a pty pair sized to ``size``. Returns (master_fd, slave_fd)."""
    try:
        master_fd, slave_fd = pty.openpty()
    except OSError as e:
        raise PtyOpenError(e) from e
    try:
        try:
            set_winsize(master_fd, size.rows, size.cols)
        except (OSError, struct.error) as e:
            raise PtySizeError(size.rows, size.cols, e) from e
    except BaseException:
        os.close(master_fd)
        os.close(slave_fd)
        raise
    return master_fd, slave_fd


def spawn_in_pty(
    argv: list[str],
    *,
    cwd: str | None,
    env: Mapping[str, str],
    size: TermSize,
) -> tuple[subprocess.Popen, int]:
    """Start ``argv`` with a new pty slave as its stdin, stdout and stderr.

    The child becomes a session leader with the slave as its controlling
    terminal where the platform allows it. The slave is closed in the parent
    as soon as ``Popen`` returns, whatever the outcome; on failure the
    master is closed too.

    Returns (process, master_fd).
    """
    master_fd, slave_fd = _open_pty(size)
    try:
        proc = subprocess.Popen(
            argv,
            stdin=slave_fd,
            stdout=slave_fd,
            stderr=slave_fd,
            cwd=cwd,
            env=dict(env),
            close_fds=True,
            **session_popen_kwargs(),
        )
    except (OSError, subprocess.SubprocessError) as e:
        os.close(master_fd)
        raise ProcessStartError(argv, e) from e
    finally:
        os.close(slave_fd)
    return proc, master_fd


def wait_error_from_returncode(returncode: int) -> ProcessExitError | None:
    if returncode == 0:
        return None
    return ProcessExitError(returncode)


class ShellProc:
    """A running shell process and the master side of its pty."""

    def __init__(self, proc: subprocess.Popen, master_fd: int) -> None:
        self.proc = proc
        self._master_fd = master_fd
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._result: WaitResult | None = None
        self._reaper: threading.Thread | None = None

    @property
    def pid(self) -> int:
        return self.proc.pid

    @property
    def master_fd(self) -> int:
        """The pty master fd, or -1 once it has been released."""
        return self._master_fd

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def close(self) -> None:
        """Kill the process now and reap it in the background.

        Safe to call any number of times. A failing kill (the process is
        already gone) is ignored.
        """
        try:
            self.proc.kill()
            logger.info("Killed shell process pid=%d", self.proc.pid)
        except OSError as e:
            logger.debug("Kill of pid=%d failed: %s", self.proc.pid, e)

        with self._lock:
            if self._reaper is not None:
                return
            self._reaper = threading.Thread(
                target=self._reap_and_release,
                name=f"shellproc-reaper-{self.proc.pid}",
                daemon=True,
            )
            self._reaper.start()

    def _reap_and_release(self) -> None:
        error: BaseException | None
        try:
            error = wait_error_from_returncode(self.proc.wait())
        except OSError as e:
            error = e
        self.set_wait_error_and_signal_done(error)
        self._release_master()

    def _release_master(self) -> None:
        with self._lock:
            fd, self._master_fd = self._master_fd, -1
        if fd < 0:
            return
        try:
            os.close(fd)
        except OSError:
            pass

    def set_wait_error_and_signal_done(self, error: BaseException | None) -> bool:
        """Publish the termination result. Only the first call has any effect.

        Returns True if this call's result was the one recorded.
        """
        with self._lock:
            if self._result is not None:
                return False
            self._result = WaitResult(error=error)
            self._done.set()
        logger.debug(
            "Shell process pid=%d done: exit_code=%d",
            self.proc.pid,
            self._result.exit_code,
        )
        return True

    def reap(self) -> WaitResult:
        """Block until the process exits on its own and publish its result.

        The master fd is left open so remaining output can still be read;
        ``close()`` releases it. Returns the recorded result, which may come
        from an earlier publisher.
        """
        error: BaseException | None
        try:
            error = wait_error_from_returncode(self.proc.wait())
        except OSError as e:
            error = e
        self.set_wait_error_and_signal_done(error)
        return self.wait()

    def wait(self) -> WaitResult:
        """Block until a result has been published and return it."""
        self._done.wait()
        assert self._result is not None
        return self._result

    def wait_nb(self) -> tuple[bool, WaitResult | None]:
        """Return (True, result) if done, else (False, None). Never blocks."""
        if self._done.is_set():
            return True, self._result
        return False, None

    async def wait_async(self) -> WaitResult:
        """Await the result from an asyncio event loop."""
        if self._done.is_set():
            return self.wait()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.wait)

    def __enter__(self) -> ShellProc:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ShellProc(pid={self.proc.pid}, done={self.done})"


def shell_argv(shell_path: str, cmd_str: str, cmd_opts: CommandOpts) -> list[str]:
    argv = [shell_path]
    if cmd_opts.login:
        argv.append("-l")
    if cmd_opts.interactive:
        argv.append("-i")
    if cmd_str:
        argv.extend(["-c", cmd_str])
    return argv


def start_shell_proc(
    term_size: TermSize,
    cmd_str: str | None,
    cmd_opts: CommandOpts,
    *,
    base_env: Mapping[str, str] | None = None,
    config: ShellExecConfig | None = None,
) -> ShellProc:
    """Start the user's shell on a new pty.

    With an empty ``cmd_str`` the shell runs as a top-level shell, otherwise
    it runs ``-c cmd_str``. ``base_env`` replaces ``os.environ`` as the
    starting environment.

    Raises:
        InvalidTermSizeError: the size is invalid after default substitution.
        PtyOpenError: no pty could be opened.
        PtySizeError: the window size could not be applied to the pty.
        ProcessStartError: the shell could not be started.
    """
    config = config or ShellExecConfig()
    size = term_size.resolve(config.term.rows, config.term.cols)

    shell_path = shellutil.detect_local_shell_path(base_env, config)
    argv = shell_argv(shell_path, cmd_str or "", cmd_opts)

    cwd = cmd_opts.cwd
    reason = shellutil.check_cwd(cwd)
    if reason is not None:
        cwd = shellutil.get_home_dir(base_env)
        logger.debug("Using home dir %s (%s)", cwd, reason)

    env = shellutil.build_child_env(base_env, config, cmd_opts.env)

    proc, master_fd = spawn_in_pty(argv, cwd=cwd, env=env, size=size)
    logger.info(
        "Shell process started: pid=%d size=%dx%d cwd=%s cmd=%s",
        proc.pid,
        size.rows,
        size.cols,
        cwd,
        " ".join(argv),
    )
    return ShellProc(proc, master_fd)
