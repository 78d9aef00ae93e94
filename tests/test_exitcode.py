"""Tests for shellexec.pty.exitcode.exit_code_from_wait_err."""

from __future__ import annotations

import signal
import subprocess

from shellexec.pty.errors import ProcessExitError
from shellexec.pty.exitcode import exit_code_from_wait_err


class TestExitCodeFromWaitErr:
    def test_none_is_zero(self) -> None:
        assert exit_code_from_wait_err(None) == 0

    def test_exit_status_is_returned(self) -> None:
        assert exit_code_from_wait_err(ProcessExitError(7)) == 7
        assert exit_code_from_wait_err(ProcessExitError(255)) == 255

    def test_signal_death_is_minus_one(self) -> None:
        err = ProcessExitError(-signal.SIGKILL)
        assert exit_code_from_wait_err(err) == -1

    def test_called_process_error(self) -> None:
        err = subprocess.CalledProcessError(3, ["false"])
        assert exit_code_from_wait_err(err) == 3

    def test_called_process_error_with_signal(self) -> None:
        err = subprocess.CalledProcessError(-15, ["sleep"])
        assert exit_code_from_wait_err(err) == -1

    def test_other_error_shapes(self) -> None:
        assert exit_code_from_wait_err(OSError("wait failed")) == -1
        assert exit_code_from_wait_err(RuntimeError("boom")) == -1
        assert exit_code_from_wait_err("not an error") == -1
        assert exit_code_from_wait_err(42) == -1


class TestProcessExitError:
    def test_exit_status(self) -> None:
        err = ProcessExitError(2)
        assert err.exit_status == 2
        assert err.signal is None
        assert "status 2" in str(err)

    def test_signal(self) -> None:
        err = ProcessExitError(-signal.SIGKILL)
        assert err.exit_status is None
        assert err.signal == signal.SIGKILL
        assert "SIGKILL" in str(err)

    def test_unknown_signal_number(self) -> None:
        err = ProcessExitError(-200)
        assert err.signal == 200
        assert "signal 200" in str(err)
