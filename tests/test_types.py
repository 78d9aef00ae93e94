"""Tests for shellexec.pty.types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from shellexec.pty.errors import InvalidTermSizeError, ProcessExitError
from shellexec.pty.types import (
    MAX_TERM_DIM,
    CommandOpts,
    PreparedCommand,
    TermSize,
    WaitResult,
)


# ---------------------------------------------------------------------------
# TermSize
# ---------------------------------------------------------------------------


class TestTermSize:
    def test_defaults_are_zero(self) -> None:
        size = TermSize()
        assert size.rows == 0
        assert size.cols == 0

    def test_positive_size_kept(self) -> None:
        assert TermSize(rows=40, cols=120).resolve(24, 80) == TermSize(
            rows=40, cols=120
        )

    def test_zero_rows_uses_both_defaults(self) -> None:
        assert TermSize(rows=0, cols=120).resolve(24, 80) == TermSize(
            rows=24, cols=80
        )

    def test_zero_cols_uses_both_defaults(self) -> None:
        assert TermSize(rows=40, cols=0).resolve(24, 80) == TermSize(
            rows=24, cols=80
        )

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(InvalidTermSizeError) as exc_info:
            TermSize(rows=-1, cols=80).resolve(24, 80)
        assert exc_info.value.rows == -1
        assert "invalid term size" in str(exc_info.value)

    def test_oversized_is_clamped(self) -> None:
        assert TermSize(rows=70000, cols=80).resolve(24, 80) == TermSize(
            rows=65535, cols=80
        )
        assert TermSize(rows=10, cols=1_000_000).resolve(24, 80) == TermSize(
            rows=10, cols=65535
        )

    def test_max_size_kept(self) -> None:
        size = TermSize(rows=MAX_TERM_DIM, cols=MAX_TERM_DIM)
        assert size.resolve(24, 80) == size

    def test_bad_defaults_rejected(self) -> None:
        with pytest.raises(InvalidTermSizeError):
            TermSize().resolve(0, 80)

    def test_frozen(self) -> None:
        size = TermSize(rows=1, cols=1)
        with pytest.raises(ValidationError):
            size.rows = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# CommandOpts / PreparedCommand
# ---------------------------------------------------------------------------


class TestCommandOpts:
    def test_defaults(self) -> None:
        opts = CommandOpts()
        assert opts.interactive is False
        assert opts.login is False
        assert opts.cwd is None
        assert opts.env == {}

    def test_frozen(self) -> None:
        opts = CommandOpts(login=True)
        with pytest.raises(ValidationError):
            opts.login = False  # type: ignore[misc]


class TestPreparedCommand:
    def test_argv_required(self) -> None:
        with pytest.raises(ValidationError):
            PreparedCommand(argv=[])

    def test_fields(self) -> None:
        cmd = PreparedCommand(argv=["ls", "-l"], cwd="/tmp", env={"A": "1"})
        assert cmd.argv == ["ls", "-l"]
        assert cmd.cwd == "/tmp"
        assert cmd.env == {"A": "1"}


# ---------------------------------------------------------------------------
# WaitResult
# ---------------------------------------------------------------------------


class TestWaitResult:
    def test_success(self) -> None:
        result = WaitResult()
        assert result.success
        assert result.exit_code == 0

    def test_failure(self) -> None:
        result = WaitResult(error=ProcessExitError(7))
        assert not result.success
        assert result.exit_code == 7

    def test_equality(self) -> None:
        err = ProcessExitError(1)
        assert WaitResult(error=err) == WaitResult(error=err)
