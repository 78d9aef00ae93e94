"""Value types passed into and out of the pty layer."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shellexec.pty.errors import InvalidTermSizeError
from shellexec.pty.exitcode import exit_code_from_wait_err


# struct winsize fields are unsigned short.
MAX_TERM_DIM = 65535


class TermSize(BaseModel):
    """Terminal dimensions. Zero in either field means "use the default"."""

    model_config = ConfigDict(frozen=True)

    rows: int = Field(default=0)
    cols: int = Field(default=0)

    def resolve(self, default_rows: int, default_cols: int) -> TermSize:
        """Substitute defaults and validate.

        If either dimension is 0 both are replaced by the defaults. A
        dimension that is still ``<= 0`` afterwards raises
        ``InvalidTermSizeError``. Dimensions above ``MAX_TERM_DIM`` are
        clamped to it.
        """
        size = self
        if size.rows == 0 or size.cols == 0:
            size = TermSize(rows=default_rows, cols=default_cols)
        if size.rows <= 0 or size.cols <= 0:
            raise InvalidTermSizeError(size.rows, size.cols)
        if size.rows > MAX_TERM_DIM or size.cols > MAX_TERM_DIM:
            size = TermSize(
                rows=min(size.rows, MAX_TERM_DIM), cols=min(size.cols, MAX_TERM_DIM)
            )
        return size


class CommandOpts(BaseModel):
    """How to start the shell."""

    model_config = ConfigDict(frozen=True)

    interactive: bool = Field(default=False)
    login: bool = Field(default=False)
    cwd: str | None = Field(default=None, description="Working directory")
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Variables set in the child after the baseline merge. "
        "An empty value removes the variable.",
    )


class PreparedCommand(BaseModel):
    """A fully built command for ``run_simple_cmd_in_pty``."""

    model_config = ConfigDict(frozen=True)

    argv: list[str]
    cwd: str | None = Field(default=None)
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("argv")
    @classmethod
    def _argv_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("argv must contain at least the program")
        return value


@dataclass(frozen=True)
class WaitResult:
    """Outcome of reaping a process: the wait error (None on success)."""

    error: BaseException | None = None

    @property
    def exit_code(self) -> int:
        return exit_code_from_wait_err(self.error)

    @property
    def success(self) -> bool:
        return self.error is None
