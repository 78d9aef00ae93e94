"""CLI entry point for shellexec."""

from __future__ import annotations

import logging
import sys
import threading

import typer

from shellexec.config import ShellExecConfig
from shellexec.pty import (
    CommandOpts,
    PreparedCommand,
    ProcessExitError,
    ShellExecError,
    TermSize,
    exit_code_from_wait_err,
    run_simple_cmd_in_pty,
    start_shell_proc,
)
from shellexec.pty.run import drain_pty

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="shellexec",
    help="Run shells and commands on pseudo-terminals.",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _copy_output(master_fd: int) -> None:
    """Forward pty output to our stdout until the pty closes."""
    out = sys.stdout.buffer

    def _write(data: bytes) -> None:
        out.write(data)
        out.flush()

    drain_pty(master_fd, _write)


@app.command()
def run(
    command: list[str] = typer.Argument(help="Program and arguments to run."),
    rows: int = typer.Option(0, "--rows", help="Terminal rows (0 = default)."),
    cols: int = typer.Option(0, "--cols", help="Terminal columns (0 = default)."),
    cwd: str | None = typer.Option(None, "--cwd", help="Working directory."),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
) -> None:
    """Run a command to completion on a pty and print what it wrote."""
    setup_logging(verbose)
    config = ShellExecConfig.load(config_file)

    try:
        output = run_simple_cmd_in_pty(
            PreparedCommand(argv=command, cwd=cwd),
            TermSize(rows=rows, cols=cols),
            config=config,
        )
    except ProcessExitError as e:
        typer.echo(f"Error: {e}", err=True)
        code = exit_code_from_wait_err(e)
        raise typer.Exit(code if code > 0 else 1)
    except ShellExecError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    sys.stdout.buffer.write(output)
    sys.stdout.buffer.flush()


@app.command("exec")
def exec_shell(
    command: str = typer.Argument(
        "", help="Command for the shell's -c. Empty starts a plain shell."
    ),
    login: bool = typer.Option(False, "--login", "-l", help="Start a login shell."),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Start an interactive shell."
    ),
    cwd: str | None = typer.Option(
        None, "--cwd", help="Working directory (home dir if unusable)."
    ),
    rows: int = typer.Option(0, "--rows", help="Terminal rows (0 = default)."),
    cols: int = typer.Option(0, "--cols", help="Terminal columns (0 = default)."),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Kill the shell after this many seconds."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
) -> None:
    """Start the user's shell on a pty, stream its output and report its exit."""
    setup_logging(verbose)
    config = ShellExecConfig.load(config_file)

    try:
        sp = start_shell_proc(
            TermSize(rows=rows, cols=cols),
            command,
            CommandOpts(interactive=interactive, login=login, cwd=cwd),
            config=config,
        )
    except ShellExecError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    pump = threading.Thread(target=_copy_output, args=(sp.master_fd,), daemon=True)
    pump.start()
    reaper = threading.Thread(target=sp.reap, daemon=True)
    reaper.start()

    reaper.join(timeout)
    if not sp.done:
        typer.echo(
            f"Error: timed out after {timeout}s, killing pid {sp.pid}", err=True
        )
        sp.close()
        result = sp.wait()
        pump.join()
    else:
        pump.join()
        result = sp.wait()
        sp.close()

    typer.echo(f"exit code: {result.exit_code}", err=True)
    raise typer.Exit(result.exit_code if result.exit_code >= 0 else 1)


if __name__ == "__main__":
    app()
