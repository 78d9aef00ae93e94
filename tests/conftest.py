"""Shared fixtures for shellexec tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from shellexec.pty.run import drain_pty


def read_until_closed(fd: int) -> bytes:
    """Read a pty master until the child side is gone."""
    output = bytearray()
    drain_pty(fd, output.extend)
    return bytes(output)


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "fallback_home_7f3a"
    home.mkdir()
    return home


@pytest.fixture
def base_env(home_dir: Path) -> dict[str, str]:
    """A minimal, deterministic environment for child processes."""
    return {
        "PATH": os.environ.get("PATH", "/usr/bin:/bin"),
        "SHELL": "/bin/sh",
        "HOME": str(home_dir),
    }
