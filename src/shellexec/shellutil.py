"""Shell and environment helpers shared by the launcher and the runner.

These are the pieces the pty core treats as collaborators: where the shell
lives, which variables every child gets, and where to run when the
requested directory is unusable.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from collections.abc import Mapping
from pathlib import Path

from shellexec.config import ShellExecConfig

logger = logging.getLogger(__name__)

_FALLBACK_SHELLS = ("bash", "zsh", "sh")


def _resolve_executable(candidate: str) -> str | None:
    """Resolve an executable name or path to an absolute runnable path."""
    if os.path.sep in candidate:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return os.path.abspath(candidate)
        return None
    return shutil.which(candidate)


def detect_local_shell_path(
    base_env: Mapping[str, str] | None = None,
    config: ShellExecConfig | None = None,
) -> str:
    """Return the absolute path of the shell to launch.

    Order: configured shell, ``$SHELL`` from the base environment, then the
    first of bash/zsh/sh on PATH. Falls back to ``/bin/sh``.
    """
    env = os.environ if base_env is None else base_env
    candidates: list[str] = []
    if config is not None and config.shell:
        candidates.append(config.shell)
    env_shell = env.get("SHELL", "").strip()
    if env_shell:
        candidates.append(env_shell)
    candidates.extend(_FALLBACK_SHELLS)

    for candidate in candidates:
        resolved = _resolve_executable(candidate)
        if resolved:
            return resolved
        logger.debug("Shell candidate %r is not executable", candidate)
    return "/bin/sh"


def shell_env_vars(term_type: str) -> dict[str, str]:
    """Variables every shell child is started with."""
    return {
        "TERM": term_type,
        "COLORTERM": "truecolor",
    }


def determine_lang(
    base_env: Mapping[str, str], config: ShellExecConfig | None = None
) -> str:
    """Return the LANG to use: the inherited one, else the configured default."""
    lang = base_env.get("LANG", "")
    if lang:
        return lang
    return (config or ShellExecConfig()).lang


def merge_env(
    env: Mapping[str, str], to_add: Mapping[str, str], overwrite: bool = False
) -> dict[str, str]:
    """Merge ``to_add`` into a copy of ``env``.

    Without ``overwrite`` a variable that already has a non-empty value is
    kept. With ``overwrite`` every key in ``to_add`` wins, and an empty
    value removes the variable.
    """
    merged = dict(env)
    for key, value in to_add.items():
        if overwrite:
            if value == "":
                merged.pop(key, None)
            else:
                merged[key] = value
        elif not merged.get(key):
            merged[key] = value
    return merged


def build_child_env(
    base_env: Mapping[str, str] | None,
    config: ShellExecConfig,
    overrides: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Compose the environment for a pty child.

    Starts from ``base_env`` (a snapshot of ``os.environ`` when None), fills
    in the baseline terminal and locale variables without clobbering, then
    applies ``overrides``.
    """
    env = dict(os.environ if base_env is None else base_env)
    baseline = shell_env_vars(config.term.term_type)
    baseline["LANG"] = determine_lang(env, config)
    env = merge_env(env, baseline)
    if overrides:
        env = merge_env(env, overrides, overwrite=True)
    return env


def get_home_dir(base_env: Mapping[str, str] | None = None) -> str:
    """Return the user's home directory."""
    env = os.environ if base_env is None else base_env
    home = env.get("HOME", "")
    if home:
        return home
    return str(Path.home())


def check_cwd(cwd: str | None) -> str | None:
    """Return a reason ``cwd`` is unusable, or None when it is a directory."""
    if not cwd:
        return "cwd is empty"
    try:
        st = os.stat(cwd)
    except OSError as e:
        return f"error statting cwd {cwd!r}: {e}"
    if not stat.S_ISDIR(st.st_mode):
        return f"cwd {cwd!r} is not a directory"
    return None
