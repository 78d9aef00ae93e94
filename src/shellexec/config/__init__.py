"""Configuration — Pydantic models for shellexec settings."""

from __future__ import annotations

import json
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class TermConfig(BaseModel):
    """Terminal defaults used when a caller passes a zero size."""

    rows: int = Field(default=24)
    cols: int = Field(default=80)
    term_type: str = Field(
        default="xterm-256color", description="Value exported as TERM"
    )


class ShellExecConfig(BaseModel):
    """Top-level shellexec configuration."""

    term: TermConfig = Field(default_factory=TermConfig)
    shell: str | None = Field(
        default=None,
        description="Shell binary to launch. Detected from $SHELL when unset.",
    )
    lang: str = Field(
        default="en_US.UTF-8",
        description="LANG given to children whose environment has none",
    )

    @classmethod
    def load(cls, config_path: str | None = None) -> ShellExecConfig:
        """Load config from file, env vars, or defaults.

        Priority: env vars > config file > defaults.

        Env vars:
            SHELLEXEC_SHELL  - Shell binary path
            SHELLEXEC_TERM   - TERM value for children
            SHELLEXEC_ROWS   - Default terminal rows
            SHELLEXEC_COLS   - Default terminal columns
            SHELLEXEC_LANG   - Fallback LANG
        """
        load_dotenv()

        config_data: dict[str, Any] = {}

        if config_path and os.path.exists(config_path):
            with open(config_path) as f:
                config_data = json.load(f)

        term = config_data.get("term", {})

        env_term = os.environ.get("SHELLEXEC_TERM")
        if env_term:
            term["term_type"] = env_term

        env_rows = os.environ.get("SHELLEXEC_ROWS")
        if env_rows:
            term["rows"] = int(env_rows)

        env_cols = os.environ.get("SHELLEXEC_COLS")
        if env_cols:
            term["cols"] = int(env_cols)

        if term:
            config_data["term"] = term

        env_shell = os.environ.get("SHELLEXEC_SHELL")
        if env_shell:
            config_data["shell"] = env_shell

        env_lang = os.environ.get("SHELLEXEC_LANG")
        if env_lang:
            config_data["lang"] = env_lang

        return cls.model_validate(config_data)
