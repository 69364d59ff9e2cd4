from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from clickcounter.paths import (
    DEFAULT_STATIC_DIR,
    DEFAULT_TAILWIND_INPUT,
    DEFAULT_TEMPLATES_DIR,
    AppPaths,
    resolve_config_path,
    resolve_dir,
)


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    file: str | None = Field(
        default=None,
        description="Optional log file path; enables a rotating file handler when set.",
    )
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class PathOverrides(BaseModel):
    static_dir: str | None = None
    templates_dir: str | None = None


class TailwindConfig(BaseModel):
    """Settings for the Tailwind CSS compiler that produces the served stylesheet."""

    command: list[str] = Field(
        default_factory=lambda: ["npx", "tailwindcss"],
        min_length=1,
        description="Compiler executable and leading arguments; -i/-o are appended.",
    )
    input: str | None = Field(
        default=None,
        description="Source stylesheet; defaults to the packaged resources/tailwind.css",
    )
    output: str | None = Field(
        default=None,
        description="Generated stylesheet; defaults to <static_dir>/stylesheet.css",
    )
    working_dir: str | None = Field(
        default=None,
        description="Directory the compiler runs in (where tailwind.config.js lives)",
    )
    build_on_start: bool = Field(default=False)


class AppConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    tailwind: TailwindConfig = Field(default_factory=TailwindConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load config from ``config_path`` (or ``$CLICKCOUNTER_CONFIG``).

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    path = config_path if config_path is not None else resolve_config_path()
    if not path.exists():
        return AppConfig()

    raw = _read_json(path)
    return AppConfig.model_validate(raw)


def resolve_app_paths(config: AppConfig, *, base_dir: Path | None = None) -> AppPaths:
    """Apply path overrides from config.

    Relative overrides resolve against ``base_dir``: the directory holding the config
    file when called from the entry points, the current directory otherwise.
    """

    base = (base_dir or Path.cwd()).resolve()

    templates_dir = resolve_dir(
        config.paths.templates_dir, base_dir=base, default=DEFAULT_TEMPLATES_DIR
    )
    static_dir = resolve_dir(config.paths.static_dir, base_dir=base, default=DEFAULT_STATIC_DIR)

    tailwind_input = resolve_dir(
        config.tailwind.input, base_dir=base, default=DEFAULT_TAILWIND_INPUT
    )
    tailwind_output = resolve_dir(
        config.tailwind.output, base_dir=base, default=static_dir / "stylesheet.css"
    )
    tailwind_working_dir = resolve_dir(config.tailwind.working_dir, base_dir=base, default=base)

    return AppPaths(
        base_dir=base,
        templates_dir=templates_dir,
        static_dir=static_dir,
        tailwind_input=tailwind_input,
        tailwind_output=tailwind_output,
        tailwind_working_dir=tailwind_working_dir,
    )
