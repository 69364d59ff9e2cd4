from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from pathlib import Path

from clickcounter.config import AppConfig
from clickcounter.paths import AppPaths

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIXES: tuple[str, ...] = (".html", ".jinja", ".jinja2")


class StylesheetBuildError(RuntimeError):
    def __init__(self, exit_code: int, stderr: str) -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(
            f"TailwindCSS compiler failed with exit code: {exit_code} and stderr: {stderr}"
        )


def build_command(paths: AppPaths, config: AppConfig) -> list[str]:
    return [
        *config.tailwind.command,
        "-i",
        str(paths.tailwind_input),
        "-o",
        str(paths.tailwind_output),
    ]


def _watched_files(paths: AppPaths) -> Iterator[Path]:
    """Files whose changes require regenerating the stylesheet."""

    yield paths.tailwind_input
    if paths.templates_dir.is_dir():
        for p in sorted(paths.templates_dir.rglob("*")):
            if p.is_file() and p.suffix.lower() in TEMPLATE_SUFFIXES:
                yield p


def stylesheet_is_stale(paths: AppPaths) -> bool:
    output = paths.tailwind_output
    if not output.exists():
        return True

    built_at = output.stat().st_mtime
    for p in _watched_files(paths):
        if p.exists() and p.stat().st_mtime > built_at:
            return True
    return False


def build_stylesheet(paths: AppPaths, config: AppConfig, *, force: bool = False) -> bool:
    """Run the Tailwind compiler to regenerate the served stylesheet.

    Returns False without running anything when the output is newer than every
    watched input and ``force`` is not set.
    """

    if not paths.tailwind_input.exists():
        raise FileNotFoundError(str(paths.tailwind_input))

    if not force and not stylesheet_is_stale(paths):
        logger.info("Stylesheet is up to date: %s", paths.tailwind_output)
        return False

    paths.tailwind_output.parent.mkdir(parents=True, exist_ok=True)
    cmd = build_command(paths, config)
    logger.info("Running %s", " ".join(cmd))

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(paths.tailwind_working_dir),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except FileNotFoundError as e:
        raise StylesheetBuildError(-1, f"executable not found: {cmd[0]}") from e

    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
        raise StylesheetBuildError(proc.returncode, stderr)

    logger.info("Wrote stylesheet %s", paths.tailwind_output)
    return True
