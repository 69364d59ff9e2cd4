from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATES_DIR = PACKAGE_DIR / "ui" / "templates"
DEFAULT_STATIC_DIR = PACKAGE_DIR / "ui" / "static"
DEFAULT_TAILWIND_INPUT = PACKAGE_DIR / "resources" / "tailwind.css"

CONFIG_ENV_VAR = "CLICKCOUNTER_CONFIG"
DEFAULT_CONFIG_NAME = "clickcounter.json"


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    templates_dir: Path
    static_dir: Path
    tailwind_input: Path
    tailwind_output: Path
    tailwind_working_dir: Path

    @property
    def stylesheet_path(self) -> Path:
        return self.tailwind_output


def resolve_config_path(environ: dict[str, str] | None = None) -> Path:
    """Locate the JSON config file.

    ``$CLICKCOUNTER_CONFIG`` wins; otherwise ``./clickcounter.json``. The file does not
    have to exist.
    """

    env = os.environ if environ is None else environ

    raw = (env.get(CONFIG_ENV_VAR) or "").strip()
    if raw:
        return Path(raw).expanduser().resolve()
    return (Path.cwd() / DEFAULT_CONFIG_NAME).resolve()


def resolve_dir(raw: str | None, *, base_dir: Path, default: Path) -> Path:
    if raw is None or not str(raw).strip():
        return default
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = (base_dir / candidate).resolve()
    else:
        candidate = candidate.resolve()
    return candidate
