from __future__ import annotations

import logging
import os

import uvicorn

from clickcounter.app import create_app
from clickcounter.config import AppConfig, load_app_config, resolve_app_paths
from clickcounter.paths import resolve_config_path
from clickcounter.stylesheet import build_stylesheet

logger = logging.getLogger(__name__)


def resolve_bind(config: AppConfig, environ: dict[str, str] | None = None) -> tuple[str, int]:
    env = os.environ if environ is None else environ

    host = (env.get("CLICKCOUNTER_BIND") or "").strip() or config.network.bind_host

    env_port = (env.get("CLICKCOUNTER_PORT") or "").strip()
    port = int(env_port) if env_port else config.network.port

    return host, port


def main() -> None:
    config_path = resolve_config_path()
    config = load_app_config(config_path)

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    paths = resolve_app_paths(config, base_dir=config_path.parent)

    if config.tailwind.build_on_start:
        # A failed build aborts startup.
        build_stylesheet(paths, config)

    host, port = resolve_bind(config)
    logger.info(f"Listening on {host}:{port}")
    uvicorn.run(create_app(config, paths), host=host, port=port)


if __name__ == "__main__":
    main()
