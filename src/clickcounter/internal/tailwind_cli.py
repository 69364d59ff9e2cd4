from __future__ import annotations

import argparse
import logging
from pathlib import Path

from clickcounter.config import load_app_config, resolve_app_paths
from clickcounter.paths import resolve_config_path
from clickcounter.stylesheet import StylesheetBuildError, build_stylesheet


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Regenerate the served stylesheet with Tailwind CSS")
    p.add_argument("--config", help="Config JSON path (default: $CLICKCOUNTER_CONFIG)")
    p.add_argument(
        "--force", action="store_true", help="Rebuild even if the stylesheet is up to date"
    )

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config_path = (
        Path(args.config).expanduser().resolve() if args.config else resolve_config_path()
    )
    cfg = load_app_config(config_path)
    paths = resolve_app_paths(cfg, base_dir=config_path.parent)

    try:
        built = build_stylesheet(paths, cfg, force=args.force)
    except FileNotFoundError:
        print(f"input not found: {paths.tailwind_input}")
        return 2
    except StylesheetBuildError as e:
        print(str(e))
        return 1

    print(f"output={paths.tailwind_output}")
    print(f"built={built}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
