from clickcounter.config import AppConfig, load_app_config, resolve_app_paths
from clickcounter.counter import ClickCounter
from clickcounter.paths import AppPaths
from clickcounter.stylesheet import StylesheetBuildError, build_stylesheet, stylesheet_is_stale

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "AppPaths",
    "ClickCounter",
    "StylesheetBuildError",
    "__version__",
    "build_stylesheet",
    "load_app_config",
    "resolve_app_paths",
    "stylesheet_is_stale",
]
