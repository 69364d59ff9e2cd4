from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles

from clickcounter.config import AppConfig, load_app_config, resolve_app_paths
from clickcounter.counter import ClickCounter
from clickcounter.paths import AppPaths, resolve_config_path
from clickcounter.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def _install_file_handler(config: AppConfig) -> None:
    raw = (config.logging.file or "").strip()
    if not raw:
        return

    root = logging.getLogger()
    root.setLevel(config.logging.level)
    # Avoid adding duplicate handlers if reloaded
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_path = Path(raw).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.logging.max_size_mb * 1024 * 1024,
        backupCount=config.logging.backup_count,
        encoding="utf-8",
    )
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    logger.info(f"Logging to {log_path}")


def create_app(config: AppConfig | None = None, paths: AppPaths | None = None) -> FastAPI:
    if config is None:
        config_path = resolve_config_path()
        config = load_app_config(config_path)
        if paths is None:
            paths = resolve_app_paths(config, base_dir=config_path.parent)
    paths = paths if paths is not None else resolve_app_paths(config)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        _install_file_handler(config)
        logger.info("Click counter starting up")
        logger.info(f"Serving static files from {paths.static_dir}")
        try:
            yield
        finally:
            logger.info(f"Shutting down at {app.state.counter.value()} clicks")

    app = FastAPI(title="Click counter", version="0.1.0", lifespan=_lifespan)

    app.state.config = config
    app.state.paths = paths
    app.state.counter = ClickCounter()
    app.state.templates = Jinja2Templates(directory=str(paths.templates_dir))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return PlainTextResponse("Internal server error", status_code=500)

    if paths.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(paths.static_dir)), name="static")
    else:
        logger.warning(
            "Static directory is missing (%s); /static will not be served",
            paths.static_dir,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
