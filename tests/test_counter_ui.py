from __future__ import annotations

import asyncio
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from clickcounter.app import create_app
from clickcounter.config import AppConfig


def test_index_renders_zero_on_fresh_app(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        r = client.get("/")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert "<!DOCTYPE html>" in r.text
        assert "Clicked: 0" in r.text
        assert 'hx-post="/clicked"' in r.text
        assert 'hx-target="#counter"' in r.text
        assert "https://unpkg.com/htmx.org@2.0.4" in r.text
        assert 'href="/static/stylesheet.css"' in r.text


def test_clicked_returns_only_the_fragment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        r = client.post("/clicked")
        assert r.status_code == 200
        assert r.text.strip() == '<div class="text-red-500" id="counter">Clicked: 1</div>'
        assert "<html>" not in r.text


def test_sequential_clicks_accumulate(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        for i in range(1, 6):
            r = client.post("/clicked")
            assert f"Clicked: {i}<" in r.text

        page = client.get("/")
        assert "Clicked: 5" in page.text


def test_each_app_has_its_own_counter(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        client.post("/clicked")
        client.post("/clicked")

    with TestClient(create_app()) as client:
        assert "Clicked: 0" in client.get("/").text


def test_concurrent_clicks_are_not_lost() -> None:
    app = create_app(AppConfig())
    total = 200

    async def _run() -> list[httpx.Response]:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
            return await asyncio.gather(*(c.post("/clicked") for _ in range(total)))

    responses = asyncio.run(_run())
    ok = [r for r in responses if r.status_code == 200]
    assert len(ok) == total
    assert app.state.counter.value() == total

    # Every click saw its own count.
    seen = {r.text.strip() for r in ok}
    assert len(seen) == total


def test_get_on_clicked_is_rejected(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        r = client.get("/clicked")
        assert r.status_code == 405
        assert client.app.state.counter.value() == 0


def test_static_serves_stylesheet(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        r = client.get("/static/stylesheet.css")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/css")
        assert ".text-red-500" in r.text

        missing = client.get("/static/nope.css")
        assert missing.status_code == 404


def test_static_dir_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    static = tmp_path / "public"
    static.mkdir()
    (static / "stylesheet.css").write_text("body { color: red; }\n", encoding="utf-8")

    cfg = AppConfig.model_validate({"paths": {"static_dir": "public"}})
    with TestClient(create_app(cfg)) as client:
        r = client.get("/static/stylesheet.css")
        assert r.status_code == 200
        assert r.text == "body { color: red; }\n"


def test_healthz_ok(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    with TestClient(create_app()) as client:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_unhandled_error_is_plain_text_without_details(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    app = create_app(AppConfig())

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("secret internals")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/boom")
        assert r.status_code == 500
        assert r.headers["content-type"].startswith("text/plain")
        assert r.text == "Internal server error"
        assert "secret" not in r.text


def test_log_file_receives_startup_and_request_lines(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    log_path = tmp_path / "logs" / "clickcounter.log"
    cfg = AppConfig.model_validate({"logging": {"file": str(log_path)}})
    root = logging.getLogger()
    before = list(root.handlers)
    previous_level = root.level

    try:
        with TestClient(create_app(cfg)) as client:
            client.post("/clicked")

        # A second app in the same process reuses the installed handler.
        with TestClient(create_app(cfg)):
            pass

        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0], RotatingFileHandler)
        assert Path(added[0].baseFilename) == log_path.resolve()

        added[0].flush()
        text = log_path.read_text(encoding="utf-8")
        assert "Click counter starting up" in text
        assert "POST /clicked - 200" in text
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(previous_level)
