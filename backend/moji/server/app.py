from __future__ import annotations

import contextlib
import json
from http import HTTPStatus
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, Field, ValidationError
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from moji.logic.clock import Calendar
from moji.logic.exceptions import NothingToShareError
from moji.logic.rng import RNG_VERSION
from moji.logic.stats import StatsEngine
from moji.server.settings import MojiSettings, StorageBackend
from moji.session.play import PlaySession
from moji.view.render import render_result
from moji.view.stats import render_stats
from moji.view.timeline import instant_timeline, reveal_timeline
from shared.db import Database, SqliteKeyValueStore
from shared.logging import setup_logging
from shared.storage import InMemoryStore, LocalFileStore

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from datetime import datetime

    from starlette.requests import Request

    from shared.storage import KeyValueStore


def _app_version() -> str:
    try:
        return version("moji")
    except PackageNotFoundError:
        return "dev"


class PlayRequest(BaseModel):
    """Optional body of POST /api/play."""

    timestamp_ms: int | None = Field(default=None, ge=0)  # grid seed; server clock when absent


def open_store(settings: MojiSettings) -> tuple[KeyValueStore, Database | None]:
    """Build the configured store. Returns the database too when one must be closed on shutdown."""
    if settings.storage_backend == StorageBackend.SQLITE:
        db = Database(settings.storage_path)
        db.connect()
        return SqliteKeyValueStore(db), db
    if settings.storage_backend == StorageBackend.FILE:
        return LocalFileStore(settings.storage_path), None
    return InMemoryStore(), None


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": _app_version(), "rng": RNG_VERSION})


async def puzzle_info(request: Request) -> JSONResponse:
    session: PlaySession = request.app.state.session
    calendar = session.calendar
    return JSONResponse(
        {
            "puzzle_number": calendar.puzzle_number(),
            "played_today": session.engine.has_played_today(),
            "countdown": calendar.countdown_text(),
            "unlimited_plays": session.engine.unlimited_plays,
        },
    )


async def play(request: Request) -> JSONResponse:
    session: PlaySession = request.app.state.session

    raw_body = await request.body()
    if not raw_body or raw_body.strip() == b"":
        body = {}
    else:
        try:
            body = json.loads(raw_body)
        except (ValueError, json.JSONDecodeError):
            return JSONResponse({"error": "Invalid JSON body"}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)

    try:
        req = PlayRequest(**body)
    except (TypeError, ValidationError) as e:
        return JSONResponse({"error": str(e)}, status_code=HTTPStatus.UNPROCESSABLE_ENTITY)

    outcome = session.play(req.timestamp_ms)
    view = render_result(outcome.puzzle_number, outcome.result, outcome.grid, outcome.stats)
    if outcome.is_replay:
        timeline = instant_timeline(outcome.grid)
    else:
        timeline = reveal_timeline(outcome.grid, unlimited_plays=session.engine.unlimited_plays)
    return JSONResponse(
        {
            "is_replay": outcome.is_replay,
            "result": view.model_dump(mode="json"),
            "timeline": [t.model_dump(mode="json") for t in timeline],
        },
    )


async def stats(request: Request) -> JSONResponse:
    session: PlaySession = request.app.state.session
    engine = session.engine
    view = render_stats(engine.load(), engine.today_entry())
    return JSONResponse(view.model_dump(mode="json"))


async def share(request: Request) -> JSONResponse:
    session: PlaySession = request.app.state.session
    if session.current is None:
        session.resume()
    try:
        text = session.share_text()
    except NothingToShareError as e:
        return JSONResponse({"error": str(e)}, status_code=HTTPStatus.NOT_FOUND)
    return JSONResponse({"text": text})


def create_app(
    settings: MojiSettings | None = None,
    store: KeyValueStore | None = None,
    now: Callable[[], datetime] | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = MojiSettings()

    db: Database | None = None
    if store is None:
        store, db = open_store(settings)

    calendar = Calendar(settings.first_puzzle_date, now=now)
    engine = StatsEngine(store, calendar, unlimited_plays=settings.unlimited_plays)
    session = PlaySession(engine, calendar)
    session.resume()

    routes = [
        Route("/health", health, methods=["GET"], name="health"),
        Route("/api/puzzle", puzzle_info, methods=["GET"], name="puzzle_info"),
        Route("/api/play", play, methods=["POST"], name="play"),
        Route("/api/stats", stats, methods=["GET"], name="stats"),
        Route("/api/share", share, methods=["GET"], name="share"),
    ]

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        yield
        if db is not None:
            db.close()

    app = Starlette(routes=routes, lifespan=lifespan)
    app.state.settings = settings
    app.state.session = session

    logger.info(
        "moji server ready",
        storage_backend=settings.storage_backend,
        unlimited_plays=settings.unlimited_plays,
        puzzle_number=calendar.puzzle_number(),
    )
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory moji.server.app:get_app."""
    s = MojiSettings()
    setup_logging(log_dir=s.log_dir, level=s.log_level, log_format=s.log_format)
    return create_app(settings=s)
