import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.migrate import apply_migrations
from .routers import alerts, convert, health, rates, trending
from .services.rates.engine import RateEngine
from .services.rates.scheduler import RefreshScheduler


def build_engine(settings: Settings) -> RateEngine:
    rng = random.Random(settings.rng_seed) if settings.rng_seed is not None else None
    return RateEngine(settings.base_currency_table, volatility=settings.volatility, rng=rng)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler: RefreshScheduler = app.state.scheduler
    if app.state.settings.enable_scheduler:
        scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB, seeded RNG). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    if settings.db_path is None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init DB is fatal; re-raise after logging
        logging.getLogger("fxdash").exception("failed to apply migrations on startup")
        raise

    # Invalid reference tables fail here, before the app accepts requests
    engine = build_engine(settings)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version, lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.scheduler = RefreshScheduler(engine, settings.refresh_interval_seconds)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(convert.router)
    app.include_router(trending.router)
    app.include_router(alerts.router)

    @app.get("/")
    async def root():
        return {"message": "FX Dashboard API", "version": settings.version}

    return app
