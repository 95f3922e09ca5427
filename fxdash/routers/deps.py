from __future__ import annotations

from fastapi import Request

from fxdash.core.config import Settings
from fxdash.db.dal import Database
from fxdash.services.rates.engine import RateEngine
from fxdash.services.rates.scheduler import RefreshScheduler

"""FastAPI dependencies resolving app-owned singletons.

The engine, scheduler, and settings are created by the app factory and stored on
`app.state`; routers never construct their own.
"""


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_engine(request: Request) -> RateEngine:
    return request.app.state.engine


def get_scheduler(request: Request) -> RefreshScheduler:
    return request.app.state.scheduler


def get_db(request: Request) -> Database:
    return Database(request.app.state.settings.db_path)
