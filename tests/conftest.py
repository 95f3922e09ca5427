import random
from pathlib import Path
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient

from fxdash.core.config import Settings
from fxdash.db.dal import Database
from fxdash.db.migrate import apply_migrations
from fxdash.main import create_app
from fxdash.models.rates import CurrencySpec
from fxdash.services.rates.engine import RateEngine


@pytest.fixture(scope="function")
def two_currency_specs() -> List[CurrencySpec]:
    return [
        CurrencySpec(code="EUR", symbol="€", base_rate=0.85),
        CurrencySpec(code="GBP", symbol="£", base_rate=0.73),
    ]


@pytest.fixture(scope="function")
def engine() -> RateEngine:
    return RateEngine(rng=random.Random(7))


@pytest.fixture(scope="function")
def db(tmp_path: Path) -> Database:
    path = tmp_path / "fxdash-test.sqlite3"
    apply_migrations(path)
    return Database(path)


@pytest.fixture(scope="function")
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "fxdash-api.sqlite3",
        enable_scheduler=False,
        rng_seed=11,
    )


@pytest.fixture(scope="function")
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as c:
        yield c
