"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Iterable

import pytest

from config import Config
from database import init_database, run_migrations
from database.models import BusinessConfig
from database.repositories import PrizeRepository
from services import BusinessConfigService, run_async

ADMIN_CODE = "654321"
EXEMPT_DNI = "45035781"
T0 = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, *, hours: float = 0, minutes: float = 0, ms: int = 0) -> None:
        self.now += int(hours * 3_600_000 + minutes * 60_000 + ms)


@pytest.fixture
def app_config(tmp_path) -> Config:
    return Config(
        admin_code=ADMIN_CODE,
        admin_session_secret="test-secret",
        secret_key="test-flask-secret",
        admin_session_ttl_hours=72,
        cooldown_hours=24,
        exempt_dnis=(EXEMPT_DNI,),
        business_name="Tu Negocio",
        instagram_qr_url="",
        environment="testing",
        debug=False,
        web_host="127.0.0.1",
        web_port=3000,
        database_path=str(tmp_path / "prizewheel.sqlite"),
        log_folder=str(tmp_path / "logs"),
        log_level="DEBUG",
        seed_prizes=False,
    )


@pytest.fixture
def database(app_config):
    """Fresh SQLite file with the schema applied."""
    db = init_database(app_config.database_path)
    run_async(run_migrations())
    return db


@pytest.fixture
def config_service(database) -> BusinessConfigService:
    return BusinessConfigService(BusinessConfig(
        business_name="Tu Negocio",
        instagram_qr_url="",
        exempt_dnis=(EXEMPT_DNI,),
    ))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


async def insert_prizes(pairs: Iterable[tuple[str, float]]):
    """Insert prizes given as ``(name, weight)`` pairs, in order."""
    await PrizeRepository.insert_many(
        {"name": name, "image": f"https://img.example/{index}.png", "weight": weight}
        for index, (name, weight) in enumerate(pairs)
    )
    return await PrizeRepository.list_all()


@pytest.fixture
def add_prizes(database):
    """Synchronous ``insert_prizes`` for tests that run outside an event loop."""
    def _add(pairs: Iterable[tuple[str, float]]):
        return run_async(insert_prizes(pairs))
    return _add


@pytest.fixture
def app(app_config, database):
    from web.app import create_app
    return create_app(app_config, testing=True)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = client.post("/api/admin/login", json={"code": ADMIN_CODE})
    assert response.status_code == 200
    return client
