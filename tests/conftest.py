from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from restcase.db.db_init import init_db
from restcase.repositories.admin_repository import SQLAlchemyAdminRepository


class FakeClock:
    """Manually advanced UTC clock shared by the service and the verifier."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def engine():
    engine = create_engine("sqlite:///:memory:", future=True)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def repository(session_factory) -> SQLAlchemyAdminRepository:
    return SQLAlchemyAdminRepository(session_factory)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.now(tz=timezone.utc).replace(microsecond=0))
