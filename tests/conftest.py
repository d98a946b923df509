"""Pytest configuration and fixtures"""
import os
from datetime import datetime
from typing import Iterator, Optional

import pytest

# Set test environment variables before the package reads them
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from popaloon.app import create_app  # noqa: E402
from popaloon.core import ResultCache, get_session  # noqa: E402
from popaloon.core.security import create_access_token  # noqa: E402
from popaloon.models import LegacyCount, PopEvent, User, new_event_id  # noqa: E402
from popaloon.services import create_balloon_type  # noqa: E402


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ResultCache:
    return ResultCache(timer=clock)


@pytest.fixture
def balloons(session, cache):
    """Catalog with a 1-point default balloon and a 3-point confetti balloon."""
    return {
        "default": create_balloon_type(session, cache, "default", 1),
        "confetti": create_balloon_type(session, cache, "confetti", 3),
    }


@pytest.fixture
def make_user(session):
    def _make_user(
        username: Optional[str] = "player",
        legacy: Optional[int] = None,
        email: Optional[str] = None,
    ) -> User:
        user = User(username=username, email=email)
        session.add(user)
        session.commit()
        session.refresh(user)
        if legacy is not None:
            session.add(LegacyCount(user_id=user.id, count=legacy))
            session.commit()
        return user

    return _make_user


@pytest.fixture
def add_pops(session):
    def _add_pops(user: User, balloon_id: int, times: int = 1, at: Optional[datetime] = None) -> None:
        for _ in range(times):
            session.add(PopEvent(id=new_event_id(at), user_id=user.id, type_id=balloon_id))
        session.commit()

    return _add_pops


@pytest.fixture
def app(engine, cache):
    app = create_app(cache=cache)

    def _session_override() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
